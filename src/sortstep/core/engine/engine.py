from __future__ import annotations

import random
import secrets
import time
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.algorithms.registry import build_stepper
from sortstep.core.config.settings import AppSettings
from sortstep.core.engine.state import SequenceSnapshot, SequenceState
from sortstep.core.events.base import Event
from sortstep.core.events.bus import EventBus
from sortstep.core.events.engine import (
    AlgorithmSelected,
    RunFinished,
    SequenceLoaded,
    SequenceReset,
    SequenceShuffled,
    StepCompleted,
)

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class SpeedBounds:
    """
    Allowed range for the playback speed hint.
    """

    minimum: float = 0.1
    maximum: float = 5.0

    def __post_init__(self) -> None:
        if self.minimum <= 0 or self.maximum <= 0:
            raise ValueError("speed bounds must be > 0")
        if self.minimum > self.maximum:
            raise ValueError("speed minimum must be <= maximum")

    def clamp(self, value: float) -> float:
        return min(max(float(value), self.minimum), self.maximum)


class SortEngine:
    """
    Incremental sorting engine.

    Owns the sequence, its metrics and exactly one active stepper. Callers
    drive it one primitive operation at a time with step() and read an
    immutable snapshot back with get_state().

    Not thread-safe: one driving caller, step() is never re-entrant.
    """

    def __init__(
        self,
        size: int = 100,
        *,
        algorithm: AlgorithmType | str = AlgorithmType.QUICK,
        seed: Optional[int] = None,
        speed: float = 1.0,
        speed_bounds: Optional[SpeedBounds] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        if size < 0:
            raise ValueError("size must be >= 0")

        self._engine_id = secrets.token_hex(4)
        self._bus = bus
        self._sequence = 0
        self._steps = 0

        self._bounds = speed_bounds or SpeedBounds()
        self._speed = self._bounds.clamp(speed)

        self._seq = SequenceState(size=size, rng=random.Random(seed))
        self._seq.reset()

        self._algorithm = AlgorithmType.parse(algorithm)
        self._stepper: Stepper = build_stepper(self._algorithm)
        self._stepper.initialize(self._seq)

        log.info(
            "engine.created",
            engine_id=self._engine_id,
            size=size,
            algorithm=self._algorithm.value,
            seed=seed,
        )

    @classmethod
    def from_settings(cls, app_settings: AppSettings, *, bus: Optional[EventBus] = None) -> "SortEngine":
        return cls(
            app_settings.default_size,
            algorithm=app_settings.default_algorithm,
            seed=app_settings.default_seed,
            speed=app_settings.default_speed,
            speed_bounds=SpeedBounds(minimum=app_settings.min_speed, maximum=app_settings.max_speed),
            bus=bus,
        )

    # ---------------- Read side ----------------

    @property
    def engine_id(self) -> str:
        return self._engine_id

    @property
    def size(self) -> int:
        return len(self._seq)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def speed_bounds(self) -> SpeedBounds:
        return self._bounds

    @property
    def steps_taken(self) -> int:
        return self._steps

    @property
    def current_index(self) -> Optional[int]:
        return self._stepper.cursors.current

    @property
    def compare_index(self) -> Optional[int]:
        return self._stepper.cursors.compare

    @property
    def partition_index(self) -> Optional[int]:
        return self._stepper.cursors.partition

    def is_finished(self) -> bool:
        return self._stepper.finished

    def get_algorithm_type(self) -> AlgorithmType:
        return self._algorithm

    def get_algorithm_name(self) -> str:
        return self._algorithm.display_name

    def get_state(self) -> SequenceSnapshot:
        seq = self._seq
        return SequenceSnapshot(
            array=tuple(seq.values),
            scratch=tuple(seq.scratch),
            metrics=seq.metrics(),
            highlights=seq.highlights,
            cursors=self._stepper.cursors,
            algorithm=self._algorithm.value,
            algorithm_name=self._algorithm.display_name,
            average_complexity=self._algorithm.average_complexity,
            worst_complexity=self._algorithm.worst_complexity,
            finished=self._stepper.finished,
            speed=self._speed,
            steps=self._steps,
        )

    # ---------------- Commands ----------------

    def reset(self) -> None:
        """
        Identity permutation, zeroed metrics, then reshuffle.
        The selected algorithm is kept and its control state rebuilt.
        """
        self._seq.reset()
        self._steps = 0
        self._stepper.initialize(self._seq)
        self._publish(SequenceReset, size=len(self._seq))
        log.info("engine.reset", engine_id=self._engine_id, size=len(self._seq))

    def shuffle(self) -> None:
        """
        Reshuffle the current contents, keeping metrics.
        """
        self._seq.shuffle()
        self._seq.highlights = ()
        self._stepper.initialize(self._seq)
        self._publish(SequenceShuffled, size=len(self._seq))
        log.info("engine.shuffled", engine_id=self._engine_id)

    def load(self, values: Iterable[int]) -> None:
        """
        Replace the sequence with an explicit arrangement (no shuffle).

        Metrics are zeroed and the active stepper re-initialized.
        """
        self._seq.seed(values)
        self._steps = 0
        self._stepper.initialize(self._seq)
        self._publish(SequenceLoaded, size=len(self._seq))
        log.info("engine.loaded", engine_id=self._engine_id, size=len(self._seq))

    def set_algorithm(self, algorithm: AlgorithmType | str) -> None:
        """
        Discard the current stepper and start the requested one against the
        current contents. Selecting the active algorithm again restarts it.
        """
        kind = AlgorithmType.parse(algorithm)
        self._algorithm = kind
        self._stepper = build_stepper(kind)
        self._stepper.initialize(self._seq)
        self._publish(AlgorithmSelected, algorithm=kind.value)
        log.info("engine.algorithm_selected", engine_id=self._engine_id, algorithm=kind.value)

    def set_speed(self, value: float) -> float:
        self._speed = self._bounds.clamp(value)
        log.debug("engine.speed", engine_id=self._engine_id, requested=value, speed=self._speed)
        return self._speed

    def step(self) -> bool:
        """
        Perform one primitive operation. Returns False once finished.
        """
        if self._stepper.finished:
            return False

        started = time.perf_counter()
        progressed = self._stepper.step(self._seq)
        self._seq.add_elapsed(time.perf_counter() - started)

        if not progressed:
            return False

        self._steps += 1
        seq = self._seq
        self._publish(
            StepCompleted,
            step=self._steps,
            comparisons=seq.comparisons,
            swaps=seq.swaps,
            highlights=seq.highlights,
        )

        if self._stepper.finished:
            self._publish(
                RunFinished,
                algorithm=self._algorithm.value,
                steps=self._steps,
                comparisons=seq.comparisons,
                swaps=seq.swaps,
                elapsed=seq.elapsed,
            )
            log.info(
                "engine.finished",
                engine_id=self._engine_id,
                algorithm=self._algorithm.value,
                steps=self._steps,
                comparisons=seq.comparisons,
                swaps=seq.swaps,
            )

        return True

    def run_to_completion(self, *, max_steps: Optional[int] = None) -> int:
        """
        Step until finished (or max_steps reached). Returns steps taken.
        """
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be >= 0")

        taken = 0
        while not self._stepper.finished:
            if max_steps is not None and taken >= max_steps:
                break
            if not self.step():
                break
            taken += 1
        return taken

    # ---------------- Internals ----------------

    def _publish(self, event_cls: type[Event], **fields: object) -> None:
        if self._bus is None:
            return
        self._sequence += 1
        self._bus.publish(
            event_cls.create(
                engine_id=self._engine_id,
                sequence=self._sequence,
                **fields,
            )
        )
