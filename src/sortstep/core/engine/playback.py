from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import structlog

from sortstep.core.engine.engine import SortEngine
from sortstep.core.events.base import Event
from sortstep.core.events.bus import EventHandler

log = structlog.get_logger()


@dataclass(slots=True)
class PlaybackDriver:
    """
    Scheduler side of automatic stepping.

    Each tick() adds engine.speed credits and issues one step per whole
    credit, so speed 0.5 steps every other tick and speed 3.0 steps three
    times per tick. Speed never changes what a step does, only how many
    are issued.

    Pausing is purely a decision not to issue steps. Subscribes to
    engine.reset, engine.shuffled, engine.algorithm_selected and
    engine.loaded to drop leftover credit from the previous run.

    Credit never carries more than one pending step into the next tick, so
    a speed above max_steps_per_tick cannot build a backlog.
    """

    engine: SortEngine
    paused: bool = True
    max_steps_per_tick: int = 64
    _credit: float = field(default=0.0, init=False)

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        return [
            ("engine.reset", self._on_restart),
            ("engine.shuffled", self._on_restart),
            ("engine.algorithm_selected", self._on_restart),
            ("engine.loaded", self._on_restart),
        ]

    @property
    def credit(self) -> float:
        return self._credit

    def play(self) -> None:
        self.paused = False

    def pause(self) -> None:
        self.paused = True

    def tick(self) -> int:
        """
        Advance the engine according to the speed hint. Returns steps issued.
        """
        if self.paused or self.engine.is_finished():
            return 0

        self._credit += self.engine.speed
        budget = min(int(self._credit), self.max_steps_per_tick)
        # only the fractional part carries over; credit above the cap is dropped
        self._credit = (self._credit - budget) % 1.0

        issued = 0
        for _ in range(budget):
            if not self.engine.step():
                break
            issued += 1

        if self.engine.is_finished():
            self._credit = 0.0
            self.paused = True
            log.debug("playback.finished", engine_id=self.engine.engine_id)

        return issued

    def single_step(self) -> bool:
        """
        Step mode: exactly one step regardless of speed or pause state.
        """
        return self.engine.step()

    def _on_restart(self, e: Event) -> None:
        self._credit = 0.0
