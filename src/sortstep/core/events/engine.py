from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sortstep.core.events.base import Event


@dataclass(frozen=True, slots=True)
class SequenceReset(Event):
    """
    Emitted after reset(): identity permutation, zeroed metrics, reshuffled.
    """

    event_type: ClassVar[str] = "engine.reset"

    engine_id: str
    size: int


@dataclass(frozen=True, slots=True)
class SequenceShuffled(Event):
    """
    Emitted after shuffle(). Metrics are carried over.
    """

    event_type: ClassVar[str] = "engine.shuffled"

    engine_id: str
    size: int


@dataclass(frozen=True, slots=True)
class AlgorithmSelected(Event):
    event_type: ClassVar[str] = "engine.algorithm_selected"

    engine_id: str
    algorithm: str


@dataclass(frozen=True, slots=True)
class StepCompleted(Event):
    """
    Emitted for every step() that performed a primitive operation.
    """

    event_type: ClassVar[str] = "engine.step"

    engine_id: str
    step: int
    comparisons: int
    swaps: int
    highlights: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class RunFinished(Event):
    event_type: ClassVar[str] = "engine.finished"

    engine_id: str
    algorithm: str
    steps: int
    comparisons: int
    swaps: int
    elapsed: float


@dataclass(frozen=True, slots=True)
class SequenceLoaded(Event):
    """
    Emitted after load(): explicit arrangement installed, metrics zeroed.
    """

    event_type: ClassVar[str] = "engine.loaded"

    engine_id: str
    size: int


ENGINE_EVENTS: tuple[type[Event], ...] = (
    SequenceReset,
    SequenceShuffled,
    SequenceLoaded,
    AlgorithmSelected,
    StepCompleted,
    RunFinished,
)

ENGINE_EVENT_TYPES: frozenset[str] = frozenset(cls.event_type for cls in ENGINE_EVENTS)
