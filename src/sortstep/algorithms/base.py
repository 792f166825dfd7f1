from __future__ import annotations

from enum import Enum

from sortstep.core.engine.state import Cursors, SequenceState


class AlgorithmType(str, Enum):
    """
    Closed set of supported algorithms. Declaration order is the selection order
    exposed to callers; the first member is the engine default.
    """

    QUICK = "quick"
    MERGE = "merge"
    BUBBLE = "bubble"
    HEAP = "heap"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def average_complexity(self) -> str:
        return _COMPLEXITY[self][0]

    @property
    def worst_complexity(self) -> str:
        return _COMPLEXITY[self][1]

    @classmethod
    def parse(cls, value: "AlgorithmType | str") -> "AlgorithmType":
        if isinstance(value, AlgorithmType):
            return value
        key = str(value).strip().lower().replace(" sort", "").replace("_sort", "")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown algorithm: {value!r}") from None


_DISPLAY_NAMES = {
    AlgorithmType.QUICK: "Quick Sort",
    AlgorithmType.MERGE: "Merge Sort",
    AlgorithmType.BUBBLE: "Bubble Sort",
    AlgorithmType.HEAP: "Heap Sort",
}

# (average, worst) time complexity
_COMPLEXITY = {
    AlgorithmType.QUICK: ("O(n log n)", "O(n²)"),
    AlgorithmType.MERGE: ("O(n log n)", "O(n log n)"),
    AlgorithmType.BUBBLE: ("O(n²)", "O(n²)"),
    AlgorithmType.HEAP: ("O(n log n)", "O(n log n)"),
}


class Stepper:
    """
    Resumable sorting algorithm.

    Contract:
      - initialize(seq) derives control state from the current sequence
      - step(seq) performs exactly one primitive operation and returns True,
        or returns False without touching seq once finished
      - finished flips inside the step that performs the last operation

    A stepper that was never initialized behaves as finished.
    """

    kind: AlgorithmType

    def __init__(self) -> None:
        self._initialized = False
        self._finished = True

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def cursors(self) -> Cursors:
        return Cursors()

    def initialize(self, seq: SequenceState) -> None:
        self._initialized = True
        self._finished = len(seq) < 2
        seq.scratch = []
        self._reset_control(len(seq))

    def step(self, seq: SequenceState) -> bool:
        if not self._initialized or self._finished:
            return False
        self._advance(seq)
        return True

    # ---------------- Variant hooks ----------------

    def _reset_control(self, n: int) -> None:
        raise NotImplementedError

    def _advance(self, seq: SequenceState) -> None:
        raise NotImplementedError
