from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence


@dataclass(frozen=True, slots=True)
class Metrics:
    comparisons: int = 0
    swaps: int = 0
    elapsed: float = 0.0


@dataclass(frozen=True, slots=True)
class Cursors:
    """
    Stepper-specific positions for display only.

    Meaning per algorithm:
      - bubble: current = inner cursor, compare = its neighbour, partition = sorted-tail start
      - quick: current = scan index, compare = pivot, partition = boundary
      - merge: current = left run cursor, compare = right run cursor, partition = run start
      - heap: current = sift node, compare = child being compared, partition = heap boundary
    """

    current: Optional[int] = None
    compare: Optional[int] = None
    partition: Optional[int] = None


@dataclass(frozen=True, slots=True)
class SequenceSnapshot:
    """
    Read-only view handed to the visualizer.
    """

    array: tuple[int, ...]
    scratch: tuple[int, ...]
    metrics: Metrics
    highlights: tuple[int, ...]
    cursors: Cursors
    algorithm: str
    algorithm_name: str
    average_complexity: str
    worst_complexity: str
    finished: bool
    speed: float
    steps: int

    @property
    def comparisons(self) -> int:
        return self.metrics.comparisons

    @property
    def swaps(self) -> int:
        return self.metrics.swaps

    @property
    def elapsed(self) -> float:
        return self.metrics.elapsed


@dataclass(slots=True)
class SequenceState:
    """
    Working array plus rolling metrics and the current highlight set.

    Invariants:
      - the multiset of values never changes between reset/shuffle/seed calls
        (every mutator is a permutation of existing values)
      - comparisons/swaps only grow within a run; reset() and seed() zero them
      - highlights describe the most recent step only (overwritten, never merged)
    """

    size: int
    rng: random.Random = field(default_factory=random.Random)
    values: list[int] = field(init=False)
    scratch: list[int] = field(init=False, default_factory=list)
    comparisons: int = field(init=False, default=0)
    swaps: int = field(init=False, default=0)
    elapsed: float = field(init=False, default=0.0)
    highlights: tuple[int, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("size must be >= 0")
        self.values = list(range(self.size))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    # ---------------- Lifecycle ----------------

    def reset(self) -> None:
        self.values = list(range(self.size))
        self.scratch = []
        self.comparisons = 0
        self.swaps = 0
        self.elapsed = 0.0
        self.highlights = ()
        self.shuffle()

    def shuffle(self) -> None:
        # Fisher-Yates on the owned RNG; metrics are left alone
        values = self.values
        for i in range(len(values) - 1, 0, -1):
            j = self.rng.randint(0, i)
            values[i], values[j] = values[j], values[i]

    def seed(self, values: Iterable[int]) -> None:
        """
        Install an explicit arrangement (deterministic scenarios, replays).

        Zeroes metrics like reset() but does not shuffle.
        """
        items = list(values)
        if any(isinstance(v, bool) or not isinstance(v, int) for v in items):
            raise ValueError("values must be integers")
        if len(set(items)) != len(items):
            raise ValueError("values must be distinct")
        self.values = items
        self.size = len(items)
        self.scratch = []
        self.comparisons = 0
        self.swaps = 0
        self.elapsed = 0.0
        self.highlights = ()

    # ---------------- Primitives (steppers only) ----------------

    def highlight(self, *indices: int) -> None:
        # ordered, de-duplicated
        self.highlights = tuple(dict.fromkeys(indices))

    def greater(self, i: int, j: int) -> bool:
        self.comparisons += 1
        return self.values[i] > self.values[j]

    def less(self, i: int, j: int) -> bool:
        self.comparisons += 1
        return self.values[i] < self.values[j]

    def swap(self, i: int, j: int) -> None:
        if i == j:
            return
        values = self.values
        values[i], values[j] = values[j], values[i]
        self.swaps += 1

    def write_run(self, lo: int, run: Sequence[int]) -> int:
        """
        Replace values[lo:lo+len(run)] with a permutation of itself in one go.

        Counts every position whose value changed as one move (added to swaps).
        """
        hi = lo + len(run)
        current = self.values[lo:hi]
        if len(current) != len(run) or Counter(current) != Counter(run):
            raise ValueError("run must be a permutation of the slice it replaces")
        moved = sum(1 for old, new in zip(current, run) if old != new)
        self.values[lo:hi] = run
        self.swaps += moved
        return moved

    def add_elapsed(self, seconds: float) -> None:
        if seconds > 0:
            self.elapsed += seconds

    def metrics(self) -> Metrics:
        return Metrics(comparisons=self.comparisons, swaps=self.swaps, elapsed=self.elapsed)
