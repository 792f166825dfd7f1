from __future__ import annotations

from typing import Optional

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.core.engine.state import Cursors, SequenceState


class QuickStepper(Stepper):
    """
    Lomuto quicksort with the first element of each range as pivot.

    Recursion is replaced by an explicit LIFO stack of pending (left, right)
    ranges. A step is one of:

      - activate: pop the next range and set up pivot/boundary/scan cursors
      - compare:  a[scan] < a[pivot]; if so grow the boundary and swap scan into it
      - place:    swap the pivot onto the boundary, push sub-ranges of size >= 2

    Finished once a placement leaves the stack empty.
    """

    kind = AlgorithmType.QUICK

    def __init__(self) -> None:
        super().__init__()
        self._stack: list[tuple[int, int]] = []
        self._active: Optional[tuple[int, int]] = None
        self._pivot = 0
        self._boundary = 0
        self._scan = 0

    @property
    def pending_ranges(self) -> tuple[tuple[int, int], ...]:
        return tuple(self._stack)

    @property
    def cursors(self) -> Cursors:
        if self._active is None:
            return Cursors()
        return Cursors(current=self._scan, compare=self._pivot, partition=self._boundary)

    def _reset_control(self, n: int) -> None:
        self._stack = [(0, n - 1)] if n >= 2 else []
        self._active = None
        self._pivot = self._boundary = self._scan = 0

    def _advance(self, seq: SequenceState) -> None:
        if self._active is None:
            self._activate(seq)
            return

        left, right = self._active
        if self._scan <= right:
            self._compare(seq)
            return

        self._place(seq, left, right)

    def _activate(self, seq: SequenceState) -> None:
        left, right = self._stack.pop()
        self._active = (left, right)
        self._pivot = left
        self._boundary = left
        self._scan = left + 1
        seq.highlight(self._pivot, self._scan, self._boundary)

    def _compare(self, seq: SequenceState) -> None:
        scan = self._scan
        seq.highlight(self._pivot, scan, self._boundary)
        if seq.less(scan, self._pivot):
            self._boundary += 1
            seq.swap(self._boundary, scan)
            seq.highlight(self._pivot, scan, self._boundary)
        self._scan += 1

    def _place(self, seq: SequenceState, left: int, right: int) -> None:
        boundary = self._boundary
        seq.highlight(self._pivot, boundary)
        seq.swap(left, boundary)

        # right first so the left sub-range is popped next
        if right - (boundary + 1) >= 1:
            self._stack.append((boundary + 1, right))
        if (boundary - 1) - left >= 1:
            self._stack.append((left, boundary - 1))

        self._active = None
        if not self._stack:
            self._finished = True
