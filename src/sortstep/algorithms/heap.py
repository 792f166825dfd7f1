from __future__ import annotations

from typing import Literal, Optional

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.core.engine.state import Cursors, SequenceState

Action = Literal["compare", "swap", "extract"]


class HeapStepper(Stepper):
    """
    Max-heap sort driven as an explicit sift-down state machine.

    Phase 1 builds the heap by sifting every internal node, last one first.
    Phase 2 repeatedly swaps the root with the last heap slot, shrinks the
    boundary and sifts the new root.

    While sifting node `root`, `largest` tracks the biggest of root and the
    children compared so far and `next_child` is the next one to compare. Control
    transitions that do no work (a sift ending, moving to the next internal
    node) are settled eagerly, so every step is one comparison or one swap.
    """

    kind = AlgorithmType.HEAP

    def __init__(self) -> None:
        super().__init__()
        self._end = 0
        self._start = -1
        self._root: Optional[int] = None
        self._largest = 0
        self._next_child = 0
        self._pending: Optional[Action] = None

    @property
    def heap_end(self) -> int:
        return self._end

    @property
    def cursors(self) -> Cursors:
        if self._finished:
            return Cursors()
        if self._pending == "extract":
            return Cursors(current=0, compare=self._end - 1, partition=self._end)
        if self._pending == "compare":
            return Cursors(current=self._root, compare=self._next_child, partition=self._end)
        return Cursors(current=self._root, compare=self._largest, partition=self._end)

    def _reset_control(self, n: int) -> None:
        self._end = n
        self._start = n // 2 - 1
        self._root = None
        self._pending = None
        if n >= 2:
            self._settle()

    def _sift_from(self, node: int) -> None:
        self._root = node
        self._largest = node
        self._next_child = 2 * node + 1

    def _settle(self) -> None:
        while True:
            if self._root is not None:
                last_child = 2 * self._root + 2
                if self._next_child < self._end and self._next_child <= last_child:
                    self._pending = "compare"
                    return
                if self._largest != self._root:
                    self._pending = "swap"
                    return
                self._root = None

            if self._start >= 0:
                self._sift_from(self._start)
                self._start -= 1
                continue

            if self._end > 1:
                self._pending = "extract"
                return

            self._pending = None
            self._finished = True
            return

    def _advance(self, seq: SequenceState) -> None:
        action = self._pending

        if action == "compare":
            seq.highlight(self._largest, self._next_child)
            if seq.greater(self._next_child, self._largest):
                self._largest = self._next_child
            self._next_child += 1

        elif action == "swap":
            root, child = self._root, self._largest
            seq.highlight(root, child)
            seq.swap(root, child)
            self._sift_from(child)

        elif action == "extract":
            last = self._end - 1
            seq.highlight(0, last)
            seq.swap(0, last)
            self._end = last
            self._sift_from(0)

        self._settle()
