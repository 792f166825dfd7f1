from __future__ import annotations

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.core.engine.state import Cursors, SequenceState


class MergeStepper(Stepper):
    """
    Bottom-up merge sort.

    Runs of `width` are merged pairwise left to right, then width doubles.
    The pair being merged is [lo, mid) + [mid, hi); its merged output grows
    in the sequence's scratch buffer. One step is one of:

      - compare the run heads and move the smaller into scratch
      - move a leftover element into scratch (one run exhausted)
      - copy the full scratch run back over [lo, hi)

    A pair with no right run is already merged and is skipped without a step.
    """

    kind = AlgorithmType.MERGE

    def __init__(self) -> None:
        super().__init__()
        self._n = 0
        self._width = 1
        self._lo = 0
        self._mid = 0
        self._hi = 0
        self._i = 0
        self._j = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def cursors(self) -> Cursors:
        if self._finished:
            return Cursors()
        return Cursors(current=self._i, compare=self._j, partition=self._lo)

    def _reset_control(self, n: int) -> None:
        self._n = n
        self._width = 1
        if n >= 2:
            self._seek(0)

    def _seek(self, lo: int) -> bool:
        while lo + self._width >= self._n:
            self._width *= 2
            lo = 0
            if self._width >= self._n:
                return False

        self._lo = lo
        self._mid = lo + self._width
        self._hi = min(lo + 2 * self._width, self._n)
        self._i = self._lo
        self._j = self._mid
        return True

    def _advance(self, seq: SequenceState) -> None:
        i, j, mid, hi = self._i, self._j, self._mid, self._hi

        if i < mid and j < hi:
            seq.highlight(i, j)
            if seq.greater(i, j):
                seq.scratch.append(seq[j])
                self._j += 1
            else:
                seq.scratch.append(seq[i])
                self._i += 1
            return

        if i < mid:
            seq.highlight(i)
            seq.scratch.append(seq[i])
            self._i += 1
            return

        if j < hi:
            seq.highlight(j)
            seq.scratch.append(seq[j])
            self._j += 1
            return

        seq.highlight(self._lo, hi - 1)
        seq.write_run(self._lo, seq.scratch)
        seq.scratch = []
        if not self._seek(self._lo + 2 * self._width):
            self._finished = True
