from __future__ import annotations

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.core.engine.state import Cursors, SequenceState


class BubbleStepper(Stepper):
    """
    Adjacent compare-and-swap, one pair per step.

    The inner bound shrinks by one after every pass. There is no early exit:
    a run always makes n-1 passes, i.e. n*(n-1)/2 comparisons.
    """

    kind = AlgorithmType.BUBBLE

    def __init__(self) -> None:
        super().__init__()
        self._n = 0
        self._pass = 0
        self._inner = 0

    @property
    def cursors(self) -> Cursors:
        if self._n < 2 or self._finished:
            return Cursors()
        return Cursors(
            current=self._inner,
            compare=self._inner + 1,
            partition=self._n - self._pass,
        )

    def _reset_control(self, n: int) -> None:
        self._n = n
        self._pass = 0
        self._inner = 0

    def _advance(self, seq: SequenceState) -> None:
        j = self._inner
        seq.highlight(j, j + 1)
        if seq.greater(j, j + 1):
            seq.swap(j, j + 1)

        self._inner += 1
        if self._inner >= self._n - self._pass - 1:
            self._inner = 0
            self._pass += 1
            if self._pass >= self._n - 1:
                self._finished = True
