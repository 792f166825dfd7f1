from __future__ import annotations

from typing import Callable

from sortstep.algorithms.base import AlgorithmType, Stepper
from sortstep.algorithms.bubble import BubbleStepper
from sortstep.algorithms.heap import HeapStepper
from sortstep.algorithms.merge import MergeStepper
from sortstep.algorithms.quick import QuickStepper

# Exhaustive: every AlgorithmType member must appear here
_FACTORIES: dict[AlgorithmType, Callable[[], Stepper]] = {
    AlgorithmType.QUICK: QuickStepper,
    AlgorithmType.MERGE: MergeStepper,
    AlgorithmType.BUBBLE: BubbleStepper,
    AlgorithmType.HEAP: HeapStepper,
}


def build_stepper(kind: AlgorithmType | str) -> Stepper:
    """
    Build an uninitialized stepper for the given algorithm.
    """
    algorithm = AlgorithmType.parse(kind)
    factory = _FACTORIES.get(algorithm)
    if factory is None:
        raise RuntimeError(f"no stepper registered for {algorithm.value}")
    return factory()