from __future__ import annotations

import pytest

from sortstep.algorithms.base import AlgorithmType
from sortstep.core.engine.engine import SortEngine

SIZES = [0, 1, 2, 3, 4, 7, 16, 31, 100, 257, 1000]


@pytest.mark.parametrize("kind", list(AlgorithmType))
@pytest.mark.parametrize("size", SIZES)
def test_every_algorithm_sorts_every_size(kind: AlgorithmType, size: int) -> None:
    engine = SortEngine(size, algorithm=kind, seed=size)
    before = engine.get_state().array

    steps = engine.run_to_completion()

    state = engine.get_state()
    assert state.finished is True
    assert all(state.array[i] < state.array[i + 1] for i in range(size - 1))
    assert sorted(before) == list(state.array)
    assert state.steps == steps
    if size < 2:
        assert steps == 0
        assert (state.comparisons, state.swaps) == (0, 0)


@pytest.mark.parametrize("kind", list(AlgorithmType))
def test_interleaved_reads_do_not_change_the_result(kind: AlgorithmType) -> None:
    straight = SortEngine(60, algorithm=kind, seed=21)
    paused = SortEngine(60, algorithm=kind, seed=21)

    straight.run_to_completion()

    # pause/resume is just not calling step(); reading state in between is harmless
    while not paused.is_finished():
        paused.get_state()
        _ = (paused.current_index, paused.compare_index, paused.partition_index)
        paused.step()

    a, b = straight.get_state(), paused.get_state()
    assert a.array == b.array
    assert (a.comparisons, a.swaps, a.steps) == (b.comparisons, b.swaps, b.steps)


def test_switching_through_every_algorithm_mid_run() -> None:
    engine = SortEngine(64, seed=13)
    for kind in AlgorithmType:
        engine.set_algorithm(kind)
        engine.run_to_completion(max_steps=25)
        assert sorted(engine.get_state().array) == list(range(64))

    engine.set_algorithm(AlgorithmType.HEAP)
    engine.run_to_completion()
    assert list(engine.get_state().array) == list(range(64))
