from __future__ import annotations

from threading import Lock
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from sortstep.algorithms.base import AlgorithmType
from sortstep.core.config.settings import settings
from sortstep.core.engine.assembly import EngineHandle, assemble_from_settings
from sortstep.core.engine.state import SequenceSnapshot
from sortstep.core.logging.setup import bind_context

router = APIRouter(prefix="/engine", tags=["engine"])

# Single in-process engine; the lock keeps step() and tick() from ever running concurrently
_lock = Lock()
_handle: Optional[EngineHandle] = None


def get_handle() -> EngineHandle:
    global _handle
    with _lock:
        if _handle is None:
            _handle = assemble_from_settings(settings)
            bind_context(engine_id=_handle.engine.engine_id, component="api")
        return _handle


def replace_handle(handle: Optional[EngineHandle]) -> None:
    """
    Swap the process-wide engine (None rebuilds from settings on next use).
    """
    global _handle
    with _lock:
        _handle = handle


# =========================
# Schemas
# =========================

class CursorsModel(BaseModel):
    current: int | None = None
    compare: int | None = None
    partition: int | None = None


class StateResponse(BaseModel):
    array: list[int]
    scratch: list[int]
    comparisons: int
    swaps: int
    elapsed: float
    highlights: list[int]
    cursors: CursorsModel
    algorithm: str
    algorithm_name: str
    average_complexity: str
    worst_complexity: str
    finished: bool
    speed: float
    steps: int
    paused: bool


class StepRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=100_000, description="Number of steps to issue")


class StepResponse(BaseModel):
    performed: int
    state: StateResponse


class TickRequest(BaseModel):
    ticks: int = Field(default=1, ge=1, le=10_000, description="Number of playback ticks to run")


class AlgorithmRequest(BaseModel):
    algorithm: str = Field(..., description="quick | merge | bubble | heap")
    reset: bool = Field(default=True, description="Also reset the sequence (fresh run)")


class SpeedRequest(BaseModel):
    speed: float = Field(..., gt=0)


class AlgorithmInfo(BaseModel):
    name: str
    average_complexity: str
    worst_complexity: str


class AlgorithmsResponse(BaseModel):
    algorithms: dict[str, AlgorithmInfo]


def _to_response(handle: EngineHandle) -> StateResponse:
    snap: SequenceSnapshot = handle.engine.get_state()
    return StateResponse(
        array=list(snap.array),
        scratch=list(snap.scratch),
        comparisons=snap.comparisons,
        swaps=snap.swaps,
        elapsed=snap.elapsed,
        highlights=list(snap.highlights),
        cursors=CursorsModel(
            current=snap.cursors.current,
            compare=snap.cursors.compare,
            partition=snap.cursors.partition,
        ),
        algorithm=snap.algorithm,
        algorithm_name=snap.algorithm_name,
        average_complexity=snap.average_complexity,
        worst_complexity=snap.worst_complexity,
        finished=snap.finished,
        speed=snap.speed,
        steps=snap.steps,
        paused=handle.playback.paused,
    )


# =========================
# Routes
# =========================

@router.get("/algorithms", response_model=AlgorithmsResponse)
def list_algorithms() -> AlgorithmsResponse:
    return AlgorithmsResponse(
        algorithms={
            a.value: AlgorithmInfo(
                name=a.display_name,
                average_complexity=a.average_complexity,
                worst_complexity=a.worst_complexity,
            )
            for a in AlgorithmType
        }
    )


@router.get("/state", response_model=StateResponse)
def get_state() -> StateResponse:
    handle = get_handle()
    with _lock:
        return _to_response(handle)


@router.post("/reset", response_model=StateResponse)
def reset() -> StateResponse:
    handle = get_handle()
    with _lock:
        handle.engine.reset()
        return _to_response(handle)


@router.post("/shuffle", response_model=StateResponse)
def shuffle() -> StateResponse:
    handle = get_handle()
    with _lock:
        handle.engine.shuffle()
        return _to_response(handle)


@router.post("/step", response_model=StepResponse)
def step(payload: StepRequest | None = None) -> StepResponse:
    count = payload.count if payload is not None else 1
    handle = get_handle()
    with _lock:
        performed = handle.engine.run_to_completion(max_steps=count)
        return StepResponse(performed=performed, state=_to_response(handle))


@router.post("/play", response_model=StateResponse)
def play() -> StateResponse:
    handle = get_handle()
    with _lock:
        handle.playback.play()
        return _to_response(handle)


@router.post("/pause", response_model=StateResponse)
def pause() -> StateResponse:
    handle = get_handle()
    with _lock:
        handle.playback.pause()
        return _to_response(handle)


@router.post("/tick", response_model=StepResponse)
def tick(payload: TickRequest | None = None) -> StepResponse:
    """
    Advance playback by whole ticks; steps issued follow the speed setting.
    """
    ticks = payload.ticks if payload is not None else 1
    handle = get_handle()
    with _lock:
        performed = 0
        for _ in range(ticks):
            if handle.playback.paused:
                break
            performed += handle.playback.tick()
        return StepResponse(performed=performed, state=_to_response(handle))


@router.post("/algorithm", response_model=StateResponse)
def set_algorithm(payload: AlgorithmRequest) -> StateResponse:
    try:
        kind = AlgorithmType.parse(payload.algorithm)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    handle = get_handle()
    with _lock:
        handle.engine.set_algorithm(kind)
        if payload.reset:
            handle.engine.reset()
        return _to_response(handle)


@router.post("/speed", response_model=StateResponse)
def set_speed(payload: SpeedRequest) -> StateResponse:
    handle = get_handle()
    with _lock:
        handle.engine.set_speed(payload.speed)
        return _to_response(handle)
