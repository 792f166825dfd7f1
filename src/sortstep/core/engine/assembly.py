from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from sortstep.algorithms.base import AlgorithmType
from sortstep.core.config.settings import AppSettings
from sortstep.core.engine.engine import SortEngine, SpeedBounds
from sortstep.core.engine.playback import PlaybackDriver
from sortstep.core.engine.router import EngineListener, EngineRouter, RouterWiring
from sortstep.core.events.bus import EventBus

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class EngineHandle:
    """
    An engine plus everything wired to its bus in this process.
    """

    engine: SortEngine
    bus: EventBus
    playback: PlaybackDriver
    wiring: RouterWiring


def assemble(
    size: int = 100,
    *,
    algorithm: AlgorithmType | str = AlgorithmType.QUICK,
    seed: Optional[int] = None,
    speed: float = 1.0,
    speed_bounds: Optional[SpeedBounds] = None,
    extra_listeners: Iterable[EngineListener] = (),
) -> EngineHandle:
    bus = EventBus()
    engine = SortEngine(
        size,
        algorithm=algorithm,
        seed=seed,
        speed=speed,
        speed_bounds=speed_bounds,
        bus=bus,
    )
    return _wire(engine, bus, extra_listeners)


def assemble_from_settings(
    app_settings: AppSettings,
    *,
    extra_listeners: Iterable[EngineListener] = (),
) -> EngineHandle:
    bus = EventBus()
    engine = SortEngine.from_settings(app_settings, bus=bus)
    return _wire(engine, bus, extra_listeners)


def _wire(engine: SortEngine, bus: EventBus, extra_listeners: Iterable[EngineListener]) -> EngineHandle:
    playback = PlaybackDriver(engine=engine)

    # playback first: it must drop stale credit before anyone else reacts
    listeners: list[EngineListener] = [playback, *extra_listeners]
    wiring = EngineRouter(bus=bus).register(listeners)

    log.info(
        "engine.assembled",
        engine_id=engine.engine_id,
        size=engine.size,
        algorithm=engine.get_algorithm_type().value,
        listeners=[type(x).__name__ for x in listeners],
    )
    return EngineHandle(engine=engine, bus=bus, playback=playback, wiring=wiring)
