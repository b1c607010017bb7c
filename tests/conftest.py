"""Shared pytest fixtures for golfnav tests."""

from __future__ import annotations

from typing import Callable, Iterator, List

import pytest

from golfnav.config import EngineSettings, reset_settings_cache
from golfnav.geo import destination_point
from golfnav.models import Coordinate
from golfnav.shots import ShotPlacementEngine

ORIGIN = Coordinate(latitude=55.0209, longitude=-7.2479, accuracy_m=4.0, captured_at_ms=1_000)
TARGET = Coordinate(latitude=55.0215, longitude=-7.2470, captured_at_ms=1_000)


class ManualClock:
    """Monotonic clock advanced explicitly by tests."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class ImmediateExecutor:
    """Runs submitted work inline so recommendation results are deterministic."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        from concurrent.futures import Future

        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        return None


class StaticAdvisor:
    def __init__(self, club: str = "9-iron") -> None:
        self.club = club
        self.requests: List[object] = []

    def recommend(self, request) -> str:
        self.requests.append(request)
        return self.club


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(
        movement_threshold_m=10.0,
        settle_delay_s=2.0,
        coalesce_interval_s=0.25,
    )


@pytest.fixture
def make_engine(clock: ManualClock, settings: EngineSettings) -> Iterator[Callable[..., ShotPlacementEngine]]:
    engines: List[ShotPlacementEngine] = []

    def factory(advisor=None, **overrides) -> ShotPlacementEngine:
        engine_settings = overrides.pop("settings", settings)
        executor = overrides.pop("executor", ImmediateExecutor())
        engine = ShotPlacementEngine(
            advisor,
            settings=engine_settings,
            clock=clock,
            executor=executor,
            **overrides,
        )
        engines.append(engine)
        return engine

    yield factory
    for engine in engines:
        engine.shutdown()


def fix_at(
    origin: Coordinate,
    meters: float,
    *,
    bearing: float = 90.0,
    captured_at_ms: int,
    accuracy_m: float | None = 4.0,
) -> Coordinate:
    point = destination_point(origin, bearing, meters, captured_at_ms=captured_at_ms)
    return Coordinate(
        latitude=point.latitude,
        longitude=point.longitude,
        accuracy_m=accuracy_m,
        captured_at_ms=captured_at_ms,
    )


def drain(queue) -> list:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items
