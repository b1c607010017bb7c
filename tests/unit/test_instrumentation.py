from __future__ import annotations

import pytest

from conftest import ORIGIN, TARGET
from golfnav import telemetry
from golfnav.metrics import REGISTRY


def _sample(name: str, **labels: str) -> float:
    value = REGISTRY.get_sample_value(name, labels)
    return 0.0 if value is None else value


@pytest.fixture
def events():
    captured = []
    telemetry.set_telemetry_emitter(lambda name, payload: captured.append((name, payload)))
    yield captured
    telemetry.set_telemetry_emitter(None)


def test_lifecycle_emits_telemetry(make_engine, events) -> None:
    engine = make_engine()

    view = engine.create_shot_placement(TARGET, ORIGIN, hole_number=9)
    engine.activate()
    engine.cancel()

    names = [name for name, _ in events]
    assert names == ["shot.placed", "shot.activated", "shot.cancelled"]
    placed = events[0][1]
    assert placed["shotId"] == view.id
    assert placed["hole"] == 9
    assert placed["distanceM"] == pytest.approx(view.distance_to_target_m, abs=0.05)
    assert events[2][1]["state"] == "activated"


def test_broken_emitter_does_not_break_engine(make_engine) -> None:
    def explode(name, payload):
        raise RuntimeError("sink down")

    telemetry.set_telemetry_emitter(explode)
    try:
        engine = make_engine()
        engine.create_shot_placement(TARGET, ORIGIN)
    finally:
        telemetry.set_telemetry_emitter(None)

    assert engine.get_current_placement() is not None


def test_non_callable_emitter_is_ignored() -> None:
    telemetry.set_telemetry_emitter("nope")  # type: ignore[arg-type]

    telemetry.record_shot_activated("abc")


def test_transition_counters(make_engine) -> None:
    before_placed = _sample("golfnav_shot_transitions_total", state="placed")
    before_inactive = _sample("golfnav_shot_transitions_total", state="inactive")
    engine = make_engine()

    engine.create_shot_placement(TARGET, ORIGIN)
    engine.cancel()

    assert _sample("golfnav_shot_transitions_total", state="placed") == before_placed + 1
    assert _sample("golfnav_shot_transitions_total", state="inactive") == before_inactive + 1


def test_idle_location_updates_are_counted(make_engine) -> None:
    before = _sample("golfnav_location_updates_total", outcome="idle")
    engine = make_engine()

    engine.on_location_update(ORIGIN)

    assert _sample("golfnav_location_updates_total", outcome="idle") == before + 1
