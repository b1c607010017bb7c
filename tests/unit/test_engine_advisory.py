from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import ORIGIN, TARGET, StaticAdvisor, drain
from golfnav import telemetry
from golfnav.errors import AdvisoryUnavailable
from golfnav.models import ShotState
from golfnav.shots import ClubRequest


class _FailingAdvisor:
    def recommend(self, request: ClubRequest) -> str:
        raise AdvisoryUnavailable("caddie offline")


class _GatedAdvisor:
    """Blocks every call until released, answering with numbered clubs."""

    def __init__(self) -> None:
        self.release = threading.Event()
        self.started = threading.Event()
        self.calls = 0

    def recommend(self, request: ClubRequest) -> str:
        self.calls += 1
        call = self.calls
        self.started.set()
        assert self.release.wait(timeout=5.0)
        return f"club-{call}"


@pytest.fixture
def pool():
    executor = ThreadPoolExecutor(max_workers=1)
    yield executor
    executor.shutdown(wait=True, cancel_futures=True)


def test_recommendation_attached_to_placement(make_engine) -> None:
    advisor = StaticAdvisor("8-iron")
    engine = make_engine(advisor)

    engine.create_shot_placement(TARGET, ORIGIN, hole_number=7)

    assert engine.wait_for_recommendation(timeout=1.0)
    view = engine.get_current_placement()
    assert view.club_recommendation == "8-iron"
    [request] = advisor.requests
    assert request.hole_number == 7
    assert request.distance_m == pytest.approx(view.distance_to_target_m)


def test_recommendation_published_to_subscribers(make_engine) -> None:
    engine = make_engine(StaticAdvisor())
    queue = engine.subscribe()

    engine.create_shot_placement(TARGET, ORIGIN)

    clubs = [s.placement.club_recommendation for s in drain(queue) if s.placement]
    assert clubs[-1] == "9-iron"


def test_no_advisor_leaves_recommendation_empty(make_engine) -> None:
    engine = make_engine()

    engine.create_shot_placement(TARGET, ORIGIN)

    assert engine.wait_for_recommendation(timeout=0.1)
    assert engine.get_current_placement().club_recommendation is None


def test_failed_recommendation_keeps_placement_usable(make_engine) -> None:
    events = []
    telemetry.set_telemetry_emitter(lambda name, payload: events.append(name))
    try:
        engine = make_engine(_FailingAdvisor())

        engine.create_shot_placement(TARGET, ORIGIN)
        engine.activate()
    finally:
        telemetry.set_telemetry_emitter(None)

    assert engine.current_state == ShotState.ACTIVATED
    assert engine.get_current_placement().club_recommendation is None
    assert "shot.advisory_failed" in events


def test_result_for_cancelled_placement_is_discarded(make_engine, pool) -> None:
    advisor = _GatedAdvisor()
    engine = make_engine(advisor, executor=pool)

    engine.create_shot_placement(TARGET, ORIGIN)
    assert advisor.started.wait(timeout=5.0)
    engine.cancel()
    queue = engine.subscribe()
    drain(queue)

    advisor.release.set()
    assert engine.wait_for_recommendation(timeout=5.0)

    assert engine.current_state == ShotState.INACTIVE
    assert drain(queue) == []


def test_stale_result_does_not_leak_into_next_placement(make_engine, pool) -> None:
    advisor = _GatedAdvisor()
    engine = make_engine(advisor, executor=pool)

    engine.create_shot_placement(TARGET, ORIGIN)
    assert advisor.started.wait(timeout=5.0)
    engine.cancel()
    second = engine.create_shot_placement(TARGET, ORIGIN)

    advisor.release.set()
    assert engine.wait_for_recommendation(timeout=5.0)

    view = engine.get_current_placement()
    assert view.id == second.id
    assert view.club_recommendation == "club-2"
    assert advisor.calls == 2
