from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import ORIGIN, TARGET, StaticAdvisor, fix_at
from golfnav.api import app
from golfnav.api.deps import get_engine


def _point(coordinate) -> dict:
    payload = {"lat": coordinate.latitude, "lon": coordinate.longitude}
    if coordinate.accuracy_m is not None:
        payload["accuracyM"] = coordinate.accuracy_m
    payload["capturedAtMs"] = coordinate.captured_at_ms
    return payload


@pytest.fixture
def shots_client(make_engine, clock):
    engine = make_engine(StaticAdvisor("PW"))
    app.dependency_overrides[get_engine] = lambda: engine
    client = TestClient(app)

    yield client, engine, clock

    app.dependency_overrides.pop(get_engine, None)


def test_create_activate_and_complete(shots_client) -> None:
    client, engine, clock = shots_client

    created = client.post(
        "/api/shots",
        json={"target": _point(TARGET), "position": _point(ORIGIN), "holeNumber": 2},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["state"] == "placed"
    assert body["holeNumber"] == 2
    assert body["clubRecommendation"] is None
    assert body["distanceToTargetYards"] == pytest.approx(96, abs=3)

    current = client.get("/api/shots/current").json()
    assert current["state"] == "placed"
    assert current["changed"] is False
    assert current["placement"]["clubRecommendation"] == "PW"

    activated = client.post("/api/shots/activate")
    assert activated.status_code == 200
    assert activated.json()["state"] == "activated"

    clock.advance(3.0)
    landing = fix_at(ORIGIN, 14.0, captured_at_ms=4_000)
    completed = client.post("/api/shots/location", json=_point(landing))
    assert completed.status_code == 200
    payload = completed.json()
    assert payload["state"] == "completed"
    assert payload["placement"]["landing"]["lat"] == pytest.approx(landing.latitude)

    assert client.get("/api/shots/current").json() == {
        "state": "inactive",
        "placement": None,
        "changed": False,
    }


def test_second_placement_conflicts(shots_client) -> None:
    client, _, _ = shots_client
    body = {"target": _point(TARGET), "position": _point(ORIGIN)}

    assert client.post("/api/shots", json=body).status_code == 201
    conflict = client.post("/api/shots", json=body)

    assert conflict.status_code == 409


def test_activate_without_placement_conflicts(shots_client) -> None:
    client, _, _ = shots_client

    assert client.post("/api/shots/activate").status_code == 409


def test_invalid_target_is_unprocessable(shots_client) -> None:
    client, engine, _ = shots_client

    response = client.post(
        "/api/shots",
        json={"target": {"lat": 95.0, "lon": 0.0}, "position": _point(ORIGIN)},
    )

    assert response.status_code == 422
    assert engine.get_current_placement() is None


def test_far_target_is_unprocessable(shots_client) -> None:
    client, _, _ = shots_client
    far = fix_at(ORIGIN, 800.0, bearing=0.0, captured_at_ms=1_000)

    response = client.post(
        "/api/shots", json={"target": _point(far), "position": _point(ORIGIN)}
    )

    assert response.status_code == 422
    assert "too far" in response.json()["detail"]


def test_hole_number_validated(shots_client) -> None:
    client, _, _ = shots_client

    response = client.post(
        "/api/shots",
        json={"target": _point(TARGET), "position": _point(ORIGIN), "holeNumber": 0},
    )

    assert response.status_code == 422


def test_cancel_is_idempotent(shots_client) -> None:
    client, _, _ = shots_client

    first = client.post("/api/shots/cancel")
    client.post("/api/shots", json={"target": _point(TARGET), "position": _point(ORIGIN)})
    second = client.post("/api/shots/cancel")

    assert first.json()["state"] == "inactive"
    assert second.json()["state"] == "inactive"


def test_location_without_placement_reports_unchanged(shots_client) -> None:
    client, _, _ = shots_client

    response = client.post("/api/shots/location", json=_point(ORIGIN))

    assert response.status_code == 200
    assert response.json()["changed"] is False


def test_location_requires_capture_time(shots_client) -> None:
    client, engine, clock = shots_client
    client.post("/api/shots", json={"target": _point(TARGET), "position": _point(ORIGIN)})
    clock.advance(1.0)
    moved = fix_at(ORIGIN, 20.0, captured_at_ms=2_000)

    response = client.post(
        "/api/shots/location", json={"lat": moved.latitude, "lon": moved.longitude}
    )

    assert response.status_code == 422
    assert engine.get_current_placement().current_position == ORIGIN


def test_skill_context_sets_verdict(shots_client) -> None:
    client, _, _ = shots_client
    client.post("/api/shots", json={"target": _point(TARGET), "position": _point(ORIGIN)})

    response = client.post(
        "/api/shots/skill", json={"skillTier": "intermediate", "shotCategory": "approach"}
    )

    assert response.status_code == 200
    verdict = response.json()["placement"]["skillVerdict"]
    assert verdict["isRealistic"] is True
    assert verdict["suggestedDistances"] == [80, 100, 120, 140, 160]


def test_unknown_skill_tier_is_unprocessable(shots_client) -> None:
    client, _, _ = shots_client

    response = client.post("/api/shots/skill", json={"skillTier": "legend"})

    assert response.status_code == 422
