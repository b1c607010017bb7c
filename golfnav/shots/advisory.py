"""Club recommendation collaborators used by the shot engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from golfnav.errors import AdvisoryUnavailable

# Average carries in meters for a typical amateur bag.
DEFAULT_CARRIES_M: Dict[str, float] = {
    "Driver": 230.0,
    "3-wood": 215.0,
    "5-wood": 205.0,
    "3-hybrid": 200.0,
    "4-iron": 190.0,
    "5-iron": 180.0,
    "6-iron": 170.0,
    "7-iron": 160.0,
    "8-iron": 150.0,
    "9-iron": 140.0,
    "Pitching Wedge": 125.0,
    "Gap Wedge": 110.0,
    "Sand Wedge": 95.0,
    "Lob Wedge": 80.0,
}
PUTTER = "Putter"
PUTTER_MAX_M = 5.0
# A club still counts as covering the target when it falls this much short.
CARRY_SLACK_M = 2.0


@dataclass(frozen=True)
class ClubRequest:
    distance_m: float
    hole_number: Optional[int] = None
    distance_to_pin_m: Optional[float] = None

    def to_payload(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"distance_m": round(self.distance_m, 1)}
        if self.hole_number is not None:
            payload["hole"] = self.hole_number
        if self.distance_to_pin_m is not None:
            payload["distance_to_pin_m"] = round(self.distance_to_pin_m, 1)
        return payload


class ClubAdvisor(Protocol):
    def recommend(self, request: ClubRequest) -> str: ...


class LocalClubAdvisor:
    """Pick the shortest club whose average carry covers the distance."""

    def __init__(self, carries_m: Optional[Mapping[str, float]] = None) -> None:
        self._carries = dict(DEFAULT_CARRIES_M if carries_m is None else carries_m)

    def recommend(self, request: ClubRequest) -> str:
        if request.distance_m <= PUTTER_MAX_M:
            return PUTTER
        candidates = sorted(self._carries.items(), key=lambda item: item[1])
        if not candidates:
            raise AdvisoryUnavailable("bag must contain at least one club")
        for club, carry in candidates:
            if carry >= request.distance_m - CARRY_SLACK_M:
                return club
        return candidates[-1][0]


def _http_client_factory(**kwargs: Any) -> httpx.Client:
    timeout = kwargs.pop("timeout", 5.0)
    return httpx.Client(timeout=timeout, **kwargs)


class HttpClubAdvisor:
    """Ask a remote caddie service for a club; expects ``{"club": "..."}``."""

    def __init__(self, url: str, *, timeout_s: float = 5.0) -> None:
        if not url:
            raise ValueError("url must be provided")
        self.url = url
        self.timeout_s = timeout_s

    def recommend(self, request: ClubRequest) -> str:
        try:
            with _http_client_factory(timeout=self.timeout_s) as client:
                response = client.post(self.url, json=request.to_payload())
        except httpx.TimeoutException as exc:
            raise AdvisoryUnavailable("club advisor timed out") from exc
        except httpx.RequestError as exc:
            raise AdvisoryUnavailable(f"club advisor unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise AdvisoryUnavailable(
                f"club advisor returned HTTP {response.status_code}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise AdvisoryUnavailable("club advisor returned invalid JSON") from exc

        club = data.get("club") if isinstance(data, dict) else None
        if not isinstance(club, str) or not club.strip():
            raise AdvisoryUnavailable("club advisor response missing club")
        return club.strip()


__all__ = [
    "CARRY_SLACK_M",
    "ClubAdvisor",
    "ClubRequest",
    "DEFAULT_CARRIES_M",
    "HttpClubAdvisor",
    "LocalClubAdvisor",
    "PUTTER",
]
