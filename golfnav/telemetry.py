"""Telemetry helpers for shot lifecycle instrumentation."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Mapping, MutableMapping, Optional

TelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[TelemetryEmitter] = None
_logger = logging.getLogger("golfnav.telemetry")


def set_telemetry_emitter(candidate: TelemetryEmitter | None) -> None:
    """Register a telemetry emitter used for shot instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, dict(payload))
    except Exception:  # pragma: no cover
        _logger.exception("failed to emit telemetry event %s", event)


def record_shot_placed(
    shot_id: str, distance_m: float, *, hole_number: int | None = None
) -> None:
    payload: Dict[str, object] = {
        "shotId": shot_id,
        "distanceM": round(distance_m, 1),
        "ts": _now_ms(),
    }
    if hole_number is not None:
        payload["hole"] = hole_number
    _safe_emit("shot.placed", payload)


def record_shot_activated(shot_id: str) -> None:
    _safe_emit("shot.activated", {"shotId": shot_id, "ts": _now_ms()})


def record_shot_completed(shot_id: str, moved_m: float, *, reason: str) -> None:
    payload: Dict[str, object] = {
        "shotId": shot_id,
        "movedM": round(moved_m, 1),
        "reason": reason,
        "ts": _now_ms(),
    }
    _safe_emit("shot.completed", payload)


def record_shot_cancelled(shot_id: str, *, state: str) -> None:
    _safe_emit("shot.cancelled", {"shotId": shot_id, "state": state, "ts": _now_ms()})


def record_advisory_failed(shot_id: str, error: str) -> None:
    _safe_emit(
        "shot.advisory_failed", {"shotId": shot_id, "error": error, "ts": _now_ms()}
    )


__all__ = [
    "TelemetryEmitter",
    "record_advisory_failed",
    "record_shot_activated",
    "record_shot_cancelled",
    "record_shot_completed",
    "record_shot_placed",
    "set_telemetry_emitter",
]
