"""Course directory collaborators feeding the proximity classifier."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Protocol, Sequence

from golfnav.models import Coordinate, CourseAnchor


class CourseDirectory(Protocol):
    def list_anchors(self) -> Sequence[CourseAnchor]: ...


class InMemoryCourseDirectory:
    """Thread-safe directory of saved courses, kept in insertion order."""

    def __init__(self, anchors: Iterable[CourseAnchor] = ()) -> None:
        self._lock = threading.Lock()
        self._anchors: Dict[str, CourseAnchor] = {}
        for anchor in anchors:
            self._anchors[anchor.course_id] = anchor

    def add(self, anchor: CourseAnchor) -> None:
        with self._lock:
            self._anchors[anchor.course_id] = anchor

    def remove(self, course_id: str) -> bool:
        with self._lock:
            return self._anchors.pop(course_id, None) is not None

    def replace(self, anchors: Iterable[CourseAnchor]) -> None:
        fresh = {anchor.course_id: anchor for anchor in anchors}
        with self._lock:
            self._anchors = fresh

    def list_anchors(self) -> List[CourseAnchor]:
        with self._lock:
            return list(self._anchors.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._anchors)


def load_anchors(path: str | Path) -> List[CourseAnchor]:
    """Read ``[{"courseId", "name", "lat", "lon"}, ...]`` from a JSON file."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError("course file must contain a JSON list")
    anchors: List[CourseAnchor] = []
    for raw in payload:
        try:
            course_id = str(raw["courseId"])
            lat = float(raw["lat"])
            lon = float(raw["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid course entry: {raw!r}") from exc
        anchors.append(
            CourseAnchor(
                course_id=course_id,
                display_name=str(raw.get("name") or course_id),
                coordinate=Coordinate(latitude=lat, longitude=lon),
            )
        )
    return anchors


__all__ = ["CourseDirectory", "InMemoryCourseDirectory", "load_anchors"]
