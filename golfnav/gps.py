"""GPS fix quality grading and stability tracking."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

EXCELLENT_ACCURACY_M = 3.0
GOOD_ACCURACY_M = 8.0
FAIR_ACCURACY_M = 15.0


class FixQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNKNOWN = "unknown"


def quality_level(accuracy_m: Optional[float]) -> FixQuality:
    if accuracy_m is None or accuracy_m <= 0:
        return FixQuality.UNKNOWN
    if accuracy_m <= EXCELLENT_ACCURACY_M:
        return FixQuality.EXCELLENT
    if accuracy_m <= GOOD_ACCURACY_M:
        return FixQuality.GOOD
    if accuracy_m <= FAIR_ACCURACY_M:
        return FixQuality.FAIR
    return FixQuality.POOR


@dataclass
class StabilitySnapshot:
    is_stable: bool
    progress: float
    mean_accuracy_m: Optional[float]
    quality: FixQuality


class GPSStabilityTracker:
    """Reports when recent fixes have held a usable accuracy long enough."""

    def __init__(
        self,
        *,
        required_accuracy_m: float = FAIR_ACCURACY_M,
        required_duration_s: float = 3.0,
        window: int = 5,
    ) -> None:
        if required_accuracy_m <= 0:
            raise ValueError("required_accuracy_m must be positive")
        if required_duration_s < 0:
            raise ValueError("required_duration_s must be non-negative")
        if window <= 0:
            raise ValueError("window must be positive")
        self.required_accuracy_m = required_accuracy_m
        self.required_duration_s = required_duration_s
        self._recent: Deque[float] = deque(maxlen=window)
        self._held_for = 0.0
        self._quality = FixQuality.UNKNOWN

    def update(self, accuracy_m: Optional[float], dt: float) -> StabilitySnapshot:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self._quality = quality_level(accuracy_m)
        if accuracy_m is None or accuracy_m <= 0 or accuracy_m > self.required_accuracy_m:
            self.reset()
            self._quality = quality_level(accuracy_m)
            return self.snapshot()
        if self._recent:
            self._held_for += dt
        self._recent.append(accuracy_m)
        return self.snapshot()

    def reset(self) -> None:
        self._recent.clear()
        self._held_for = 0.0
        self._quality = FixQuality.UNKNOWN

    def mean_accuracy(self) -> Optional[float]:
        if not self._recent:
            return None
        return sum(self._recent) / len(self._recent)

    @property
    def progress(self) -> float:
        if not self._recent:
            return 0.0
        if self.required_duration_s <= 0:
            return 1.0
        return max(0.0, min(1.0, self._held_for / self.required_duration_s))

    @property
    def is_stable(self) -> bool:
        mean = self.mean_accuracy()
        return (
            mean is not None
            and mean <= self.required_accuracy_m
            and self._held_for >= self.required_duration_s
        )

    def snapshot(self) -> StabilitySnapshot:
        return StabilitySnapshot(
            is_stable=self.is_stable,
            progress=self.progress,
            mean_accuracy_m=self.mean_accuracy(),
            quality=self._quality,
        )


__all__ = [
    "EXCELLENT_ACCURACY_M",
    "FAIR_ACCURACY_M",
    "FixQuality",
    "GOOD_ACCURACY_M",
    "GPSStabilityTracker",
    "StabilitySnapshot",
    "quality_level",
]
