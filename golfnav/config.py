"""Environment-driven engine settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

__all__ = [
    "EngineSettings",
    "get_settings",
    "reset_settings_cache",
]


@dataclass(frozen=True)
class EngineSettings:
    movement_threshold_m: float = 10.0
    settle_delay_s: float = 2.0
    coalesce_interval_s: float = 0.25
    proximity_threshold_m: float = 1600.0
    max_shot_distance_m: float = 500.0
    completion_timeout_s: Optional[float] = None
    max_fix_accuracy_m: Optional[float] = None
    advisor_url: Optional[str] = None
    advisor_timeout_s: float = 5.0
    courses_file: Optional[str] = None
    subscriber_queue_size: int = 100

    def __post_init__(self) -> None:
        if self.movement_threshold_m <= 0:
            raise ValueError("movement_threshold_m must be positive")
        if self.settle_delay_s < 0:
            raise ValueError("settle_delay_s must be non-negative")
        if self.coalesce_interval_s < 0:
            raise ValueError("coalesce_interval_s must be non-negative")
        if self.proximity_threshold_m <= 0:
            raise ValueError("proximity_threshold_m must be positive")
        if self.max_shot_distance_m <= 0:
            raise ValueError("max_shot_distance_m must be positive")
        if self.completion_timeout_s is not None and self.completion_timeout_s <= 0:
            raise ValueError("completion_timeout_s must be positive")
        if self.max_fix_accuracy_m is not None and self.max_fix_accuracy_m <= 0:
            raise ValueError("max_fix_accuracy_m must be positive")
        if self.advisor_timeout_s <= 0:
            raise ValueError("advisor_timeout_s must be positive")
        if self.subscriber_queue_size <= 0:
            raise ValueError("subscriber_queue_size must be positive")


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _optional_float_env(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _optional_str_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return cached settings read from ``GOLFNAV_*`` variables."""

    defaults = EngineSettings()
    return EngineSettings(
        movement_threshold_m=_float_env(
            "GOLFNAV_MOVEMENT_THRESHOLD_M", defaults.movement_threshold_m
        ),
        settle_delay_s=_float_env("GOLFNAV_SETTLE_DELAY_S", defaults.settle_delay_s),
        coalesce_interval_s=_float_env(
            "GOLFNAV_COALESCE_INTERVAL_S", defaults.coalesce_interval_s
        ),
        proximity_threshold_m=_float_env(
            "GOLFNAV_PROXIMITY_THRESHOLD_M", defaults.proximity_threshold_m
        ),
        max_shot_distance_m=_float_env(
            "GOLFNAV_MAX_SHOT_DISTANCE_M", defaults.max_shot_distance_m
        ),
        completion_timeout_s=_optional_float_env("GOLFNAV_COMPLETION_TIMEOUT_S"),
        max_fix_accuracy_m=_optional_float_env("GOLFNAV_MAX_FIX_ACCURACY_M"),
        advisor_url=_optional_str_env("GOLFNAV_ADVISOR_URL"),
        advisor_timeout_s=_float_env(
            "GOLFNAV_ADVISOR_TIMEOUT_S", defaults.advisor_timeout_s
        ),
        courses_file=_optional_str_env("GOLFNAV_COURSES_FILE"),
        subscriber_queue_size=_int_env(
            "GOLFNAV_SUBSCRIBER_QUEUE_SIZE", defaults.subscriber_queue_size
        ),
    )


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()
