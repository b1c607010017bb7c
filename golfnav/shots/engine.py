"""Shot placement state machine.

One engine owns at most one :class:`ShotPlacement`. Every operation runs under
the engine lock, so commands, location fixes and asynchronous club
recommendations are applied one at a time and never race on the record.

Lifecycle::

    inactive -> placed -> activated -> completed -> inactive
                  \\________\\___ cancel() ___/

``completed`` is emitted to subscribers exactly once and the engine resets to
``inactive`` before the call that detected it returns.

Fixes arriving within ``coalesce_interval_s`` of the last applied one are
held back; the held fix is applied by the next fix, by :meth:`flush`, or by
the first state read once the interval has passed. The optional completion
timeout is checked on every fix and on every state read, so a silent GPS
source still times out as soon as anyone looks.

Club recommendations are requested on a worker thread when a placement is
created. Each placement carries a generation number; a recommendation whose
generation no longer matches the current placement (cancelled, completed or
superseded) is discarded.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from queue import Full, Queue
from typing import Callable, List, Optional, Tuple

from golfnav import telemetry
from golfnav.config import EngineSettings, get_settings
from golfnav.errors import (
    AdvisoryUnavailable,
    AlreadyInFlight,
    NoActivePlacement,
    TargetTooFar,
)
from golfnav.geo import distance_meters
from golfnav.gps import GPSStabilityTracker, quality_level
from golfnav.metrics import ADVISORY_RESULTS, LOCATION_UPDATES, SHOT_TRANSITIONS
from golfnav.models import Coordinate, ShotState
from golfnav.skill import ShotCategory, SkillAdvisor, SkillTier

from .advisory import ClubAdvisor, ClubRequest
from .placement import EngineSnapshot, ShotPlacement, ShotPlacementView

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class _PendingAdvice:
    generation: int
    future: Future
    done: threading.Event = field(default_factory=threading.Event)


class ShotPlacementEngine:
    def __init__(
        self,
        club_advisor: Optional[ClubAdvisor] = None,
        *,
        settings: Optional[EngineSettings] = None,
        skill_advisor: Optional[SkillAdvisor] = None,
        clock: Clock = time.monotonic,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._club_advisor = club_advisor
        self._skill_advisor = skill_advisor or SkillAdvisor()
        self._clock = clock
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.RLock()

        self._placement: Optional[ShotPlacement] = None
        self._generation = 0
        self._sequence = 0
        self._last_fix: Optional[Coordinate] = None
        self._last_applied_at: Optional[float] = None
        self._pending_fix: Optional[Coordinate] = None
        self._skill: Optional[Tuple[SkillTier, ShotCategory]] = None
        self._advice: Optional[_PendingAdvice] = None
        self._stability = GPSStabilityTracker()
        self._subscribers: List[Queue[EngineSnapshot]] = []

    # ------------------------------------------------------------------ queries

    @property
    def current_state(self) -> ShotState:
        with self._lock:
            self._catch_up()
            if self._placement is None:
                return ShotState.INACTIVE
            return self._placement.state

    def get_current_placement(self) -> Optional[ShotPlacementView]:
        with self._lock:
            self._catch_up()
            if self._placement is None:
                return None
            return self._placement.view()

    # ----------------------------------------------------------------- commands

    def create_shot_placement(
        self,
        target: Coordinate,
        current_position: Coordinate,
        pin: Optional[Coordinate] = None,
        hole_number: Optional[int] = None,
    ) -> ShotPlacementView:
        if hole_number is not None and hole_number < 1:
            raise ValueError("hole_number must be >= 1")

        with self._lock:
            if self._placement is not None:
                raise AlreadyInFlight(
                    f"shot {self._placement.id} is already {self._placement.state.value}"
                )
            distance = distance_meters(current_position, target)
            if distance > self.settings.max_shot_distance_m:
                raise TargetTooFar(distance, self.settings.max_shot_distance_m)

            self._generation += 1
            placement = ShotPlacement(
                id=uuid.uuid4().hex,
                generation=self._generation,
                target=target,
                origin=current_position,
                pin=pin,
                hole_number=hole_number,
            )
            self._placement = placement
            self._pending_fix = None
            self._stability.reset()
            self._apply_fix(current_position, self._clock(), count=False)

            SHOT_TRANSITIONS.labels(state=ShotState.PLACED.value).inc()
            logger.info(
                "shot %s placed %.1f m from origin (hole %s)",
                placement.id,
                placement.distance_to_target_m,
                hole_number,
            )
            telemetry.record_shot_placed(
                placement.id, placement.distance_to_target_m, hole_number=hole_number
            )
            view = self._publish().placement
            request = ClubRequest(
                distance_m=placement.distance_to_target_m,
                hole_number=hole_number,
                distance_to_pin_m=placement.distance_to_pin_m,
            )
            generation = placement.generation

        self._request_recommendation(generation, request)
        assert view is not None
        return view

    def activate(self) -> ShotPlacementView:
        with self._lock:
            placement = self._placement
            if placement is None or placement.state != ShotState.PLACED:
                raise NoActivePlacement("no placed shot to activate")
            placement.state = ShotState.ACTIVATED
            placement.activated_at = self._clock()
            SHOT_TRANSITIONS.labels(state=ShotState.ACTIVATED.value).inc()
            logger.info("shot %s activated, watching for movement", placement.id)
            telemetry.record_shot_activated(placement.id)
            view = self._publish().placement
        assert view is not None
        return view

    def cancel(self) -> None:
        with self._lock:
            placement = self._placement
            if placement is None:
                return
            previous = placement.state
            self._discard()
            SHOT_TRANSITIONS.labels(state=ShotState.INACTIVE.value).inc()
            logger.info("shot %s cancelled from %s", placement.id, previous.value)
            telemetry.record_shot_cancelled(placement.id, state=previous.value)
            self._publish()

    def on_location_update(self, position: Coordinate) -> Optional[EngineSnapshot]:
        """Feed one GPS fix; returns the emitted snapshot, if any."""

        with self._lock:
            placement = self._placement
            if placement is None:
                LOCATION_UPDATES.labels(outcome="idle").inc()
                return None

            newest = self._pending_fix or self._last_fix
            if newest is not None and position.captured_at_ms < newest.captured_at_ms:
                LOCATION_UPDATES.labels(outcome="out_of_order").inc()
                logger.debug(
                    "ignoring fix from %d ms, already at %d ms",
                    position.captured_at_ms,
                    newest.captured_at_ms,
                )
                return None

            limit = self.settings.max_fix_accuracy_m
            if limit is not None and position.accuracy_m is not None and position.accuracy_m > limit:
                LOCATION_UPDATES.labels(outcome="inaccurate").inc()
                logger.debug("ignoring fix with %.1f m accuracy", position.accuracy_m)
                return None

            now = self._clock()
            if placement.state == ShotState.ACTIVATED:
                reason = self._completion_reason(placement, position, now)
                if reason is not None:
                    LOCATION_UPDATES.labels(outcome="applied").inc()
                    return self._complete(placement, position, reason)

            if (
                self._last_applied_at is not None
                and now - self._last_applied_at < self.settings.coalesce_interval_s
            ):
                self._pending_fix = position
                LOCATION_UPDATES.labels(outcome="coalesced").inc()
                return None

            self._apply_fix(position, now)
            return self._publish()

    def flush(self) -> Optional[EngineSnapshot]:
        """Apply a fix held back by coalescing, if one is pending."""

        with self._lock:
            if self._placement is None or self._pending_fix is None:
                return None
            return self._apply_pending(self._clock())

    def update_skill_context(
        self, tier: SkillTier | str, category: ShotCategory | str | None = None
    ) -> Optional[ShotPlacementView]:
        skill = SkillTier.parse(tier)
        shot_category = ShotCategory.parse(category)
        with self._lock:
            self._skill = (skill, shot_category)
            placement = self._placement
            if placement is None:
                return None
            self._refresh_verdict(placement)
            return self._publish().placement

    def clear_skill_context(self) -> None:
        with self._lock:
            self._skill = None
            if self._placement is not None and self._placement.skill_verdict is not None:
                self._placement.skill_verdict = None
                self._publish()

    # ------------------------------------------------------------ subscriptions

    def subscribe(self) -> Queue[EngineSnapshot]:
        """Register a queue receiving a snapshot on every observable change.

        The current snapshot is delivered immediately.
        """

        queue: Queue[EngineSnapshot] = Queue(maxsize=self.settings.subscriber_queue_size)
        with self._lock:
            self._subscribers.append(queue)
            queue.put_nowait(self._snapshot())
        return queue

    def unsubscribe(self, queue: Queue[EngineSnapshot]) -> None:
        with self._lock:
            if queue in self._subscribers:
                self._subscribers.remove(queue)

    # ----------------------------------------------------------------- advisory

    def wait_for_recommendation(self, timeout: Optional[float] = None) -> bool:
        """Block until the latest recommendation request has been handled."""

        with self._lock:
            advice = self._advice
        if advice is None:
            return True
        return advice.done.wait(timeout)

    def shutdown(self) -> None:
        self.cancel()
        with self._lock:
            self._subscribers.clear()
            executor = self._executor if self._owns_executor else None
            self._executor = None if self._owns_executor else self._executor
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "ShotPlacementEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _request_recommendation(self, generation: int, request: ClubRequest) -> None:
        if self._club_advisor is None:
            return
        with self._lock:
            if self._placement is None or self._placement.generation != generation:
                return
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="golfnav-advisor"
                )
            try:
                future = self._executor.submit(self._club_advisor.recommend, request)
            except RuntimeError:
                logger.warning("club advisor executor is shut down; skipping request")
                return
            advice = _PendingAdvice(generation=generation, future=future)
            self._advice = advice
        future.add_done_callback(partial(self._on_recommendation, advice))

    def _on_recommendation(self, advice: _PendingAdvice, future: Future) -> None:
        try:
            with self._lock:
                placement = self._placement
                current = placement is not None and placement.generation == advice.generation
                if future.cancelled():
                    ADVISORY_RESULTS.labels(outcome="stale").inc()
                    return
                exc = future.exception()
                if exc is not None:
                    ADVISORY_RESULTS.labels(outcome="failed").inc()
                    if isinstance(exc, AdvisoryUnavailable):
                        logger.warning("club recommendation unavailable: %s", exc)
                    else:
                        logger.error(
                            "club advisor raised unexpectedly", exc_info=exc
                        )
                    if current:
                        telemetry.record_advisory_failed(placement.id, str(exc))
                    return
                if not current:
                    ADVISORY_RESULTS.labels(outcome="stale").inc()
                    logger.debug(
                        "discarding recommendation for generation %d", advice.generation
                    )
                    return
                placement.club_recommendation = future.result()
                ADVISORY_RESULTS.labels(outcome="applied").inc()
                self._publish()
        finally:
            advice.done.set()

    # ---------------------------------------------------------------- internals

    def _catch_up(self) -> Optional[EngineSnapshot]:
        """Run work that falls due with the clock rather than with a new fix.

        A coalesced fix is held for at most one interval, and an activated
        shot past ``completion_timeout_s`` completes at its last position.
        """

        placement = self._placement
        if placement is None:
            return None
        now = self._clock()
        if (
            self._pending_fix is not None
            and self._last_applied_at is not None
            and now - self._last_applied_at >= self.settings.coalesce_interval_s
        ):
            return self._apply_pending(now)

        timeout = self.settings.completion_timeout_s
        if (
            timeout is not None
            and placement.state == ShotState.ACTIVATED
            and placement.activated_at is not None
            and now - placement.activated_at >= timeout
        ):
            position = placement.current_position or placement.origin
            return self._complete(placement, position, "timeout")
        return None

    def _apply_pending(self, now: float) -> EngineSnapshot:
        placement = self._placement
        position = self._pending_fix
        assert placement is not None and position is not None
        if placement.state == ShotState.ACTIVATED:
            reason = self._completion_reason(placement, position, now)
            if reason is not None:
                return self._complete(placement, position, reason)
        self._apply_fix(position, now)
        return self._publish()

    def _completion_reason(
        self, placement: ShotPlacement, position: Coordinate, now: float
    ) -> Optional[str]:
        activated_at = placement.activated_at if placement.activated_at is not None else now
        elapsed = now - activated_at
        moved = distance_meters(position, placement.origin)
        if (
            moved >= self.settings.movement_threshold_m
            and elapsed >= self.settings.settle_delay_s
        ):
            return "movement"
        timeout = self.settings.completion_timeout_s
        if timeout is not None and elapsed >= timeout:
            return "timeout"
        return None

    def _complete(
        self, placement: ShotPlacement, position: Coordinate, reason: str
    ) -> EngineSnapshot:
        self._apply_fix(position, self._clock(), count=False)
        placement.state = ShotState.COMPLETED
        placement.landing = position
        placement.completed_reason = reason
        moved = distance_meters(position, placement.origin)
        SHOT_TRANSITIONS.labels(state=ShotState.COMPLETED.value).inc()
        logger.info("shot %s completed (%s, moved %.1f m)", placement.id, reason, moved)
        telemetry.record_shot_completed(placement.id, moved, reason=reason)
        completed = self._publish()

        self._discard()
        SHOT_TRANSITIONS.labels(state=ShotState.INACTIVE.value).inc()
        self._publish()
        return completed

    def _discard(self) -> None:
        self._placement = None
        self._pending_fix = None
        self._last_fix = None
        self._last_applied_at = None
        if self._advice is not None:
            self._advice.future.cancel()

    def _apply_fix(self, position: Coordinate, now: float, *, count: bool = True) -> None:
        placement = self._placement
        assert placement is not None
        dt = 0.0 if self._last_applied_at is None else max(0.0, now - self._last_applied_at)
        stability = self._stability.update(position.accuracy_m, dt)

        placement.current_position = position
        placement.distance_to_target_m = distance_meters(position, placement.target)
        placement.distance_to_pin_m = (
            distance_meters(position, placement.pin) if placement.pin is not None else None
        )
        placement.fix_quality = quality_level(position.accuracy_m)
        placement.gps_stable = stability.is_stable
        self._refresh_verdict(placement)

        self._pending_fix = None
        self._last_fix = position
        self._last_applied_at = now
        if count:
            LOCATION_UPDATES.labels(outcome="applied").inc()

    def _refresh_verdict(self, placement: ShotPlacement) -> None:
        if self._skill is None:
            return
        tier, category = self._skill
        try:
            placement.skill_verdict = self._skill_advisor.verdict(
                placement.distance_to_target_m, tier, category
            )
        except AdvisoryUnavailable as exc:
            logger.warning("skill verdict unavailable: %s", exc)

    def _snapshot(self) -> EngineSnapshot:
        placement = self._placement
        return EngineSnapshot(
            sequence=self._sequence,
            state=placement.state if placement is not None else ShotState.INACTIVE,
            placement=placement.view() if placement is not None else None,
        )

    def _publish(self) -> EngineSnapshot:
        self._sequence += 1
        snapshot = self._snapshot()
        for queue in self._subscribers:
            try:
                queue.put_nowait(snapshot)
            except Full:
                logger.debug("subscriber queue full; dropping snapshot %d", snapshot.sequence)
                continue
        return snapshot


__all__ = ["ShotPlacementEngine"]
