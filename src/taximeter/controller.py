"""Trip controller: owns the meter state and mediates every transition.

Two independent producers drive the controller: a location source pushing
samples and a tick source calling on_tick() once per second while a trip is
running. Every public operation runs under one re-entrant lock and publishes
exactly one snapshot, so observers see mutations in order and never a
half-applied update.
"""

import functools
import logging
import threading
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING

from taximeter.accumulator import DistanceAccumulator
from taximeter.core.exceptions import InvalidTransitionError
from taximeter.fare import DEFAULT_TARIFF, FareBreakdown, Tariff, compute_fare, fare_breakdown
from taximeter.location import LocationSample
from taximeter.location_filter import Accepted, FilterOutcome, LocationFilter
from taximeter.snapshots import TripSnapshot
from taximeter.ticker import IntervalTicker, TickSource
from taximeter.trip import TripEvent, TripStatus, validate_transition

if TYPE_CHECKING:
    from taximeter.settings import Settings

logger = logging.getLogger(__name__)

TripListener = Callable[[TripSnapshot], None]


class TripController:
    """Trip state machine: IDLE -> RUNNING <-> PAUSED, reset from anywhere.

    Thread-safe: all methods are protected by a lock so the tick thread,
    the location source and user commands can call in concurrently.
    """

    def __init__(
        self,
        tariff: Tariff | None = None,
        location_filter: LocationFilter | None = None,
        tick_source: TickSource | None = None,
    ) -> None:
        self.tariff = tariff or DEFAULT_TARIFF
        self.location_filter = location_filter or LocationFilter()
        self._tick_source = tick_source

        self._lock = threading.RLock()
        self._tick_generation = 0
        self._listeners: list[TripListener] = []

        self._status = TripStatus.IDLE
        self._trip_id: str | None = None
        self._elapsed_seconds = 0
        self._distance = DistanceAccumulator()
        self._fare = self.tariff.base_fare
        self._last_accepted: LocationSample | None = None
        self._last_known: LocationSample | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def status(self) -> TripStatus:
        with self._lock:
            return self._status

    @property
    def trip_id(self) -> str | None:
        with self._lock:
            return self._trip_id

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._elapsed_seconds

    @property
    def distance_km(self) -> float:
        with self._lock:
            return self._distance.total_km

    @property
    def fare(self) -> float:
        with self._lock:
            return self._fare

    @property
    def last_accepted_location(self) -> LocationSample | None:
        with self._lock:
            return self._last_accepted

    @property
    def last_known_position(self) -> LocationSample | None:
        with self._lock:
            return self._last_known

    def snapshot(self, event: TripEvent | None = None) -> TripSnapshot:
        with self._lock:
            return self._build_snapshot(event or self._default_event())

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: TripListener) -> Callable[[], None]:
        """Register a listener for snapshots. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Start a trip from IDLE or resume it from PAUSED.

        Returns False when the meter is already running.
        """
        with self._lock:
            previous = self._status
            if not self._transition(TripStatus.RUNNING):
                return False

            if previous == TripStatus.IDLE:
                self._trip_id = str(uuid.uuid4())
                event = TripEvent.STARTED
            else:
                event = TripEvent.RESUMED

            # The next sample becomes a fresh reference point
            self._last_accepted = None
            self._tick_generation += 1
            if self._tick_source is not None:
                self._tick_source.start(
                    functools.partial(self._on_source_tick, self._tick_generation)
                )

            logger.info(
                "Trip %s (elapsed=%ds, distance=%.3fkm)",
                event.value,
                self._elapsed_seconds,
                self._distance.total_km,
                extra=self._log_extra(event),
            )
            self._publish(event)
            return True

    def pause(self) -> bool:
        """Freeze accrual. Returns False unless the meter was running."""
        with self._lock:
            if not self._transition(TripStatus.PAUSED):
                return False

            self._tick_generation += 1
            if self._tick_source is not None:
                self._tick_source.stop()

            logger.info(
                "Trip paused at fare %.2f",
                self._fare,
                extra=self._log_extra(TripEvent.PAUSED),
            )
            self._publish(TripEvent.PAUSED)
            return True

    def reset(self) -> None:
        """Return to IDLE with all accrual cleared. Valid from any state."""
        with self._lock:
            validate_transition(self._status, TripStatus.IDLE)

            self._tick_generation += 1
            if self._tick_source is not None:
                self._tick_source.stop()

            trip_id = self._trip_id
            self._status = TripStatus.IDLE
            self._trip_id = None
            self._elapsed_seconds = 0
            self._distance.reset()
            self._last_accepted = None
            self._recompute_fare()

            logger.info(
                "Trip reset", extra={**self._log_extra(TripEvent.RESET), "trip_id": trip_id}
            )
            self._publish(TripEvent.RESET)

    def close(self) -> None:
        """Stop the tick source without changing trip state."""
        with self._lock:
            self._tick_generation += 1
            if self._tick_source is not None:
                self._tick_source.stop()

    # ------------------------------------------------------------------
    # Producers
    # ------------------------------------------------------------------

    def on_tick(self) -> bool:
        """Advance the clock by one second. No-op unless running."""
        with self._lock:
            if self._status != TripStatus.RUNNING:
                return False
            self._elapsed_seconds += 1
            self._recompute_fare()
            self._publish(TripEvent.TICK)
            return True

    def _on_source_tick(self, generation: int) -> bool:
        # Ticks from a worker stopped by an earlier pause or reset are dropped
        with self._lock:
            if generation != self._tick_generation:
                return False
            return self.on_tick()

    def on_location_sample(self, sample: LocationSample) -> FilterOutcome | None:
        """Ingest a GPS sample.

        The sample always becomes the last known position. Distance and fare
        only change while running; otherwise None is returned and the filter
        is not consulted.
        """
        with self._lock:
            self._last_known = sample

            if self._status != TripStatus.RUNNING:
                self._publish(TripEvent.POSITION)
                return None

            outcome = self.location_filter.evaluate(sample, self._last_accepted)
            if outcome.updates_reference:
                self._last_accepted = sample

            if isinstance(outcome, Accepted):
                self._distance.add(outcome.displacement_m)
                self._recompute_fare()
                self._publish(TripEvent.DISTANCE)
            else:
                self._publish(TripEvent.POSITION)
            return outcome

    # ------------------------------------------------------------------
    # Fare
    # ------------------------------------------------------------------

    def compute_fare(self) -> float:
        """Fare for the current distance and elapsed time. Side-effect free."""
        with self._lock:
            return compute_fare(self._distance.total_km, self._elapsed_seconds, self.tariff)

    def fare_breakdown(self) -> FareBreakdown:
        with self._lock:
            return fare_breakdown(self._distance.total_km, self._elapsed_seconds, self.tariff)

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _transition(self, new_status: TripStatus) -> bool:
        try:
            validate_transition(self._status, new_status)
        except InvalidTransitionError as e:
            logger.info("Ignoring command: %s", e.message, extra={"trip_id": self._trip_id})
            return False
        self._status = new_status
        return True

    def _log_extra(self, event: TripEvent) -> dict[str, object]:
        return {
            "trip_id": self._trip_id,
            "status": self._status.value,
            "event": event.value,
            "elapsed_seconds": self._elapsed_seconds,
            "fare": round(self._fare, 2),
        }

    def _recompute_fare(self) -> None:
        self._fare = compute_fare(self._distance.total_km, self._elapsed_seconds, self.tariff)

    def _default_event(self) -> TripEvent:
        return {
            TripStatus.IDLE: TripEvent.RESET,
            TripStatus.RUNNING: TripEvent.STARTED,
            TripStatus.PAUSED: TripEvent.PAUSED,
        }[self._status]

    def _build_snapshot(self, event: TripEvent) -> TripSnapshot:
        return TripSnapshot(
            event=event,
            trip_id=self._trip_id,
            status=self._status,
            elapsed_seconds=self._elapsed_seconds,
            distance_km=self._distance.total_km,
            fare=self._fare,
            last_accepted_location=self._last_accepted,
            last_known_position=self._last_known,
        )

    def _publish(self, event: TripEvent) -> None:
        snapshot = self._build_snapshot(event)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(
                    "Trip listener failed on %s",
                    event.to_event_type(),
                    extra={"trip_id": self._trip_id, "event": event.value},
                )


def build_controller(settings: "Settings") -> TripController:
    """Wire a controller from loaded settings with a thread-backed ticker."""
    return TripController(
        tariff=settings.tariff.to_tariff(),
        location_filter=LocationFilter(settings.filter.to_thresholds()),
        tick_source=IntervalTicker(settings.meter.tick_interval_seconds),
    )
