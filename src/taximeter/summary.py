"""Trip summaries for the notification layer.

The meter never renders anything itself. TripNotifier subscribes to
controller snapshots and hands plain-text summaries to a sink (a foreground
notification, a console, a test double).
"""

import logging
from collections.abc import Callable

from taximeter.snapshots import TripSnapshot
from taximeter.trip import TripEvent, TripStatus

logger = logging.getLogger(__name__)

SummarySink = Callable[[str], None]

_ONGOING_EVENTS = {TripEvent.STARTED, TripEvent.RESUMED, TripEvent.TICK, TripEvent.DISTANCE}


def format_duration(seconds: int) -> str:
    """Format elapsed seconds as m:ss (minutes are not wrapped into hours)."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


def ongoing_summary(snapshot: TripSnapshot, currency: str = "DH") -> str:
    minutes = snapshot.elapsed_seconds // 60
    return (
        f"Fare: {snapshot.fare:.2f} {currency} | "
        f"Distance: {snapshot.distance_km:.2f} km | {minutes} min"
    )


def detailed_summary(snapshot: TripSnapshot, currency: str = "DH") -> str:
    status_line = {
        TripStatus.RUNNING: "Trip in progress...",
        TripStatus.PAUSED: "Trip paused",
        TripStatus.IDLE: "Meter idle",
    }[snapshot.status]
    return "\n".join(
        [
            f"Fare: {snapshot.fare:.2f} {currency}",
            f"Distance: {snapshot.distance_km:.2f} km",
            f"Duration: {format_duration(snapshot.elapsed_seconds)}",
            "",
            status_line,
        ]
    )


def trip_end_summary(snapshot: TripSnapshot, currency: str = "DH") -> str:
    minutes = snapshot.elapsed_seconds // 60
    return (
        f"Trip ended - Fare: {snapshot.fare:.1f} {currency} | "
        f"Distance: {snapshot.distance_km:.2f} km | Duration: {minutes} min"
    )


class TripNotifier:
    """Controller listener that turns snapshots into summary texts.

    On reset the end-of-trip summary is built from the last snapshot seen
    before the reset, since the reset snapshot itself is already zeroed.
    """

    def __init__(self, sink: SummarySink, currency: str = "DH") -> None:
        self.sink = sink
        self.currency = currency
        self._last_trip_snapshot: TripSnapshot | None = None

    def __call__(self, snapshot: TripSnapshot) -> None:
        if snapshot.event == TripEvent.RESET:
            previous = self._last_trip_snapshot
            self._last_trip_snapshot = None
            if previous is not None:
                self.sink(trip_end_summary(previous, self.currency))
            return

        if snapshot.status != TripStatus.IDLE:
            self._last_trip_snapshot = snapshot

        if snapshot.event in _ONGOING_EVENTS:
            self.sink(ongoing_summary(snapshot, self.currency))
        elif snapshot.event == TripEvent.PAUSED:
            self.sink(detailed_summary(snapshot, self.currency))
        else:
            logger.debug("No summary for %s", snapshot.event.to_event_type())
