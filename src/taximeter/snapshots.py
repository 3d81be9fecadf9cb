"""Immutable snapshots of meter state published to observers.

Snapshots are built while the controller lock is held, so each one is a
consistent view of a single mutation and can be handed to other threads.
"""

from dataclasses import dataclass
from typing import Any

from taximeter.location import LocationSample
from taximeter.trip import TripEvent, TripStatus


def _location_dict(sample: LocationSample | None) -> dict[str, Any] | None:
    if sample is None:
        return None
    return {
        "latitude": sample.latitude,
        "longitude": sample.longitude,
        "accuracy_m": sample.accuracy_m,
        "timestamp": sample.timestamp.isoformat(),
    }


@dataclass(frozen=True)
class TripSnapshot:
    """Immutable snapshot of the meter after one mutation."""

    event: TripEvent
    trip_id: str | None
    status: TripStatus
    elapsed_seconds: int
    distance_km: float
    fare: float
    last_accepted_location: LocationSample | None
    last_known_position: LocationSample | None

    @property
    def is_running(self) -> bool:
        return self.status == TripStatus.RUNNING

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary with locations serialized."""
        return {
            "event": self.event.value,
            "trip_id": self.trip_id,
            "status": self.status.value,
            "elapsed_seconds": self.elapsed_seconds,
            "distance_km": self.distance_km,
            "fare": self.fare,
            "last_accepted_location": _location_dict(self.last_accepted_location),
            "last_known_position": _location_dict(self.last_known_position),
        }
