"""GPS taxi fare meter: trip state machine, location filtering and fare formula."""

from taximeter.controller import TripController, build_controller
from taximeter.fare import FareBreakdown, Tariff, compute_fare
from taximeter.location import LocationSample
from taximeter.location_filter import (
    Accepted,
    FilterThresholds,
    LocationFilter,
    Reference,
    Rejected,
    RejectionReason,
)
from taximeter.snapshots import TripSnapshot
from taximeter.trip import TripEvent, TripStatus

__all__ = [
    "Accepted",
    "FareBreakdown",
    "FilterThresholds",
    "LocationFilter",
    "LocationSample",
    "Reference",
    "Rejected",
    "RejectionReason",
    "Tariff",
    "TripController",
    "TripEvent",
    "TripSnapshot",
    "TripStatus",
    "build_controller",
    "compute_fare",
]
