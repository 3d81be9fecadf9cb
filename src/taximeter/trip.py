"""Trip status machine."""

from enum import Enum

from taximeter.core.exceptions import InvalidTransitionError


class TripStatus(str, Enum):
    """Meter states. Only RUNNING accrues time and distance."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class TripEvent(str, Enum):
    """What caused a snapshot to be published."""

    STARTED = "started"
    RESUMED = "resumed"
    PAUSED = "paused"
    RESET = "reset"
    TICK = "tick"
    DISTANCE = "distance"
    POSITION = "position"

    def to_event_type(self) -> str:
        """Convert to a dotted event type (e.g., 'trip.started')."""
        return f"trip.{self.value}"


VALID_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.IDLE: {TripStatus.RUNNING, TripStatus.IDLE},
    TripStatus.RUNNING: {TripStatus.PAUSED, TripStatus.IDLE},
    TripStatus.PAUSED: {TripStatus.RUNNING, TripStatus.IDLE},
}


def validate_transition(current: TripStatus, new_status: TripStatus) -> None:
    """Raise InvalidTransitionError if the table does not allow the move."""
    if new_status not in VALID_TRANSITIONS[current]:
        raise InvalidTransitionError(current.value, new_status.value)
