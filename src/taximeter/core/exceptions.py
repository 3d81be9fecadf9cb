"""Exception hierarchy for the taximeter core."""

from typing import Any


class TaximeterError(Exception):
    """Base exception for all taximeter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PermanentError(TaximeterError):
    """Errors that will not go away by repeating the call."""

    pass


class StateError(PermanentError):
    """Operation not valid in the current trip state."""

    pass


class InvalidTransitionError(StateError):
    """Requested status transition is not in the transition table."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Invalid transition from {current} to {requested}",
            details={"current": current, "requested": requested},
        )
        self.current = current
        self.requested = requested


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass
