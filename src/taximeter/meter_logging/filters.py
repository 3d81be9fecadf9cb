import logging


class DefaultTripIdFilter(logging.Filter):
    """Adds a placeholder trip_id so format strings can always reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "trip_id", None) is None:
            record.trip_id = "-"
        return True
