"""Log formatters for JSON and human-readable output."""

import json
import logging
from datetime import UTC, datetime

# Meter state attached by the controller through `extra=`
METER_FIELDS = ("trip_id", "status", "event", "elapsed_seconds", "fare")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying whatever meter state was attached."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": self.environment,
        }
        log_data.update(
            {field: getattr(record, field) for field in METER_FIELDS if hasattr(record, field)}
        )

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class DevFormatter(logging.Formatter):
    """Console format: `... [trip=<id>] <status/event>: message`."""

    def __init__(self) -> None:
        super().__init__(
            fmt=(
                "%(asctime)s [%(levelname)8s] %(name)s "
                "[trip=%(trip_id)s]%(meter_tag)s: %(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        tags = [str(getattr(record, f)) for f in ("status", "event") if getattr(record, f, None)]
        record.meter_tag = f" <{'/'.join(tags)}>" if tags else ""
        return super().format(record)
