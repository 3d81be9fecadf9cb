from .context import ContextFilter, LogContext, log_context, log_trip_context
from .filters import DefaultTripIdFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging

__all__ = [
    "ContextFilter",
    "DefaultTripIdFilter",
    "DevFormatter",
    "JSONFormatter",
    "LogContext",
    "get_logger",
    "log_context",
    "log_trip_context",
    "setup_logging",
]
