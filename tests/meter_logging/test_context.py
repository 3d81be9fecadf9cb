"""Tests for logging context managers."""

import logging

import pytest

from taximeter.meter_logging import ContextFilter, LogContext, log_context, log_trip_context


@pytest.fixture
def logger():
    logger = logging.getLogger("test.context")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def captured_records(logger):
    """Capture log records passed through a ContextFilter."""
    records: list[logging.LogRecord] = []

    class RecordCapture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    handler = RecordCapture()
    handler.addFilter(ContextFilter())
    logger.addHandler(handler)
    yield records
    logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _clear_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.mark.unit
class TestLogContext:
    def test_adds_extra_fields(self, logger, captured_records):
        with log_context(trip_id="trip-123", status="running"):
            logger.info("Test message")

        assert captured_records[0].trip_id == "trip-123"
        assert captured_records[0].status == "running"

    def test_clears_on_exit(self, logger, captured_records):
        with log_context(trip_id="trip-002"):
            logger.info("inside")
        logger.info("outside")

        assert captured_records[0].trip_id == "trip-002"
        assert not hasattr(captured_records[1], "trip_id")

    def test_nested_context_restores_outer_fields(self, logger, captured_records):
        with log_context(trip_id="outer"):
            with log_context(trip_id="inner"):
                logger.info("inner")
            logger.info("outer")

        assert [r.trip_id for r in captured_records] == ["inner", "outer"]

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        with log_context(trip_id="from-context"):
            logger.info("explicit", extra={"trip_id": "from-extra"})

        assert captured_records[0].trip_id == "from-extra"


@pytest.mark.unit
class TestLogTripContext:
    def test_sets_trip_id(self, logger, captured_records):
        with log_trip_context(trip_id="trip-789"):
            logger.info("Trip log message")

        assert captured_records[0].trip_id == "trip-789"

    def test_missing_trip_id_uses_placeholder(self, logger, captured_records):
        with log_trip_context(None):
            logger.info("idle")

        assert captured_records[0].trip_id == "-"
