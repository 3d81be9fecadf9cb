"""Tests for logging setup."""

import logging

import pytest

from taximeter.meter_logging import (
    ContextFilter,
    DefaultTripIdFilter,
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers.copy()
    original_level = root_logger.level
    yield root_logger
    root_logger.handlers = original_handlers
    root_logger.setLevel(original_level)


@pytest.mark.unit
class TestSetupLogging:
    def test_configures_single_handler(self, restore_root_logger):
        setup_logging()
        setup_logging()

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, DevFormatter)

    def test_json_output(self, restore_root_logger):
        setup_logging(level="DEBUG", json_output=True, environment="production")

        handler = restore_root_logger.handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.formatter.environment == "production"
        assert restore_root_logger.level == logging.DEBUG

    def test_attaches_filters(self, restore_root_logger):
        setup_logging()
        filter_types = {type(f) for f in restore_root_logger.handlers[0].filters}
        assert filter_types == {ContextFilter, DefaultTripIdFilter}


@pytest.mark.unit
class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("taximeter.test")
        assert logger.name == "taximeter.test"
        assert isinstance(logger, logging.Logger)
