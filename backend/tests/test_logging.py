"""
Tests for logging setup.
"""

import logging

import structlog

from concert_booking.core.config import Settings
from concert_booking.core.logging import STORE_LOGGER, setup_logging, wants_json


def _structlog_handlers():
    return [
        h for h in logging.getLogger().handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]


def test_json_only_in_production_without_debug():
    assert wants_json(Settings(ENVIRONMENT="production"))
    assert not wants_json(Settings(ENVIRONMENT="production", DEBUG=True))
    assert not wants_json(Settings(ENVIRONMENT="development"))


def test_store_logger_level_is_separate():
    setup_logging(Settings(LOG_LEVEL="WARNING", STORE_LOG_LEVEL="DEBUG"))

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger(STORE_LOGGER).level == logging.DEBUG
    assert logging.getLogger(f"{STORE_LOGGER}.reservation_service").getEffectiveLevel() == logging.DEBUG


def test_setup_twice_keeps_one_handler():
    setup_logging(Settings())
    setup_logging(Settings())

    assert len(_structlog_handlers()) == 1
