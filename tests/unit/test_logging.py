"""Tests for logging configuration helpers."""

import pytest
import structlog
from structlog.testing import capture_logs

from trading_places.logging import configure_logging, get_logger
from trading_places.logging.config import get_calculation_logger, log_calculation_step


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_configure_logging(reset_structlog):
    configure_logging(level="DEBUG", format_json=True, include_caller=True)

    assert structlog.is_configured()
    assert get_logger("trading_places.test") is not None


def test_calculation_step_is_logged():
    with capture_logs() as captured:
        logger = get_calculation_logger("trading_places.test")
        log_calculation_step(logger, "cargo_slots", "Ubersreik", "Base slots by size: 3", 3.0,
                             context={"size": 3})

    assert len(captured) == 1
    entry = captured[0]
    assert entry["event"] == "Calculation step"
    assert entry["log_level"] == "debug"
    assert entry["subsystem"] == "economy"
    assert entry["calculation"] == "cargo_slots"
    assert entry["settlement"] == "Ubersreik"
    assert entry["running_total"] == 3.0
    assert entry["context"] == {"size": 3}
