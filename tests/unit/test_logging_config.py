"""
Unit tests for structured logging setup and fill-pass context.
"""

import json

import pytest
import structlog

from field_matcher.logging_config import bind_fill_context, clear_fill_context, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.mark.unit
class TestSetupLogging:
    """Test setup_logging."""

    def test_json_output(self, capsys):
        """Test events render as JSON lines with bound context."""
        setup_logging(level="DEBUG", json_output=True)
        bind_fill_context(fill_pass="abc123")

        structlog.get_logger("test").info("fill_completed", filled=2)

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event["event"] == "fill_completed"
        assert event["fill_pass"] == "abc123"
        assert event["level"] == "info"

    def test_level_filtering(self, capsys):
        """Test events below the level are dropped."""
        setup_logging(level="WARNING", json_output=True)

        structlog.get_logger("test").debug("option_no_match")

        assert capsys.readouterr().out == ""


@pytest.mark.unit
class TestFillContext:
    """Test bind_fill_context and clear_fill_context."""

    def test_clear_selected_keys(self):
        """Test only the named keys are unbound."""
        bind_fill_context(fill_pass="abc123", request="r1")

        clear_fill_context("fill_pass")

        assert structlog.contextvars.get_contextvars() == {"request": "r1"}

    def test_clear_all(self):
        """Test all context is dropped without keys."""
        bind_fill_context(fill_pass="abc123")

        clear_fill_context()

        assert structlog.contextvars.get_contextvars() == {}
