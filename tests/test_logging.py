"""
Unit tests for logging setup.
"""

import json
import logging
from unittest.mock import patch

import pytest
import structlog

from lx_bucket.config import get_settings
from lx_bucket.logging import (
    add_component_context, configure_logging, configure_logging_from_settings, get_logger
)


class TestLogging:
    """Test cases for structured logging."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        """Restore structlog defaults and the root level after each test."""
        root_level = logging.getLogger().level
        yield
        structlog.reset_defaults()
        logging.getLogger().setLevel(root_level)

    def test_add_component_context(self):
        """Test the component is taken from the logger name."""
        event_dict = add_component_context(None, "info", {"logger": "lx_bucket.bucket"})

        assert event_dict["component"] == "bucket"

    def test_add_component_context_without_dot(self):
        """Test loggers without a dotted name get no component."""
        event_dict = add_component_context(None, "info", {"logger": "root"})

        assert "component" not in event_dict

    def test_json_output(self, caplog):
        """Test configured logging renders JSON events."""
        caplog.set_level(logging.INFO)
        configure_logging("info", json_logs=True)

        get_logger("lx_bucket.tests").info("Bucket checked", fill=3.0)

        payloads = [json.loads(record.getMessage()) for record in caplog.records
                    if record.name == "lx_bucket.tests"]
        assert len(payloads) == 1
        assert payloads[0]["event"] == "Bucket checked"
        assert payloads[0]["fill"] == 3.0
        assert payloads[0]["level"] == "info"
        assert payloads[0]["component"] == "tests"
        assert payloads[0]["logger"] == "lx_bucket.tests"
        assert "timestamp" in payloads[0]

    def test_level_filtering(self, caplog):
        """Test events below the enabled level are dropped."""
        caplog.set_level(logging.WARNING)
        configure_logging("warning")

        get_logger("lx_bucket.filtered").info("Dropped")

        assert [r for r in caplog.records if r.name == "lx_bucket.filtered"] == []

    def test_timestamp_is_iso(self, caplog):
        """Test events carry a single ISO-8601 timestamp."""
        caplog.set_level(logging.INFO)
        configure_logging("info")

        get_logger("lx_bucket.stamped").info("Stamped")

        payloads = [json.loads(record.getMessage()) for record in caplog.records
                    if record.name == "lx_bucket.stamped"]
        assert isinstance(payloads[0]["timestamp"], str)
        assert "T" in payloads[0]["timestamp"]

    def test_log_level_from_environment(self, monkeypatch):
        """Test LX_BUCKET_LOG_LEVEL sets the root logger level."""
        monkeypatch.setenv("LX_BUCKET_LOG_LEVEL", "debug")

        configure_logging_from_settings()

        assert logging.getLogger().level == logging.DEBUG

    def test_settings_are_passed_through(self, monkeypatch):
        """Test log level and renderer choice come from settings."""
        monkeypatch.delenv("LX_BUCKET_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LX_BUCKET_JSON_LOGS", "false")

        with patch("lx_bucket.logging.configure_logging") as mock_configure:
            configure_logging_from_settings()

        mock_configure.assert_called_once_with("info", json_logs=False)

    def test_explicit_settings(self):
        """Test explicit settings win over the environment."""
        settings = get_settings(log_level="error", json_logs=True)

        with patch("lx_bucket.logging.configure_logging") as mock_configure:
            configure_logging_from_settings(settings)

        mock_configure.assert_called_once_with("error", json_logs=True)
