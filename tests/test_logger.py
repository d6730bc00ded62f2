"""Tests for the logging wrapper."""

import logging
from unittest.mock import patch

import pytest

import leanquery.logger as logger_module
from leanquery.client import Response
from leanquery.logger import _LEVELS, PACKAGE_LOGGER, Logger, get_logger, setup_global_logging
from leanquery.settings import settings


@pytest.fixture
def unconfigured():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    saved_level = package_logger.level
    logger_module._configured = False
    yield
    logger_module._configured = True
    package_logger.setLevel(saved_level)


class TestSetupGlobalLogging:
    @pytest.mark.parametrize(
        "level,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("INVALID", logging.INFO),
        ],
    )
    def test_levels(self, unconfigured, level, expected):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging(level=level)
            mock_basicconfig.assert_called_once()
            _, kwargs = mock_basicconfig.call_args
            assert kwargs["level"] == expected
            assert "%(name)s" in kwargs["format"]
            assert logging.getLogger(PACKAGE_LOGGER).level == expected

    def test_idempotent(self):
        logger_module._configured = True
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging()
            mock_basicconfig.assert_not_called()


class TestLogger:
    @pytest.fixture
    def logger(self, unconfigured):
        with patch("logging.basicConfig"):
            return Logger("test_logger")

    def test_get_logger(self, unconfigured):
        with patch("logging.basicConfig"):
            assert get_logger("Query").name == "leanquery.Query"
            assert get_logger("leanquery.client").name == "leanquery.client"
            assert get_logger("leanquery").name == "leanquery"
            assert get_logger().name == "leanquery"
            assert get_logger("leanqueryx").name == "leanquery.leanqueryx"

    def test_initialization_configures_from_settings(self, unconfigured):
        with patch.object(settings, "LOG_LEVEL", "DEBUG"):
            with patch("leanquery.logger.setup_global_logging") as mock_setup:
                Logger("test")
                mock_setup.assert_called_once_with("DEBUG")

    @pytest.mark.parametrize("method", ["debug", "info", "warning", "error", "critical"])
    def test_delegates(self, logger, method):
        with patch.object(logger._logger, method) as mock_method:
            getattr(logger, method)("Message %s", "x", extra={"key": "value"})
            mock_method.assert_called_once_with("Message %s", "x", extra={"key": "value"})

    @pytest.mark.parametrize("level,method", [("DEBUG", "debug"), ("debug", "debug"), ("INFO", "info"), ("", "info")])
    def test_message_routing(self, logger, level, method):
        with patch.object(settings, "LOG_LEVEL", level):
            with patch.object(logger, method) as mock_method:
                logger.message("Test message")
                mock_method.assert_called_once_with("Test message")

    @pytest.mark.parametrize("level", ["WARNING", "ERROR", "CRITICAL"])
    def test_message_at_configured_level(self, logger, level):
        with patch.object(settings, "LOG_LEVEL", level):
            with patch.object(logger._logger, "log") as mock_log:
                logger.message("Test message")
                args, _ = mock_log.call_args
                assert args[0] == _LEVELS[level]


def test_query_logs_failed_find(make_query, fake_transport, caplog):
    fake_transport.response = Response(status_code=500, error="boom")
    with caplog.at_level(logging.WARNING, logger="leanquery.Query"):
        make_query().find()
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_transport_logger_is_namespaced():
    from leanquery.client import HTTPTransport

    transport = HTTPTransport(app_id="id", app_key="key", api_server="https://api.example.com")
    assert transport.logger.name == "leanquery.HTTPTransport"
    transport.close()
