"""Tests for logging_config module."""

import json
import logging
from collections.abc import Generator

import pytest

from devcertify.lib.logging_config import LOGGER, CustomJsonFormatter, configure_log_level


def _record(message: str = "Generating certificate") -> logging.LogRecord:
    return logging.LogRecord(
        name="devcertify",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg=message,
        args=(),
        exc_info=None,
        func="issue",
    )


def _format(formatter: CustomJsonFormatter) -> dict:
    return json.loads(formatter.format(_record()))


@pytest.fixture
def restore_log_level() -> Generator[None]:
    yield
    configure_log_level(False)


class TestCustomJsonFormatter:
    """Tests for the field filtering."""

    def test_console_fields(self) -> None:
        formatter = CustomJsonFormatter("%(levelname)s %(message)s", timestamp=True)

        payload = _format(formatter)

        assert payload["level"] == "WARNING"
        assert payload["message"] == "Generating certificate"
        assert "timestamp" in payload
        assert "funcName" not in payload
        assert "lineno" not in payload
        assert "name" not in payload

    def test_verbose_keeps_source_location(self) -> None:
        formatter = CustomJsonFormatter(
            "%(levelname)s %(funcName)s %(lineno)d %(message)s", timestamp=True, verbose=True
        )

        payload = _format(formatter)

        assert payload["funcName"] == "issue"
        assert payload["lineno"] == 42
        assert "levelname" not in payload


class TestConfigureLogLevel:
    def test_verbose_switches_to_debug(self, restore_log_level: None) -> None:
        configure_log_level(True)

        assert LOGGER.level == logging.DEBUG
        assert all(h.formatter.verbose for h in LOGGER.handlers)

    def test_default_is_info(self, restore_log_level: None) -> None:
        configure_log_level(True)
        configure_log_level(False)

        assert LOGGER.level == logging.INFO
        assert not any(h.formatter.verbose for h in LOGGER.handlers)
