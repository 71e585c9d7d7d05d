"""Unit tests for the logging configuration."""

import io
import logging

import pytest

from incstats.logging import configure_logging, resolve_level


def test_configure_logging(mocker):
    """Test that the logging is configured correctly."""
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging(level="debug")
    mock_basic_config.assert_called_with(
        level=logging.DEBUG, format="%(message)s", stream=mocker.ANY
    )

    stream = io.StringIO()
    configure_logging(level="INFO", json_output=True, stream=stream)
    mock_basic_config.assert_called_with(level=logging.INFO, format="%(message)s", stream=stream)

    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging(level="invalid")


def test_resolve_level():
    """Level names are case-insensitive."""
    assert resolve_level("Warning") == logging.WARNING
    assert resolve_level("critical") == logging.CRITICAL
