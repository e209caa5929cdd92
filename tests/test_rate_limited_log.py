"""
Tests for rate-limited logging.
"""
import logging
from unittest.mock import MagicMock

from bnb_agent_sdk._rate_limited_log import rate_limited_log, reset_rate_limits


def _logger():
    mock_logger = MagicMock(spec=logging.Logger)
    mock_logger.name = "test"
    return mock_logger


def test_repeated_message_is_suppressed():
    mock_logger = _logger()
    assert rate_limited_log("RPC down", logger_instance=mock_logger)
    assert not rate_limited_log("RPC down", logger_instance=mock_logger)
    mock_logger.warning.assert_called_once_with("RPC down")


def test_level_and_message_are_part_of_the_key():
    mock_logger = _logger()
    rate_limited_log("RPC down", level="warning", logger_instance=mock_logger)
    assert rate_limited_log("RPC down", level="error", logger_instance=mock_logger)
    assert rate_limited_log("Explorer down", level="warning", logger_instance=mock_logger)
    mock_logger.error.assert_called_once_with("RPC down")
    assert mock_logger.warning.call_count == 2


def test_intervals_are_tracked_separately():
    mock_logger = _logger()
    assert rate_limited_log("slow", interval=60, logger_instance=mock_logger)
    assert rate_limited_log("slow", interval=5, logger_instance=mock_logger)


def test_reset_allows_message_again():
    mock_logger = _logger()
    rate_limited_log("RPC down", logger_instance=mock_logger)
    reset_rate_limits()
    assert rate_limited_log("RPC down", logger_instance=mock_logger)


def test_default_logger(caplog):
    with caplog.at_level(logging.INFO, logger="bnb_agent_sdk._rate_limited_log"):
        rate_limited_log("hello", level="info")
    assert "hello" in caplog.text
