import logging

import pytest

from purchase_history import logging_setup
from purchase_history.logging_setup import configure_logging, get_logger, resolve_level


@pytest.fixture
def fresh_package_logger(monkeypatch: pytest.MonkeyPatch):
    """Give each test an unconfigured package logger and restore it afterwards."""

    logger = logging.getLogger(logging_setup.PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_configured", False)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_resolve_level_names_numbers_and_env(monkeypatch: pytest.MonkeyPatch):
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("30") == logging.WARNING
    assert resolve_level(None) == logging.INFO
    monkeypatch.setenv("PURCHASE_HISTORY_LOG_LEVEL", "ERROR")
    assert resolve_level(None) == logging.ERROR
    assert resolve_level("nonsense") == logging.ERROR


def test_get_logger_is_silent_until_configured(fresh_package_logger):
    get_logger("purchase_history.pipeline")
    assert [type(h) for h in fresh_package_logger.handlers] == [logging.NullHandler]


def test_configure_logging_attaches_one_stream_handler(fresh_package_logger):
    get_logger("purchase_history.pipeline")
    configure_logging("DEBUG")
    configure_logging("ERROR")

    assert [type(h) for h in fresh_package_logger.handlers] == [logging.StreamHandler]
    assert fresh_package_logger.level == logging.DEBUG
    assert fresh_package_logger.propagate is False
