"""Tests for logging configuration accessors."""

import logging

from runlog.base import config as config_module
from runlog.base.config import (
    LogConfig,
    get_default_config,
    get_default_logger,
    get_diagnostics_logger,
    set_default_config,
    set_default_logger,
)


def test_default_logger_round_trip(monkeypatch):
    monkeypatch.setattr(config_module, "_default_logger", config_module._default_logger)
    logger = logging.getLogger("runlog.custom")

    set_default_logger(logger)
    assert get_default_logger() is logger

    set_default_logger(None)
    assert get_default_logger() is None


def test_default_config_round_trip(monkeypatch):
    monkeypatch.setattr(config_module, "_default_config", config_module._default_config)
    custom = LogConfig(colorize_logging=False, run_key_length=4)

    set_default_config(custom)

    assert get_default_config() is custom


def test_diagnostics_logger_writes_to_stderr(monkeypatch):
    logger = logging.getLogger(config_module.DIAGNOSTICS_LOGGER_NAME)
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)

    diagnostics = get_diagnostics_logger()

    assert diagnostics is logger
    assert diagnostics.propagate is False
    assert [type(handler) for handler in diagnostics.handlers] == [logging.StreamHandler]
