"""Tests for support-directory config and the rotating logger."""

from __future__ import annotations

import logging
import logging.handlers

from bpscan._paths import app_support_dir, log_level_name
from bpscan.logs.rotating import get_logger, log_path


def test_support_dir_from_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("BPSCAN_HOME", str(tmp_path / "support"))
    assert app_support_dir() == tmp_path / "support"
    assert log_path() == tmp_path / "support" / "logs" / "bpscan.log"


def test_log_level_name(monkeypatch) -> None:
    monkeypatch.setenv("BPSCAN_LOG_LEVEL", "debug")
    assert log_level_name() == "DEBUG"
    monkeypatch.setenv("BPSCAN_LOG_LEVEL", "chatty")
    assert log_level_name() == "INFO"
    monkeypatch.delenv("BPSCAN_LOG_LEVEL")
    assert log_level_name("WARNING") == "WARNING"


def test_get_logger_installs_rotating_handler_once(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("BPSCAN_HOME", str(tmp_path))
    name = "bpscan.test_rotating"
    logger = get_logger(name)
    try:
        handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1_500_000
        assert handlers[0].backupCount == 5
        assert get_logger(name) is logger
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
