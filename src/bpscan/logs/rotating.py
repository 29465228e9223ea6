from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from bpscan._paths import log_level_name, logs_dir

LOG_NAME = "bpscan.log"


def log_path() -> Path:
    return logs_dir() / LOG_NAME


def get_logger(name: str = "bpscan") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, log_level_name()))
    handler = logging.handlers.RotatingFileHandler(
        log_path(), maxBytes=1_500_000, backupCount=5, encoding="utf-8"
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
