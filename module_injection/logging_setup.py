from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

LOGGER_NAME = "module_injection"
LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(log_path: Optional[Path] = None, level: str = "INFO") -> Dict[str, str]:
    """Attach one key-value handler to the package logger.

    Calling again swaps the previous handler, so repeated configuration never
    duplicates output.
    """
    global _HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()
        _HANDLER = None

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        kind = "file"
    else:
        handler = logging.StreamHandler()
        kind = "stream"
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _HANDLER = handler

    return {
        "log_path": str(log_path) if log_path is not None else "",
        "format": "kv",
        "handlers": kind,
        "logger_name": LOGGER_NAME,
        "level": logging.getLevelName(logger.level),
    }


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
