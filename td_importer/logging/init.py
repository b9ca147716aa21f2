from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Application logging: one ``td_importer`` logger, ``LABEL message`` lines.

Labels: DEBUG | INFO | WARN | ERROR | CRITICAL | SUMMARY

Package modules log through ``logging.getLogger(__name__)``; being children of
``td_importer`` they reach the same handler. Output goes to stderr unless a
stream is given, because stdout may carry the generated TD.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

APP_LOGGER_NAME = "td_importer"

# INFO(20) と WARNING(30) の間
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Prefix each message with a short level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _labeled_handler(stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LabeledFormatter())
    return handler


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """Configure the application logger once and return it.

    Later calls return the same logger untouched until reset_logging().
    The level starts at INFO; the CLI lowers it for ``--debug``.
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    app = logging.getLogger(APP_LOGGER_NAME)
    app.setLevel(logging.INFO)
    # 再設定時にハンドラが重複しないよう入れ替える
    app.handlers.clear()
    app.addHandler(_labeled_handler(stream if stream is not None else sys.stderr))
    app.propagate = False

    _logger = app
    return app


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(message: str) -> None:
    """Emit ``message`` at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger (tests call this between CLI runs)."""
    global _logger
    _logger = None
