from __future__ import annotations

import logging
from io import StringIO

from td_importer.logging.init import (
    APP_LOGGER_NAME,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_app_logger(clean_logging):
    """setup_logging configures the td_importer logger with one labeled handler."""
    logger = setup_logging()

    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent(clean_logging):
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_labeled_prefixes(clean_logging):
    """Every level is printed with its label, SUMMARY included."""
    out = StringIO()
    logger = setup_logging(stream=out)

    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    log_summary("files=1/1")
    logger.debug("hidden")

    assert out.getvalue().splitlines() == [
        "INFO info message",
        "WARN warning message",
        "ERROR error message",
        "SUMMARY files=1/1",
    ]


def test_module_loggers_share_app_handler(clean_logging):
    out = StringIO()
    setup_logging(stream=out)

    logging.getLogger("td_importer.services.orchestrator").warning("a.csv: Row 2")

    assert out.getvalue() == "WARN a.csv: Row 2\n"
