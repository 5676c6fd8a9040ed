from __future__ import annotations

import logging
import sys

"""Console logging for the reorder CLI.

Each line is ``<LABEL> <message>`` with LABEL one of DEBUG, INFO, WARN,
ERROR or SUMMARY, so wrappers can grep a run and parse its closing SUMMARY
line. Modules log through ``logging.getLogger(__name__)``; everything under
``pv_reorder`` ends up on the single stdout handler installed here.
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

APP_LOGGER_NAME = "pv_reorder"
SUMMARY_LEVEL = 25  # between INFO and WARNING: shown unless the run is muted

_handler: logging.Handler | None = None


class LabeledFormatter(logging.Formatter):
    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Install the stdout handler on the app logger.

    Calling it again only changes the level.
    """
    global _handler

    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(level)
    if _handler is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(LabeledFormatter())
        for old in list(logger.handlers):
            logger.removeHandler(old)
        logger.addHandler(_handler)
        # root handlers would print every line twice
        logger.propagate = False
    _handler.setLevel(level)
    return logger


def get_logger() -> logging.Logger:
    if _handler is None:
        return setup_logging()
    return logging.getLogger(APP_LOGGER_NAME)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Drop the installed handler (tests start each CLI run from scratch)."""
    global _handler
    if _handler is not None:
        logging.getLogger(APP_LOGGER_NAME).removeHandler(_handler)
    _handler = None
