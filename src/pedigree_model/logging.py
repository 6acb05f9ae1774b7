"""Logging setup for the pedigree model.

Events are JSON lines on stderr, written through the stdlib ``logging``
handler installed by :func:`configure_logging`. Stdout is left to the CLI,
which prints normalized records there.
"""
from __future__ import annotations

import logging
import sys
from typing import Literal, get_args

import structlog

from pedigree_model.config import CONFIG

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)

ROOT_LOGGER = "pedigree_model"


def configure_logging(level: LogLevel = "INFO") -> None:
    """Route structlog events for this package to stderr at ``level``.

    Loggers are not cached, so calling this again (as ``--log-level`` does)
    takes effect for module loggers created at import time.
    """
    threshold = logging.getLevelName(level)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=threshold)
    logging.getLogger(ROOT_LOGGER).setLevel(threshold)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = ROOT_LOGGER):
    return structlog.get_logger(name)


configure_logging(CONFIG.log_level)
