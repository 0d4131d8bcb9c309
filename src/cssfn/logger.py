"""Verbosity-controlled logging for cssfn.

The ``-v`` count on the command line picks how much is reported:

    0  errors only (default)
    1  CHANGES: every declaration value that was rewritten
    2  CHECKS: every custom function call and its arguments
    3  DEBUG: everything else, such as failing custom functions
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

CHANGES = 25
CHECKS = 15

logging.addLevelName(CHANGES, "CHANGES")
logging.addLevelName(CHECKS, "CHECKS")

# Logging level for each verbosity, from -v count 0 upward
_VERBOSITY_LEVELS = (logging.ERROR, CHANGES, CHECKS, logging.DEBUG)


class CssfnLogger(logging.Logger):
    """Logger with one method per verbosity step above errors."""

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES):
            self._log(CHANGES, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS):
            self._log(CHECKS, msg, args, **kwargs)


def get_logger() -> CssfnLogger:
    """Return the shared "cssfn" logger."""
    previous = logging.getLoggerClass()
    logging.setLoggerClass(CssfnLogger)
    try:
        logger = logging.getLogger("cssfn")
    finally:
        logging.setLoggerClass(previous)
    assert isinstance(logger, CssfnLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send cssfn messages up to *verbosity* to *stream* (stderr by default).

    Replaces any handler installed by an earlier call.
    """
    level = _VERBOSITY_LEVELS[min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)]
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = get_logger()
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def reset_logger() -> None:
    """Remove handlers and go back to errors only."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)
