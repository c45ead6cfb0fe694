"""Logging utilities for fedoractl.

Provides logger setup and an operation context that logs start, completion
and failure of repository writes.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Optional

# =============================================================================
# Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(
    level: int = logging.WARNING,
    *,
    quiet: bool = False,
    verbose: bool = False,
) -> None:
    """Configure logging for fedoractl.

    Args:
        level: Base logging level.
        quiet: If True, only show errors.
        verbose: If True, show debug messages.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


# =============================================================================
# Log Context
# =============================================================================


class LogContext:
    """Log the start, completion and failure of a repository write.

    The context fields (``pid``, ``dsid``...) are appended to every message
    so interleaved writes can be told apart.
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        **fields: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger(__name__)
        self.fields = ", ".join(f"{k}={v}" for k, v in fields.items() if v is not None)
        self._started = 0.0

    def __enter__(self) -> LogContext:
        self._started = time.monotonic()
        self.logger.info("Starting %s (%s)", self.operation, self.fields)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        elapsed = time.monotonic() - self._started
        if exc_type is None:
            self.logger.info("%s completed in %.2fs", self.operation, elapsed)
        else:
            self.logger.error("%s failed after %.2fs: %s", self.operation, elapsed, exc_val)

    def warning(self, message: str, *args: Any) -> None:
        """Log a warning tagged with the operation and its fields."""
        self.logger.warning(f"[{self.operation}] {message} ({self.fields})", *args)
