"""loguru setup for the widget process."""

import os
import sys

from loguru import logger

_CONFIGURED = False


def setup_logging(level: str = "INFO", log_dir: str | None = None) -> None:
    """Route logs to stderr and, if *log_dir* is given, a daily rotating file.

    Only the first call per process has an effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger.remove()
    fmt = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"
    if sys.stderr is not None:
        # pythonw has no stderr
        logger.add(sys.stderr, level=level, format=fmt)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="14 days",
            level=level,
            format=fmt,
            enqueue=True,
        )
    _CONFIGURED = True
    logger.debug("Logger initialized at level {}", level)
