"""
Opt-in console logging for decomo.

Library modules only create loggers under the ``decomo`` namespace; nothing
here runs at import time. Applications call :func:`configure_decomo_logging`
once, or configure the root logger themselves.
"""

from __future__ import annotations

import logging
from typing import IO

LOGGER_NAME = "decomo"
DEFAULT_FORMAT = "%(name)s: %(message)s"


def configure_decomo_logging(
    *,
    level: int | str = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Attach a stream handler to the ``decomo`` logger.

    Args:
        level: Numeric level or a level name such as ``"DEBUG"``.
        fmt: Format string for the handler.
        stream: Target stream; stderr when None.

    Returns:
        The ``decomo`` logger. It is returned untouched when the root logger
        or the ``decomo`` logger already has handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logging.getLogger().handlers or logger.handlers:
        return logger

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level {level!r}.")
        level = resolved

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "configure_decomo_logging"]
