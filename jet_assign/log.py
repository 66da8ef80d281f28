"""Logging setup. Logs go to stderr so they never interleave with the chart on stdout."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger


LOG_FORMAT = " | ".join(
    (
        "<lk>{time:HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: str = "WARNING", *, sink: TextIO | None = None) -> int:
    logger.remove()  # drop the default DEBUG handler
    return logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)
