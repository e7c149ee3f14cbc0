"""Loguru setup for docsim.

The library is silent by default (``logger.disable("docsim")`` runs at
import time). Applications that want docsim's diagnostics call
:func:`configure_logging`.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from loguru import logger

from docsim.config import load_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def _only_docsim(record: dict) -> bool:
    return record["name"].startswith("docsim")


def configure_logging(level: Optional[str] = None, sink: Any = None) -> int:
    """Enable docsim log output on a loguru sink.

    Args:
        level: Minimum level; defaults to ``DOCSIM_LOG_LEVEL`` (or WARNING).
        sink: Any loguru sink; defaults to ``sys.stderr``.

    Returns:
        The loguru handler id, usable with ``logger.remove(handler_id)``.
    """
    level = (level or load_settings().log_level).upper()
    logger.enable("docsim")
    return logger.add(
        sink if sink is not None else sys.stderr,
        format=LOG_FORMAT,
        level=level,
        filter=_only_docsim,
        backtrace=False,
        diagnose=False,
    )


__all__ = ["configure_logging", "LOG_FORMAT"]
