"""Limits, palette and logging setup shared by the UI and the core helpers."""

from __future__ import annotations

import logging
import os

# Grid rendering stops at 4 variables, truth tables at 8
MAX_KMAP_VARS = 4
MAX_TRUTH_TABLE_VARS = 8

COLOR_PALETTE = (
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
)

LOG_LEVEL_ENV = "KMAP_SIMPLIFIER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler; the level falls back to the environment."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format=LOG_FORMAT)


__all__ = [
    "COLOR_PALETTE",
    "LOG_LEVEL_ENV",
    "MAX_KMAP_VARS",
    "MAX_TRUTH_TABLE_VARS",
    "configure_logging",
]
