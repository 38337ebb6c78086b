"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send every ``orderflow.*`` record at *level* or above to stderr."""
    root = logging.getLogger("orderflow")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_orderflow", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._orderflow = True  # type: ignore[attr-defined]
        root.addHandler(handler)
