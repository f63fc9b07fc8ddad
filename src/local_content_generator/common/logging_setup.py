"""Central logging setup for the project."""
from __future__ import annotations
import logging
import os
import sys

def setup_logging(level: int | str | None = None) -> None:
    """
    Configure root logger for command line use.

    Args:
        level: Logging level; falls back to ``LOCAL_LLM_LOG_LEVEL`` then INFO.
    """
    if level is None:
        level = os.getenv("LOCAL_LLM_LOG_LEVEL", "INFO").upper()
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
