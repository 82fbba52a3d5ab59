"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root logger with a single stdout handler.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
    """
    if isinstance(level, str):
        level = level.upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
