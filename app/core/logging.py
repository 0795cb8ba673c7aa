"""
Logging setup.

Configures the root logger once at application startup from
``settings.LOG_LEVEL``.  Modules log through ``logging.getLogger(__name__)``.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with a single stderr handler."""
    resolved = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved)

    # Remove existing handlers to avoid duplicate output on reload
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
