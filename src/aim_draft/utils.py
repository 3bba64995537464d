"""Logging helpers shared by the CLIs."""

import logging
import os


def configure_logging(logger_name: str, default_level: str = "WARNING") -> logging.Logger:
    """
    Configure root logging once (level from AIM_LOG_LEVEL) and return the named logger.
    Calling it again does not add handlers.
    """
    level_name = os.environ.get("AIM_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        root.setLevel(level)
    return logging.getLogger(logger_name)


def mask_secret(value: str | None, visible: int = 6) -> str:
    """Short prefix of a secret for logs, e.g. 'AIzaSy...'."""
    if not value:
        return "NOT FOUND"
    return f"{value[:visible]}..."
