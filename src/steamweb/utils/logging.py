"""Logging helpers."""

import logging
import os

_CONFIGURED = False

LOG_LEVEL_ENV = "STEAMWEB_LOG_LEVEL"


def _configure_package_logger() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    package_logger = logging.getLogger("steamweb")
    # Library loggers stay silent unless the application configures handlers.
    package_logger.addHandler(logging.NullHandler())
    # Level is left NOTSET (inherited from the application) unless overridden.
    level_name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if level_name:
        level = logging.getLevelName(level_name)
        if isinstance(level, int):
            package_logger.setLevel(level)
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the steamweb namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Configured ``logging.Logger``
    """
    _configure_package_logger()
    return logging.getLogger(name)


def mask_key(uri: str, key: str) -> str:
    """Replace the API key in a URI so it never reaches log output."""
    if not key:
        return uri
    return uri.replace(key, "***")
