"""Logger names used by the container and an opt-in console setup."""

import logging
from typing import Optional

from scenewire.config import load_config

__all__ = [
    "ROOT_LOGGER_NAME",
    "LIFECYCLE_LOGGER_NAME",
    "DISCOVERY_LOGGER_NAME",
    "PROVIDERS_LOGGER_NAME",
    "INJECTION_LOGGER_NAME",
    "configure_logging",
]

ROOT_LOGGER_NAME = "scenewire"
LIFECYCLE_LOGGER_NAME = "scenewire.lifecycle"
DISCOVERY_LOGGER_NAME = "scenewire.discovery"
PROVIDERS_LOGGER_NAME = "scenewire.providers"
INJECTION_LOGGER_NAME = "scenewire.injection"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_handler: Optional[logging.Handler] = None

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the ``scenewire`` logger.

    Calling it again replaces the previous handler rather than adding another.

    Args:
        level: Level name such as ``"DEBUG"``; unknown names fall back to WARNING.
            Defaults to ``log_level`` from :func:`scenewire.config.load_config`.

    Returns:
        The configured ``scenewire`` logger.
    """
    global _handler

    if level is None:
        level = load_config().log_level

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(_handler)

    resolved = logging.getLevelName(level.strip().upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.WARNING)
    return logger
