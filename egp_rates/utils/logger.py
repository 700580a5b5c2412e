"""Logging helpers shared by the egp_rates modules."""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "egp_rates"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure_package_logger() -> None:
    """Attach one stream handler to the package logger, once per process."""
    global _configured
    if _configured:
        return
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)
    _configured = True


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """Return a logger under the ``egp_rates`` namespace.

    Bank clients log fetches through these loggers; callers can raise the
    level with ``logging.getLogger("egp_rates").setLevel(logging.DEBUG)``.
    """
    _configure_package_logger()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(f"{PACKAGE_LOGGER_NAME}."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
