"""Logging setup for the myprice namespace.

Runtime modules ask for a logger with ``get_logger(__name__)``. The parser
modules under ``receipt/`` call ``logging.getLogger(__name__)`` instead; their
names already start with ``myprice.``, so they end up on the same handler.

The level comes from MYPRICE_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR) and
defaults to INFO. DEBUG output adds line numbers.
"""

import logging
import os
import sys

LOGGER_NAMESPACE = "myprice"

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_ENV_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def _level_from_env() -> int:
    return _ENV_LEVELS.get(os.environ.get("MYPRICE_LOG_LEVEL", "").upper(), DEFAULT_LOG_LEVEL)


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the ``myprice`` logger. Later calls are no-ops.

    Args:
        level: Explicit level; None means MYPRICE_LOG_LEVEL or DEFAULT_LOG_LEVEL.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = _level_from_env()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter_for(level))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    namespace_logger.addHandler(handler)
    namespace_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``myprice`` namespace, configuring it on first use."""
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Switch the namespace level, and the handler format with it."""
    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    for handler in namespace_logger.handlers:
        handler.setFormatter(_formatter_for(level))
