"""Runtime infrastructure for the myprice project.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser settings via load_parser_settings()

Usage:
    from myprice.runtime import get_logger, get_paths, load_parser_settings

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.output)
"""

from myprice.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from myprice.runtime.paths import ProjectPaths, get_paths, reset_paths
from myprice.runtime.settings import load_parser_settings, settings_from_mapping

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "load_parser_settings",
    "settings_from_mapping",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
