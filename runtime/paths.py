"""Centralized path management for the myprice project.

This module provides a single source of truth for the directories the CLI
and server read from and write to.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root: MYPRICE_HOME if set, else the working directory."""
    home = os.environ.get("MYPRICE_HOME")
    if home:
        return Path(home).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, ensuring consistency
    across all modules.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def parser_config(self) -> Path:
        """Parser settings TOML file."""
        return self.config / "parser.toml"

    # --- Output paths ---
    @property
    def output(self) -> Path:
        """Reconstructed receipt JSON files (output/)."""
        return self.root / "output"

    def ensure_output_directory(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output.mkdir(parents=True, exist_ok=True)


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths, e.g. after MYPRICE_HOME changes."""
    global _paths
    _paths = None
