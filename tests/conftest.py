"""Shared pytest fixtures for myprice tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from myprice.runtime.paths import reset_paths
from myprice.runtime.settings import load_parser_settings


@pytest.fixture(autouse=True)
def project_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point MYPRICE_HOME at a throwaway directory for every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("MYPRICE_HOME", str(home))
    reset_paths()
    load_parser_settings.cache_clear()
    yield home
    reset_paths()
    load_parser_settings.cache_clear()
