"""Runtime loader for parser settings.

Example ``config/parser.toml``::

    [parser]
    vendor_scan_limit = 3
    vendor_min_confidence = 90.0
    row_tolerance = 0.005
    check_arithmetic = true
    split_subtotal_labels = false
    arithmetic_tolerance = "0.02"
"""

from __future__ import annotations

from dataclasses import fields
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import Any

from myprice.receipt.ocr_parser.common import DEFAULT_SETTINGS, ParserSettings
from myprice.runtime.logging import get_logger
from myprice.runtime.paths import get_paths

logger = get_logger(__name__)

_FIELD_NAMES = {f.name for f in fields(ParserSettings)}


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _coerce(name: str, value: Any) -> Any:
    """Convert a TOML value to the type of the matching ParserSettings field."""
    default = getattr(DEFAULT_SETTINGS, name)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"parser.{name} must be true or false, got {value!r}")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"parser.{name} must be an integer, got {value!r}")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"parser.{name} must be a number, got {value!r}")
        return float(value)
    if isinstance(default, Decimal):
        try:
            return Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"parser.{name} must be a decimal amount, got {value!r}") from e
    return value


def settings_from_mapping(config: dict[str, Any]) -> ParserSettings:
    """Build ParserSettings from the ``[parser]`` table of a config mapping."""
    table = config.get("parser", {})
    if not isinstance(table, dict):
        raise ValueError("[parser] must be a table")

    overrides: dict[str, Any] = {}
    for name, value in table.items():
        if name not in _FIELD_NAMES:
            logger.warning("Ignoring unknown parser setting: %s", name)
            continue
        overrides[name] = _coerce(name, value)
    return ParserSettings(**overrides)


@lru_cache(maxsize=4)
def load_parser_settings(config_path: str | None = None) -> ParserSettings:
    """
    Load parser settings from parser.toml.

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        ParserSettings with file values over the built-in defaults.
    """
    path = Path(config_path) if config_path is not None else get_paths().parser_config
    config = _load_toml(path)
    if not config:
        return DEFAULT_SETTINGS
    settings = settings_from_mapping(config)
    logger.debug("Loaded parser settings from %s: %s", path, settings)
    return settings
