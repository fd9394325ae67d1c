"""Runtime loader for heuristic receipt parser tuning."""

from __future__ import annotations

import math
from dataclasses import fields, replace
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import Any

from billsplit.receipt.ocr_parser.common import DEFAULT_PARSER_CONFIG, ParserConfig
from billsplit.runtime.logging import get_logger
from billsplit.runtime.paths import get_paths

logger = get_logger(__name__)

_CONFIG_FIELDS = {f.name for f in fields(ParserConfig)}


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


def _coerce_setting(key: str, value: Any) -> Any:
    if key == "header_keywords":
        if not isinstance(value, list) or not all(isinstance(kw, str) for kw in value):
            raise ValueError("header_keywords must be a list of strings")
        return tuple(kw.lower() for kw in value)
    if key == "attach_numeric_columns":
        return bool(value)
    try:
        if key == "min_text_length":
            return int(value)
        if key == "quantity_price_threshold":
            number = Decimal(str(value))
        else:
            number = float(value)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise ValueError(f"{key} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return number


def _normalize_overrides(section: dict[str, Any]) -> dict[str, Any]:
    """Coerce TOML values to ParserConfig field types.

    Raises:
        ValueError: if a value cannot be used for its field.
    """
    overrides: dict[str, Any] = {}
    for key, value in section.items():
        if key not in _CONFIG_FIELDS:
            logger.warning("Ignoring unknown receipt parser setting: %s", key)
            continue
        overrides[key] = _coerce_setting(key, value)
    return overrides


@lru_cache(maxsize=4)
def load_parser_config(config_path: str | None = None) -> ParserConfig:
    """
    Load parser thresholds from the ``[parser]`` table of receipt_parser.toml.

    An unreadable file or an invalid value is logged and the defaults are
    used, so a bad edit never takes the parser down.

    Args:
        config_path: Optional TOML path override. If None, uses the project path.

    Returns:
        ParserConfig with file overrides applied on top of the defaults.
    """
    path = Path(config_path) if config_path is not None else get_paths().receipt_parser_rules
    try:
        data = _load_toml(path)
        section = data.get("parser", {})
        if not isinstance(section, dict) or not section:
            return DEFAULT_PARSER_CONFIG
        overrides = _normalize_overrides(section)
    except ValueError as e:
        logger.error("Invalid receipt parser settings in %s, using defaults: %s", path, e)
        return DEFAULT_PARSER_CONFIG

    config = replace(DEFAULT_PARSER_CONFIG, **overrides)
    logger.debug("Loaded receipt parser settings from %s: %s", path, sorted(section))
    return config
