"""Tests for receipt parser tuning loaded from TOML."""

from decimal import Decimal
from pathlib import Path

import pytest

from billsplit.receipt.ocr_parser.common import DEFAULT_PARSER_CONFIG
from billsplit.runtime.parser_rules import load_parser_config


def _write_rules(root: Path, content: str) -> Path:
    config_dir = root / "config"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "receipt_parser.toml"
    path.write_text(content)
    return path


def test_missing_file_uses_defaults(isolated_project_root: Path) -> None:
    assert load_parser_config() == DEFAULT_PARSER_CONFIG


def test_project_file_overrides_defaults(isolated_project_root: Path) -> None:
    _write_rules(
        isolated_project_root,
        """
[parser]
header_keywords = ["Total", "Kopitiam"]
min_text_length = 4
proximity_threshold = 0
quantity_price_threshold = 20
attach_numeric_columns = false
""",
    )

    config = load_parser_config()

    assert config.header_keywords == ("total", "kopitiam")
    assert config.min_text_length == 4
    assert config.proximity_threshold == 0
    assert config.quantity_price_threshold == Decimal("20")
    assert config.attach_numeric_columns is False
    assert config.same_line_ratio == DEFAULT_PARSER_CONFIG.same_line_ratio


def test_explicit_path(tmp_path: Path) -> None:
    path = _write_rules(tmp_path, "[parser]\nsame_line_ratio = 0.25\n")

    config = load_parser_config(str(path))

    assert config.same_line_ratio == 0.25
    assert config.header_keywords == DEFAULT_PARSER_CONFIG.header_keywords


def test_empty_parser_table_uses_defaults(tmp_path: Path) -> None:
    path = _write_rules(tmp_path, "[other]\nkey = 1\n")

    assert load_parser_config(str(path)) == DEFAULT_PARSER_CONFIG


def test_unknown_settings_are_ignored(tmp_path: Path) -> None:
    path = _write_rules(tmp_path, "[parser]\nmin_text_length = 5\nfuzzy_matching = true\n")

    config = load_parser_config(str(path))

    assert config.min_text_length == 5
    assert not hasattr(config, "fuzzy_matching")


@pytest.mark.parametrize(
    "content",
    [
        '[parser]\nheader_keywords = "total"\n',
        '[parser]\nproximity_threshold = "wide"\n',
        '[parser]\nquantity_price_threshold = "ten"\n',
        "[parser]\nsame_line_ratio = nan\n",
        "[parser]\nmin_text_length = [3]\n",
        "[parser\nmin_text_length = 3\n",
    ],
)
def test_invalid_file_falls_back_to_defaults(tmp_path: Path, content: str) -> None:
    path = _write_rules(tmp_path, content)

    assert load_parser_config(str(path)) == DEFAULT_PARSER_CONFIG
