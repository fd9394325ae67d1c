"""Shared pytest fixtures for billsplit tests."""

from __future__ import annotations

from typing import Any

import pytest

from billsplit.runtime import load_parser_config, reset_paths


@pytest.fixture
def pharmacy_row_fragments() -> list[dict[str, Any]]:
    """A pharmacy line item with its qty and price printed as separate cells."""
    return [
        {
            "text": "PRODETECT INFLUENZA A/B TEST KIT 1S",
            "bounding": {"top": 1863, "left": 628, "height": 157, "width": 1053},
        },
        {"text": "2.0", "bounding": {"top": 1958, "left": 1146, "height": 43, "width": 67}},
        {"text": "22.00", "bounding": {"top": 1950, "left": 1358, "height": 44, "width": 123}},
    ]


@pytest.fixture
def isolated_project_root(tmp_path, monkeypatch):
    """Point path resolution at an empty project root and drop cached config."""
    monkeypatch.setenv("BILLSPLIT_ROOT", str(tmp_path))
    reset_paths()
    load_parser_config.cache_clear()
    yield tmp_path
    reset_paths()
    load_parser_config.cache_clear()
