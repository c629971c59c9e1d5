"""Shared fixtures for es2go tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def cafe_mapping() -> dict[str, Any]:
    return {
        "mappings": {
            "properties": {
                "cafe_name": {"type": "text"},
                "average_rating": {"type": "float"},
                "menu_items": {
                    "type": "nested",
                    "properties": {"item_name": {"type": "text"}},
                },
            }
        }
    }


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
