"""Static dashboard data.

The dashboard endpoints serve fixed sample payloads. They live in
fixtures/dashboard.json so the numbers can be edited without touching code.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict


FIXTURES_PATH = Path(__file__).resolve().parent / "fixtures" / "dashboard.json"

SECTIONS = ("stats", "activity", "chart", "customers")


@lru_cache(maxsize=4)
def load_fixtures(path: str = str(FIXTURES_PATH)) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    missing = [s for s in SECTIONS if s not in data]
    if missing:
        raise ValueError(f"dashboard_fixture_missing_sections: {missing}")
    return data


def get_section(name: str) -> Any:
    """Return one dashboard section, or raise KeyError for unknown names."""
    if name not in SECTIONS:
        raise KeyError(name)
    return load_fixtures()[name]
