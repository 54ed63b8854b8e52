"""Test configuration for module import paths."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    src_path = Path(__file__).resolve().parents[1] / "src"
    src_value = str(src_path)
    if src_value not in sys.path:
        sys.path.insert(0, src_value)


_ensure_src_on_path()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    from amm.config import get_settings

    monkeypatch.delenv("AMM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("AMM_SIGNIFICANT_DIGITS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
