"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _default_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset structured logging to defaults for each test."""
    from core.logging_config import configure_logging

    monkeypatch.delenv("YAML_ENRICH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("YAML_ENRICH_LOG_FORMAT", raising=False)
    configure_logging()
