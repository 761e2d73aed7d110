"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add project root and src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_path in (project_root / "src", project_root):
        if str(import_path) not in sys.path:
            sys.path.insert(0, str(import_path))


@pytest.fixture(autouse=True)
def _isolated_bomrepo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear bomrepo environment overrides and restore default logging."""
    from core.logging_config import configure_logging

    for name in (
        "BOMREPO_DATA_ROOT",
        "BOMREPO_STORAGE_BACKEND",
        "BOMREPO_S3_BUCKET",
        "BOMREPO_S3_PREFIX",
        "BOMREPO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    configure_logging()
