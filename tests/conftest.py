# tests/conftest.py

"""Shared pytest fixtures for all flight_offers tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point Settings.LOGS_DIR at a temp dir so runs don't litter logs/."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
