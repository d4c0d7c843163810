from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Makes the chirpy package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chirpy.core import config as core_config  # noqa: E402
from chirpy.repositories.json_storage import JSONStore  # noqa: E402

TEST_SECRET = "test-secret-do-not-use"


class FakeClock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, now: float = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def settings_env(tmp_path, monkeypatch):
    """Cheap Argon2 parameters, a throwaway database path and a fixed secret for every test."""
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "database.json"))
    monkeypatch.setenv("STATIC_ROOT", str(tmp_path))
    monkeypatch.setenv("UNIQUE_EMAILS", "false")
    monkeypatch.setenv("ARGON2_TIME_COST", "1")
    monkeypatch.setenv("ARGON2_MEMORY_COST", "8")
    monkeypatch.setenv("ARGON2_PARALLELISM", "1")
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(tmp_path):
    return JSONStore.open(tmp_path / "database.json")
