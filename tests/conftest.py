"""
Fixtures shared by the user sync tests.
"""

from typing import List, Sequence

import pytest

from user_sync.config import Settings, get_settings
from user_sync.sync.application import CanonicalUser, IUserPublisher, IUserRepository

SYNC_ENV_VARS = [
    "DB_HOST",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_PORT",
    "API_URL",
    "API_KEY",
    "LOG_LEVEL",
]

SAMPLE_ROWS = [
    {"id": 1, "name": "A", "email": "a@x.com", "created_at": "2024-01-01"},
    {"id": 2, "name": "B", "email": "b@x.com", "created_at": "2024-01-02"},
    {"id": 3, "name": "C", "email": "c@x.com", "created_at": "2024-01-03"},
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and any .env file."""
    for name in SYNC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings():
    """Build Settings from keyword values; pass None to leave a value unset."""

    def _make(**overrides) -> Settings:
        values = {
            "db_host": "db.internal",
            "db_user": "sync",
            "db_password": "s3cret",
            "db_name": "app",
            "api_url": "https://api.example.com/users",
        }
        values.update(overrides)
        values = {k: v for k, v in values.items() if v is not None}
        return Settings(_env_file=None, **values)

    return _make


class FakeUserRepository(IUserRepository):
    """Repository returning canned rows, or raising a canned error."""

    def __init__(self, rows=None, error: Exception | None = None):
        self.rows = list(rows or [])
        self.error = error
        self.calls = 0

    async def fetch_users(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.rows)


class FakeUserPublisher(IUserPublisher):
    """Publisher recording every batch it is given."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.batches: List[List[CanonicalUser]] = []

    async def send(self, users: Sequence[CanonicalUser]) -> None:
        self.batches.append(list(users))
        if self.error:
            raise self.error
