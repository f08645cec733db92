"""Configuration: the token secret must come from the environment.

Invariants:
    - no JWT_SECRET → settings refuse to load
    - a secret shorter than JWT_SECRET_MIN_LENGTH → refused
    - DATABASE_URL postgresql:// is rewritten for asyncpg
"""

import pytest
from pydantic import ValidationError

from app.config import JWT_SECRET_MIN_LENGTH, Settings


def test_missing_secret_refused(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_refused(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * (JWT_SECRET_MIN_LENGTH - 1))
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_long_enough_secret_accepted(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * JWT_SECRET_MIN_LENGTH)
    assert Settings(_env_file=None).jwt_secret == "x" * JWT_SECRET_MIN_LENGTH


def test_postgres_url_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@host/db")
    assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@host/db"
