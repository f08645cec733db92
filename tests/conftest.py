"""Root conftest: shared test configuration."""

import os

# Ensure tests never pick up a real secret or database
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-use-only-0123456789")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
