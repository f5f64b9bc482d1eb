"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real API keys or production secrets
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")
# Minimum bcrypt cost keeps password hashing fast in tests
os.environ.setdefault("BCRYPT_ROUNDS", "4")
