"""
Shared test configuration.
Puts the repository root on ``sys.path`` so ``tests.support`` and the root scripts import,
and pins the environment so ``Settings()`` is deterministic regardless of the developer's shell or ``.env``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure configuration variables have known values during tests."""

    defaults = {
        "ACCESS_TOKEN_SECRET": "test-secret",
        "ACCESS_TOKEN_EXPIRE_MINUTES": "60",
        "ALGORITHM": "HS256",
        "LOG_LEVEL": "INFO",
        "DEBUG": "false",
        "COOKIE_NAME": "token",
        "COOKIE_SECURE": "true",
        "COOKIE_SAMESITE": "none",
        "CORS_ORIGINS": "*",
        "BOOKINGS_REQUIRE_AUTH": "false",
        "DB_NAME": "HexaaDB",
        "SERVICES_COLLECTION": "services",
        "BOOKING_COLLECTION": "booking",
    }
    for key, value in defaults.items():
        monkeypatch.setenv(key, value)
    for key in ("MONGO_URI", "DB_USER", "DB_PASS", "LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
