"""Shared test configuration for the restaurant review service tests.

The environment is fixed before any application module is imported so that
module-level singletons (settings, rate limiter) pick up the test
configuration.
"""

from __future__ import annotations

import os


os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-minimum-32-characters-long")

import pytest  # noqa: E402

from restaurant_reviews.core.config import Settings, get_settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """The cached test settings."""
    return get_settings()
