"""Unit tests for application configuration.

Tests cover:
- Recursive merging of YAML trees
- Base plus environment overlay loading
- Settings sources and their priority
- Computed properties
"""

from __future__ import annotations

import pytest

from restaurant_reviews.core.config import Settings, get_settings
from restaurant_reviews.core.config.yaml_source import deep_merge, load_yaml_config


pytestmark = pytest.mark.unit


# =============================================================================
# YAML loading
# =============================================================================


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_merges_nested_dicts(self):
        """Should merge nested keys and let the override win."""
        base = {"auth": {"jwt": {"algorithm": "HS256", "minutes": 60}}, "x": 1}
        override = {"auth": {"jwt": {"minutes": 5}}}

        assert deep_merge(base, override) == {
            "auth": {"jwt": {"algorithm": "HS256", "minutes": 5}},
            "x": 1,
        }

    def test_does_not_mutate_inputs(self):
        """Should return a new dict."""
        base = {"a": {"b": 1}}

        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}

    def test_lists_are_replaced(self):
        """Should replace lists instead of concatenating them."""
        assert deep_merge({"origins": ["a", "b"]}, {"origins": []}) == {"origins": []}


class TestLoadYamlConfig:
    """Tests for load_yaml_config."""

    def test_overlays_environment(self, tmp_path):
        """Should apply environment files over base files."""
        (tmp_path / "base").mkdir()
        (tmp_path / "environments" / "staging").mkdir(parents=True)
        (tmp_path / "base" / "app.yaml").write_text("app:\n  name: svc\n  debug: false\n")
        (tmp_path / "environments" / "staging" / "overrides.yaml").write_text(
            "app:\n  debug: true\n"
        )

        assert load_yaml_config(tmp_path, "staging") == {
            "app": {"name": "svc", "debug": True}
        }

    def test_missing_directories(self, tmp_path):
        """Should return an empty tree when nothing exists."""
        assert load_yaml_config(tmp_path, "nowhere") == {}

    def test_empty_file(self, tmp_path):
        """Should treat an empty YAML file as no settings."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "empty.yaml").write_text("")

        assert load_yaml_config(tmp_path, "test") == {}


# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    """Tests for the Settings class."""

    def test_test_environment_overrides(self, settings):
        """Should load base YAML with the test overlay."""
        assert settings.APP_ENV == "test"
        assert settings.is_testing
        assert settings.app.debug is True
        assert settings.observability.metrics.enabled is False
        assert settings.rate_limiting.auth == "1000/minute"
        assert settings.auth.jwt.algorithm == "HS256"

    def test_get_settings_is_cached(self):
        """Should return the same instance."""
        assert get_settings() is get_settings()

    def test_environment_beats_yaml(self, monkeypatch):
        """Should let nested environment variables override YAML."""
        monkeypatch.setenv("DATABASE__HOST", "mongo.internal")

        assert Settings().database.host == "mongo.internal"

    def test_production_overlay(self, monkeypatch):
        """Should disable CORS origins in production."""
        monkeypatch.setenv("APP_ENV", "production")

        settings = Settings()

        assert settings.is_production
        assert settings.api.cors_origins == []

    def test_custom_config_dir(self, monkeypatch, tmp_path):
        """Should read YAML from CONFIG_DIR."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "db.yaml").write_text("database:\n  name: elsewhere\n")
        monkeypatch.setenv("CONFIG_DIR", str(tmp_path))

        assert Settings().database.name == "elsewhere"


class TestDatabaseUrl:
    """Tests for the database_url property."""

    def test_without_credentials(self):
        """Should build a plain URL."""
        settings = Settings(database={"host": "db", "port": 27018})

        assert settings.database_url == "mongodb://db:27018"

    def test_with_credentials(self):
        """Should quote credentials and add the auth source."""
        settings = Settings(
            database={"host": "db", "user": "app user"},
            DATABASE_PASSWORD="p@ss",
        )

        assert settings.database_url == (
            "mongodb://app+user:p%40ss@db:27017/?authSource=admin"
        )
