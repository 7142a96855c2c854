"""YAML settings source merging base and per-environment files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


# src/restaurant_reviews/core/config/yaml_source.py -> project root
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "config"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``override`` merged recursively into ``base``."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(config_dir: Path, app_env: str) -> dict[str, Any]:
    """Load ``base/*.yaml`` then overlay ``environments/{app_env}/*.yaml``.

    Files inside each directory are applied in sorted order, so later files
    win on conflicting keys.
    """
    merged: dict[str, Any] = {}
    for directory in (config_dir / "base", config_dir / "environments" / app_env):
        if not directory.is_dir():
            continue
        for yaml_file in sorted(directory.glob("*.yaml")):
            with yaml_file.open(encoding="utf-8") as f:
                merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the merged YAML tree for the current APP_ENV.

    ``CONFIG_DIR`` may point at an alternative configuration directory, which
    is how container images ship their own overrides.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        config_dir = Path(os.getenv("CONFIG_DIR", str(DEFAULT_CONFIG_DIR)))
        self._yaml_data = load_yaml_config(
            config_dir, os.getenv("APP_ENV", "development")
        )

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
