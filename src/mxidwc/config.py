"""Configuration loading and validation."""

from __future__ import annotations

import os
from typing import Any

import yaml
from pydantic import BaseModel, Field, StrictStr

from mxidwc.errors import ConfigError, ConfigNotFoundError

__all__ = ["AllowlistSettings", "Config"]


class AllowlistSettings(BaseModel):
    """Shape of an allow-list section once read from configuration."""

    allowed_users: list[StrictStr] = Field(default_factory=list)


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self.path: str | None = None

    @classmethod
    def load(cls, yaml_path: str) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or is not a mapping.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}", cause=e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        config = cls(data)
        config.path = yaml_path
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
