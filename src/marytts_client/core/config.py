"""Configuration system with YAML loading and user overrides."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from marytts_client.core.constants import (
    CONFIG_DIR,
    DEFAULT_HOST,
    DEFAULT_LOCALE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
)
from marytts_client.core.exceptions import ConfigError


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return data


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class RequestDefaults:
    locale: str = DEFAULT_LOCALE
    voice: Optional[str] = None


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    defaults: RequestDefaults = field(default_factory=RequestDefaults)
    max_workers: int = DEFAULT_MAX_WORKERS
    logging: dict = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "AppConfig":
        """Load config from YAML, apply the user file on top."""
        config_data: dict[str, Any] = {}

        default_path = CONFIG_DIR / "default.yaml"
        if default_path.exists():
            config_data = _read_yaml(default_path)

        # Apply user override
        if config_path:
            user_path = Path(config_path)
            if not user_path.exists():
                raise ConfigError(f"User config not found: {user_path}")
            config_data = deep_merge(config_data, _read_yaml(user_path))

        return cls._from_dict(config_data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        server_data = data.get("server") or {}
        defaults_data = data.get("defaults") or {}

        try:
            max_workers = int(data.get("max_workers", DEFAULT_MAX_WORKERS))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"max_workers must be an integer: {e}") from e
        if max_workers < 1:
            raise ConfigError("max_workers must be at least 1")

        return cls(
            server=ServerConfig(**{
                k: v for k, v in server_data.items()
                if k in ServerConfig.__dataclass_fields__
            }),
            defaults=RequestDefaults(**{
                k: v for k, v in defaults_data.items()
                if k in RequestDefaults.__dataclass_fields__
            }),
            max_workers=max_workers,
            logging=data.get("logging") or {},
        )
