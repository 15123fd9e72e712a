"""
shardstore configuration — loads and merges config from multiple sources.

Precedence (highest to lowest):
1. Explicit overrides (passed in code)
2. Environment variables (SHARDSTORE_*)
3. Project config (./shardstore.toml)
4. User config (~/.shardstore/config.toml)
5. Defaults (hardcoded)

Environment variable mapping:
    SHARDSTORE_BASE_DIRECTORY → storage.base_directory
    SHARDSTORE_PLATFORM → storage.platform
    SHARDSTORE_LOG_DIR → logging.log_dir
    SHARDSTORE_LOG_LEVEL → logging.console_level
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from shardstore.core.errors import ConfigError

PLATFORMS = ("auto", "posix", "windows")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Config Sub-Models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class StorageConfig(BaseModel):
    """Where and how blobs are stored."""

    base_directory: str = "shardstore-data"
    platform: str = "auto"

    @field_validator("platform")
    @classmethod
    def _known_platform(cls, value: str) -> str:
        value = value.lower().strip()
        if value not in PLATFORMS:
            raise ValueError(f"platform must be one of {', '.join(PLATFORMS)}")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_dir: str | None = None
    console_level: str = "WARNING"
    file_level: str = "DEBUG"

    @field_validator("console_level", "file_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper().strip()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Main Config
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ShardStoreConfig(BaseModel):
    """Root configuration for shardstore."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @staticmethod
    def load(
        overrides: dict[str, Any] | None = None,
        project_path: Path | None = None,
        user_path: Path | None = None,
    ) -> ShardStoreConfig:
        """
        Load configuration from all sources and merge.

        Precedence: overrides > env vars > project toml > user toml > defaults
        """
        merged: dict[str, Any] = {}

        user_config_path = user_path or Path.home() / ".shardstore" / "config.toml"
        if user_config_path.exists():
            _deep_merge(merged, _load_toml(user_config_path))

        project_config_path = project_path or Path.cwd() / "shardstore.toml"
        if project_config_path.exists():
            _deep_merge(merged, _load_toml(project_config_path))

        _deep_merge(merged, _load_from_env())

        if overrides:
            _deep_merge(merged, overrides)

        _substitute_env_vars(merged)

        try:
            return ShardStoreConfig(**merged)
        except Exception as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def get_base_directory(self) -> Path:
        """Get the resolved storage base directory."""
        return Path(self.storage.base_directory).expanduser().resolve()

    def get_log_dir(self) -> Path | None:
        if self.logging.log_dir is None:
            return None
        return Path(self.logging.log_dir).expanduser()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Internal Helpers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def _load_from_env() -> dict[str, Any]:
    """Load configuration from SHARDSTORE_* environment variables."""
    result: dict[str, Any] = {}

    env_mapping = {
        "SHARDSTORE_BASE_DIRECTORY": ("storage", "base_directory"),
        "SHARDSTORE_PLATFORM": ("storage", "platform"),
        "SHARDSTORE_LOG_DIR": ("logging", "log_dir"),
        "SHARDSTORE_LOG_LEVEL": ("logging", "console_level"),
    }

    for env_var, (section, key) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            result.setdefault(section, {})[key] = value

    return result


def _deep_merge(base: dict, override: dict) -> None:
    """Deep merge override into base (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _substitute_env_vars(data: dict) -> None:
    """Recursively substitute ${ENV_VAR} patterns in string values."""
    pattern = re.compile(r"\$\{([^}]+)\}")

    for key, value in data.items():
        if isinstance(value, dict):
            _substitute_env_vars(value)
        elif isinstance(value, str):
            data[key] = pattern.sub(
                lambda match: os.environ.get(match.group(1), ""), value
            )
