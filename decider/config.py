"""Configuration management for Decider.

Loads configuration from:
1. decider.yaml in current directory
2. ~/.config/decider/decider.yaml
3. Environment variables (DECIDER_* prefix)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: Path = Field(default=Path("./data/decider.db"))
    wal_mode: bool = True


class HistoryConfig(BaseModel):
    """Decision history retention."""

    enabled: bool = True
    max_entries: int = Field(default=50, ge=1, description="Oldest decisions beyond this are evicted")


class SelectionConfig(BaseModel):
    """Random selection settings."""

    min_items: int = Field(default=2, ge=1, description="Smallest list a decision is offered for")
    spin: bool = True


class APIConfig(BaseModel):
    """Local HTTP API settings."""

    host: str = "127.0.0.1"
    port: int = 8080


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Path | None = None


class Config(BaseSettings):
    """Main configuration for Decider."""

    model_config = SettingsConfigDict(
        env_prefix="DECIDER_",
        env_nested_delimiter="__",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def find_config_file() -> Path | None:
    """Find the configuration file.

    Searches in order:
    1. ./decider.yaml
    2. ~/.config/decider/decider.yaml
    """
    locations = [
        Path.cwd() / "decider.yaml",
        Path.home() / ".config" / "decider" / "decider.yaml",
    ]

    for path in locations:
        if path.exists():
            return path

    return None


def load_config() -> Config:
    """Load configuration from file and environment.

    Returns:
        Config: The loaded configuration.
    """
    config_data: dict[str, Any] = {}

    config_file = find_config_file()
    if config_file:
        with open(config_file) as f:
            config_data = yaml.safe_load(f) or {}

    # Shorthand environment overrides
    env_overrides = {
        "DECIDER_DB_PATH": ("database", "path"),
        "DECIDER_HISTORY_MAX": ("history", "max_entries"),
        "DECIDER_MIN_ITEMS": ("selection", "min_items"),
    }

    for env_var, path in env_overrides.items():
        value = os.environ.get(env_var)
        if value:
            section, key = path
            if section not in config_data:
                config_data[section] = {}
            config_data[section][key] = value

    return Config(**config_data)


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The configuration instance.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
