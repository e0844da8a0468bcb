"""Configuration management for checkvault."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .exceptions import ConfigError
from .types import BlockBoundary, SortDirection


@dataclass
class ChecklistConfig:
    """Checklist pipeline configuration."""

    sort_groups: SortDirection = SortDirection.NEW_TO_OLD
    sort_items: SortDirection = SortDirection.NEW_TO_OLD
    sort_sub_groups: SortDirection = SortDirection.NEW_TO_OLD
    block_boundary: BlockBoundary = BlockBoundary.SECTION
    # Quiet period before a burst of change notifications triggers a refresh
    debounce_seconds: float = 1.0
    auto_refresh: bool = True


@dataclass
class VaultConfig:
    """Vault location configuration."""

    path: Path = field(default_factory=Path.cwd)
    encoding: str = "utf-8"
    follow_symlinks: bool = False


def _default_settings_path() -> Path:
    """Get default settings file path."""
    config_dir = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_dir / "checkvault" / "settings.yaml"


@dataclass
class Config:
    """Main application configuration."""

    settings_path: Path = field(default_factory=_default_settings_path)
    log_level: str = "WARNING"
    vault: VaultConfig = field(default_factory=VaultConfig)
    checklist: ChecklistConfig = field(default_factory=ChecklistConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML or JSON file, then apply env overrides.

        Args:
            path: Path to the configuration file.

        Returns:
            Config with file values applied and environment taking precedence.

        Raises:
            ConfigError: If the file is missing, malformed or not a mapping.
        """
        path = Path(path).expanduser()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}") from None
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        config = cls()
        _apply_mapping(config, data)
        config._apply_env()
        logger.debug(f"Loaded configuration from {path}")
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, CHECKVAULT_CONFIG, or the environment."""
        if path is None:
            path = os.environ.get("CHECKVAULT_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        if vault := os.environ.get("CHECKVAULT_VAULT"):
            self.vault.path = Path(vault)

        if settings := os.environ.get("CHECKVAULT_SETTINGS"):
            self.settings_path = Path(settings)

        if level := os.environ.get("CHECKVAULT_LOG_LEVEL"):
            self.log_level = level.upper()

        try:
            if delay := os.environ.get("CHECKVAULT_DEBOUNCE"):
                self.checklist.debounce_seconds = float(delay)

            if boundary := os.environ.get("CHECKVAULT_BOUNDARY"):
                self.checklist.block_boundary = BlockBoundary(boundary)
        except ValueError as e:
            raise ConfigError(f"Invalid environment override: {e}") from e


def _apply_mapping(target: Any, data: dict[str, Any]) -> None:
    """Copy values from a parsed configuration mapping onto a (nested) dataclass."""
    for f in fields(target):
        if f.name not in data:
            continue
        value = data[f.name]
        current = getattr(target, f.name)
        if is_dataclass(current) and isinstance(value, dict):
            _apply_mapping(current, value)
        elif isinstance(current, Path):
            setattr(target, f.name, Path(value))
        elif isinstance(current, (SortDirection, BlockBoundary)):
            try:
                setattr(target, f.name, type(current)(value))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {f.name}: {e}") from e
        else:
            setattr(target, f.name, value)

    unknown = set(data) - {f.name for f in fields(target)}
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
