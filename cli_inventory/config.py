"""
Configuration file parsing and management.

Reads YAML configuration files (JSON when the file ends in .json) and merges
them from multiple sources (custom -> project -> user -> system -> defaults).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .common import vlog


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".cli-inventory.yml",                                      # Project root (highest priority)
    ".cli-inventory.yaml",
    os.path.expanduser("~/.config/cli-inventory/config.yml"),  # User global
    os.path.expanduser("~/.config/cli-inventory/config.yaml"),
    "/etc/cli-inventory/config.yml",                           # System global
    "/etc/cli-inventory/config.yaml",
]

# Tools looked up by `info` when no names are given
DEFAULT_TOOLS: tuple[str, ...] = ("codex", "opencode", "claude", "gemini")

FALLBACK_TIMEOUT_SECONDS = 3


def timeout_from_env(value: str | None) -> int:
    """
    Parse a CLI_INVENTORY_TIMEOUT_SECONDS value.

    Non-numeric or out-of-range (1..60) values give the fallback of 3 seconds.
    """
    try:
        seconds = int(value) if value is not None else FALLBACK_TIMEOUT_SECONDS
    except ValueError:
        return FALLBACK_TIMEOUT_SECONDS
    return seconds if 1 <= seconds <= 60 else FALLBACK_TIMEOUT_SECONDS


DEFAULT_TIMEOUT_SECONDS = timeout_from_env(os.environ.get("CLI_INVENTORY_TIMEOUT_SECONDS"))
DEFAULT_MAX_WORKERS = 16


@dataclass(frozen=True)
class Preferences:
    """
    Tunables for discovery runs.

    Attributes:
        timeout_seconds: Timeout for each version probe and fast lookup
        max_workers: Upper bound on directories (or tools) processed at once
    """
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self):
        if not isinstance(self.timeout_seconds, int) or not 1 <= self.timeout_seconds <= 60:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be between 1 and 60"
            )

        if not isinstance(self.max_workers, int) or not 1 <= self.max_workers <= 64:
            raise ValueError(
                f"Invalid max_workers: {self.max_workers}. "
                "Must be between 1 and 64"
            )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Preferences:
        """Create Preferences from dictionary."""
        return Preferences(
            timeout_seconds=data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
            max_workers=data.get("max_workers", DEFAULT_MAX_WORKERS),
        )


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for cli_inventory.

    Attributes:
        version: Config schema version
        platform: Platform override ('auto', 'linux', 'darwin', 'win32')
        tools: Default tool names for extended info lookups
        preferences: Global preferences
        source: Path to the configuration file that was loaded
    """
    version: int = 1
    platform: str = "auto"
    tools: tuple[str, ...] = DEFAULT_TOOLS
    preferences: Preferences = field(default_factory=Preferences)
    source: str = ""

    def __post_init__(self):
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")

        valid_platforms = {"auto", "linux", "darwin", "win32"}
        if self.platform not in valid_platforms:
            raise ValueError(
                f"Invalid platform: {self.platform}. "
                f"Must be one of: {', '.join(sorted(valid_platforms))}"
            )

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        """Create Config from dictionary."""
        tools_data = data.get("tools")
        if tools_data is None:
            tools = DEFAULT_TOOLS
        elif isinstance(tools_data, (list, tuple)):
            tools = tuple(str(t) for t in tools_data)
        else:
            raise TypeError(f"'tools' must be a list, got {type(tools_data).__name__}")

        preferences = Preferences.from_dict(data.get("preferences") or {})

        return Config(
            version=data.get("version", 1),
            platform=data.get("platform", "auto"),
            tools=tools,
            preferences=preferences,
            source=source,
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        merged_preferences = Preferences(
            timeout_seconds=(
                self.preferences.timeout_seconds
                if self.preferences.timeout_seconds != DEFAULT_TIMEOUT_SECONDS
                else other.preferences.timeout_seconds
            ),
            max_workers=(
                self.preferences.max_workers
                if self.preferences.max_workers != DEFAULT_MAX_WORKERS
                else other.preferences.max_workers
            ),
        )

        return Config(
            version=self.version,
            platform=self.platform if self.platform != "auto" else other.platform,
            tools=self.tools if self.tools != DEFAULT_TOOLS else other.tools,
            preferences=merged_preferences,
            source=self.source or other.source,
        )


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def _load_json(file_path: str) -> dict[str, Any] | None:
    """
    Load JSON configuration file.

    Returns:
        Parsed configuration dictionary, or None if file invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, json.JSONDecodeError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to configuration file (.yml/.yaml or .json)
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.isfile(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    if file_path.endswith(".json"):
        data = _load_json(file_path)
    else:
        data = _load_yaml(file_path)

    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = Config.from_dict(data, source=file_path)
    except (ValueError, TypeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None

    vlog(f"Loaded config successfully: {file_path}", verbose)
    return config


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging

    Returns:
        Merged Config object (defaults if no config found)

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)

    if not configs:
        vlog("No config files found, using defaults", verbose)
        return Config()

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} config files", verbose)
    return merged


def validate_config(config: Config) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Args:
        config: Config object to validate

    Returns:
        List of validation warning messages (empty if valid)
    """
    warnings = []

    if any(not name.strip() for name in config.tools):
        warnings.append("Blank tool name in tools list")

    lowered = [name.strip().lower() for name in config.tools if name.strip()]
    if len(lowered) != len(set(lowered)):
        warnings.append("Duplicate tool names in tools list")

    return warnings
