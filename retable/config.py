"""
Configuration for a retable run.

A RetableConfig is built once, from command-line options layered over
optional YAML/JSON configuration files, and is never mutated afterwards.
Configuration files are merged from multiple sources
(explicit path → project → user → defaults).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .common import vlog


# Token used when comments are switched on without naming a token
DEFAULT_COMMENT_TOKEN = "#"
DEFAULT_PADDING = " "
DEFAULT_WIDTH = 2

# Value of column_token in a config file that selects whitespace-run splitting
WHITESPACE_KEYWORD = "whitespace"

# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".retable.yml",                                    # Project root (highest priority)
    ".retable.yaml",
    os.path.expanduser("~/.config/retable/config.yml"),  # User global
    os.path.expanduser("~/.config/retable/config.yaml"),
]

# Keys a configuration file may set
CONFIG_KEYS = ("column_token", "comment_token", "padding", "width")


class ConfigError(ValueError):
    """Raised when an option or configuration file holds an invalid value."""


def _require_single_char(name: str, value: str) -> None:
    if not isinstance(value, str):
        raise ConfigError(f"Invalid {name}: expected string, found {value!r}")
    if len(value) != 1:
        raise ConfigError(f"Invalid {name}: expected single character, found {value!r}")


@dataclass(frozen=True)
class RetableConfig:
    """
    Resolved options for one invocation.

    Attributes:
        column_token: Field delimiter, or None to split on runs of whitespace
        comment_token: Comment marker, or None to disable comment handling
        padding: Character used to pad fields to their column width
        width: Extra cells added between columns
        filenames: Input sources in order; '-' means standard input
    """
    column_token: str | None = None
    comment_token: str | None = None
    padding: str = DEFAULT_PADDING
    width: int = DEFAULT_WIDTH
    filenames: tuple[str, ...] = ()

    def __post_init__(self):
        if self.column_token is not None:
            _require_single_char("column token", self.column_token)

        _require_single_char("padding", self.padding)

        if self.comment_token is not None and not isinstance(self.comment_token, str):
            raise ConfigError(f"Invalid comment token: expected string, found {self.comment_token!r}")
        if self.comment_token is not None and not self.comment_token:
            raise ConfigError("Invalid comment token: must not be empty")

        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise ConfigError(f"Invalid width: expected integer, found {self.width!r}")
        if self.width < 0:
            raise ConfigError(f"Invalid width: {self.width}. Must be zero or greater")

    @property
    def by_whitespace(self) -> bool:
        return self.column_token is None

    @property
    def comments_enabled(self) -> bool:
        return self.comment_token is not None


@dataclass(frozen=True)
class ConfigDefaults:
    """
    Option defaults read from a configuration file.

    Only keys present in the file are recorded, so that merging can tell an
    explicit value apart from an absent one.
    """
    values: dict[str, Any] = field(default_factory=dict)
    source: str = ""

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> ConfigDefaults:
        """Create ConfigDefaults from a parsed configuration file."""
        unknown = sorted(set(data) - set(CONFIG_KEYS))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = dict(data)
        if values.get("column_token") == WHITESPACE_KEYWORD:
            values["column_token"] = None

        # Validate eagerly so a bad file is reported against its own path
        RetableConfig(**values)
        return ConfigDefaults(values=values, source=source)

    def merge_with(self, other: ConfigDefaults) -> ConfigDefaults:
        """
        Merge with another set of defaults, preferring values from this one.

        Args:
            other: Lower priority defaults

        Returns:
            New merged ConfigDefaults
        """
        merged = dict(other.values)
        merged.update(self.values)
        return ConfigDefaults(values=merged, source=self.source or other.source)

    def build(self, **overrides: Any) -> RetableConfig:
        """
        Build the final configuration.

        Keyword arguments given explicitly (not None) take precedence over the
        file defaults. Use ``by_whitespace=True`` to force whitespace-run
        splitting regardless of the file's column_token.
        """
        values = dict(self.values)
        by_whitespace = overrides.pop("by_whitespace", False)
        for key, value in overrides.items():
            if value is not None:
                values[key] = value
        if by_whitespace:
            values["column_token"] = None
        return RetableConfig(**values)


def _load_yaml(file_path: str) -> dict[str, Any]:
    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {file_path} must be a mapping")
    return data


def _load_json(file_path: str) -> dict[str, Any]:
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {file_path} must be an object")
    return data


def load_config_file(file_path: str, verbose: bool = False) -> ConfigDefaults:
    """
    Load option defaults from a single file.

    Files ending in .json are parsed as JSON, anything else as YAML.

    Args:
        file_path: Path to configuration file
        verbose: Enable verbose logging

    Returns:
        ConfigDefaults for the file

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    vlog(f"Loading config from: {file_path}", verbose)

    try:
        if file_path.endswith(".json"):
            data = _load_json(file_path)
        else:
            data = _load_yaml(file_path)
    except OSError as e:
        raise ConfigError(f"Could not read config file {file_path}: {e.strerror}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse config file {file_path}: {e}") from e

    try:
        return ConfigDefaults.from_dict(data, source=file_path)
    except TypeError as e:
        raise ConfigError(f"Invalid config file {file_path}: {e}") from e
    except ConfigError as e:
        raise ConfigError(f"{file_path}: {e}") from e


def load_config(custom_path: str | None = None, verbose: bool = False) -> ConfigDefaults:
    """
    Load and merge option defaults from all sources.

    Precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .retable.yml
    3. User ~/.config/retable/config.yml
    4. Built-in defaults

    Args:
        custom_path: Optional path to a configuration file
        verbose: Enable verbose logging

    Returns:
        Merged ConfigDefaults (empty if no file was found)

    Raises:
        ConfigError: If custom_path is given but cannot be loaded
    """
    layers: list[ConfigDefaults] = []

    if custom_path:
        layers.append(load_config_file(custom_path, verbose))

    for location in CONFIG_LOCATIONS:
        if not os.path.exists(location):
            continue
        try:
            layers.append(load_config_file(location, verbose))
        except ConfigError as e:
            from .logging_config import get_logger
            get_logger().warning(f"Ignoring config file: {e}")

    if not layers:
        vlog("No config files found, using defaults", verbose)
        return ConfigDefaults()

    merged = layers[0]
    for layer in layers[1:]:
        merged = merged.merge_with(layer)

    vlog(f"Merged {len(layers)} config files", verbose)
    return merged
