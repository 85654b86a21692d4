# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Config file discovery, loading, and the raw document models.

The menu document is YAML or TOML. Its shape mirrors the hierarchical menu:

    fuzzel-args: ["--width", "40"]
    fuzzel-config:
      main.font: "Hack:size=12"
      colors:
        background: "282c34ff"
    icon-dir: ~/.local/share/menu-icons
    items:
      - program: Terminal
        command: alacritty
        icon: terminal
      - menu: Dev
        icon: folder
        items:
          - program: Editor
            command: [nvim]

The raw models only check structure and types. Tree invariants (unique names,
non-empty commands, absolute icon dirs) are enforced by `ConfigTree.build`.
"""
from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from fuzzmenu.exceptions import ConfigError
from fuzzmenu.logger import logger

CONFIG_DIR_NAME = "fuzzmenu"
CONFIG_STEM = "default"
CONFIG_SUFFIXES = (".yaml", ".yml", ".toml")


def _stringify(value: Any) -> Any:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class RawMenu(BaseModel):
    """Menu-level settings and items, as written in the config document."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    fuzzel_args: list[str] | None = Field(default=None, alias="fuzzel-args")
    fuzzel_config: dict[str, str] = Field(default_factory=dict, alias="fuzzel-config")
    icon_dir: list[str] = Field(default_factory=list, alias="icon-dir")
    no_sort: bool = Field(default=False, alias="no-sort")
    items: list[RawItem] = Field(default_factory=list)

    @field_validator("fuzzel_args", mode="before")
    @classmethod
    def split_fuzzel_args(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        if isinstance(value, list):
            return [_stringify(arg) for arg in value]
        return value

    @field_validator("fuzzel_config", mode="before")
    @classmethod
    def flatten_fuzzel_config(cls, value: Any) -> Any:
        """Flatten one level of sections into `section.key` names."""
        if not isinstance(value, dict):
            return value
        flat: dict[Any, Any] = {}
        for key, entry in value.items():
            if isinstance(entry, dict):
                for sub_key, sub_entry in entry.items():
                    flat[f"{key}.{sub_key}"] = _stringify(sub_entry)
            else:
                flat[key] = _stringify(entry)
        return flat

    @field_validator("items", mode="before")
    @classmethod
    def default_items(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("icon_dir", mode="before")
    @classmethod
    def listify_icon_dir(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class RawItem(RawMenu):
    """A `program` or `menu` entry. Exactly one of the two names must be set."""

    program: str | None = None
    menu: str | None = None
    icon: str | None = None
    command: list[str] | None = None

    @field_validator("command", mode="before")
    @classmethod
    def split_command(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        if isinstance(value, list):
            return [_stringify(token) for token in value]
        return value


RawMenu.model_rebuild()
RawItem.model_rebuild()


def default_config_dir() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def find_config(explicit: str | Path | None = None) -> Path:
    """
    Locate the menu config file.

    Search order: the explicit path, `$FUZZMENU_CONFIG`, then
    `$XDG_CONFIG_HOME/fuzzmenu/default.{yaml,yml,toml}`.

    Raises:
        ConfigError: If an explicitly requested file does not exist, or no
            candidate exists at all.
    """
    if explicit is not None:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigError(f"No such config file: {path}")
        return path

    candidates: list[Path] = []
    if env_path := os.environ.get("FUZZMENU_CONFIG"):
        candidates.append(Path(env_path).expanduser())
    config_dir = default_config_dir()
    candidates.extend(config_dir / f"{CONFIG_STEM}{suffix}" for suffix in CONFIG_SUFFIXES)

    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Using config file %s", candidate)
            return candidate
    raise ConfigError(
        "No config file found. Looked in: " + ", ".join(str(c) for c in candidates)
    )


def load_document(file_path: Path | str) -> dict[str, Any]:
    """
    Read a YAML or TOML menu document into a plain dictionary.

    Raises:
        ConfigError: If the file is unreadable, has an unsupported suffix, fails
            to decode, or does not hold a mapping at the top level.
    """
    path = Path(file_path)
    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix or path.name}")
    except OSError as error:
        raise ConfigError(f"Failed to read config file {path}: {error}") from error
    except (yaml.YAMLError, toml.TomlDecodeError, UnicodeDecodeError) as error:
        raise ConfigError(f"Failed to decode config file {path}: {error}") from error

    if raw_config is None:
        logger.warning("Config file %s is empty.", path)
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping at the top level.\n"
            "Example:\n"
            "items:\n"
            "  - program: Terminal\n"
            "    command: alacritty"
        )
    logger.debug("Loaded config document from %s", path)
    return raw_config
