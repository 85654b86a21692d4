# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Immutable menu tree and per-level setting inheritance.

`ConfigTree.build()` turns a raw config document into frozen `Menu` and
`Program` entries, rejecting anything that would make a picker selection
ambiguous or a launch impossible. Inherited settings are not flattened into the
tree; `ConfigTree.resolve()` computes a `ResolvedMenu` for one level from the
menu's own settings and its parent's `ResolvedMenu`:

- fuzzel args: the menu's own non-empty args replace the parent's.
- fuzzel config: the parent's mapping overlaid with the menu's own keys.
- icon dirs: the parent's dirs followed by the menu's own, with the system
  icon roots searched last.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Union, cast

from pydantic import ValidationError

from fuzzmenu.config import RawItem, RawMenu
from fuzzmenu.exceptions import ParseError
from fuzzmenu.icons import system_icon_dirs
from fuzzmenu.logger import logger

ROOT_PATH = "/"
FORBIDDEN_NAME_CHARS = ("\n", "\r", "\0")
MENU_ONLY_FIELDS = ("fuzzel_args", "fuzzel_config", "icon_dir", "no_sort", "items")

_EMPTY_MAPPING: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class Program:
    """A leaf entry. Selecting it launches `command`."""

    display_name: str
    command: tuple[str, ...]
    icon: str | None = None


@dataclass(frozen=True)
class Menu:
    """A submenu entry, or the root of the tree (whose name is empty)."""

    display_name: str
    items: tuple[Entry, ...] = ()
    icon: str | None = None
    own_fuzzel_args: tuple[str, ...] | None = None
    own_fuzzel_config: Mapping[str, str] = field(default_factory=lambda: _EMPTY_MAPPING)
    own_icon_dirs: tuple[Path, ...] = ()
    sort: bool = True


Entry = Union[Program, Menu]


@dataclass(frozen=True)
class ResolvedMenu:
    """Effective settings for one menu level."""

    menu: Menu
    fuzzel_args: tuple[str, ...] = ()
    fuzzel_config: Mapping[str, str] = field(default_factory=lambda: _EMPTY_MAPPING)
    icon_dirs: tuple[Path, ...] = ()
    system_dirs: tuple[Path, ...] = field(default=(), repr=False)

    @property
    def items(self) -> tuple[Entry, ...]:
        return self.menu.items

    @property
    def sort(self) -> bool:
        return self.menu.sort

    @property
    def search_dirs(self) -> tuple[Path, ...]:
        """Configured icon dirs, root to leaf, then the system icon roots."""
        return self.icon_dirs + self.system_dirs


def _child_path(parent_path: str, name: str, index: int) -> str:
    label = name if name else f"#{index}"
    return f"{parent_path.rstrip('/')}/{label}"


def _format_location(location: Sequence[Any]) -> str:
    parts: list[str] = []
    for part in location:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            parts.append(f".{part}" if parts else str(part))
    return "".join(parts) or ROOT_PATH


class ConfigTree:
    """
    The validated, read-only menu hierarchy.

    Args:
        root (Menu): The top-level menu.
        system_dirs (Sequence[Path]): Icon roots searched after every configured
            `icon-dir`.
    """

    def __init__(self, root: Menu, system_dirs: Sequence[Path] = ()):
        self._root = root
        self.system_dirs = tuple(system_dirs)

    @property
    def root(self) -> Menu:
        return self._root

    @classmethod
    def build(
        cls,
        raw_document: Mapping[str, Any] | RawMenu,
        system_dirs: Sequence[Path] | None = None,
    ) -> ConfigTree:
        """
        Validate a raw config document and build the tree.

        Raises:
            ParseError: With the path of the offending node, when the document
                is malformed or violates a tree invariant.
        """
        if isinstance(raw_document, RawMenu):
            raw_root = raw_document
        else:
            try:
                raw_root = RawMenu.model_validate(raw_document)
            except ValidationError as error:
                first = error.errors()[0]
                raise ParseError(
                    _format_location(first["loc"]), first["msg"]
                ) from error

        root = cls._build_menu(raw_root, name="", icon=None, path=ROOT_PATH)
        if system_dirs is None:
            system_dirs = system_icon_dirs()
        logger.debug("Built config tree with %d top-level items.", len(root.items))
        return cls(root, system_dirs)

    @classmethod
    def _build_menu(
        cls, raw: RawMenu, name: str, icon: str | None, path: str
    ) -> Menu:
        icon_dirs: list[Path] = []
        for entry in raw.icon_dir:
            directory = Path(os.path.expanduser(entry))
            if not directory.is_absolute():
                raise ParseError(path, f"icon-dir '{entry}' must be an absolute path")
            icon_dirs.append(directory)

        items: list[Entry] = []
        seen: set[str] = set()
        for index, raw_item in enumerate(raw.items):
            item = cls._build_item(raw_item, path, index)
            if item.display_name in seen:
                raise ParseError(
                    _child_path(path, item.display_name, index),
                    f"duplicate display name '{item.display_name}' in this menu",
                )
            seen.add(item.display_name)
            items.append(item)

        return Menu(
            display_name=name,
            items=tuple(items),
            icon=icon,
            own_fuzzel_args=tuple(raw.fuzzel_args) if raw.fuzzel_args else None,
            own_fuzzel_config=MappingProxyType(dict(raw.fuzzel_config)),
            own_icon_dirs=tuple(icon_dirs),
            sort=not raw.no_sort,
        )

    @classmethod
    def _build_item(cls, raw: RawItem, parent_path: str, index: int) -> Entry:
        if (raw.program is None) == (raw.menu is None):
            raise ParseError(
                _child_path(parent_path, "", index),
                "item must set exactly one of 'program' or 'menu'",
            )

        name = cast(str, raw.program if raw.program is not None else raw.menu)
        path = _child_path(parent_path, name, index)
        if not name:
            raise ParseError(path, "display name must not be empty")
        if any(char in name for char in FORBIDDEN_NAME_CHARS):
            raise ParseError(path, "display name must not contain line breaks or NUL")

        if raw.menu is not None:
            if "command" in raw.model_fields_set:
                raise ParseError(path, "menu does not accept 'command'")
            return cls._build_menu(raw, name=name, icon=raw.icon, path=path)

        for field_name in MENU_ONLY_FIELDS:
            if field_name in raw.model_fields_set:
                alias = RawItem.model_fields[field_name].alias or field_name
                raise ParseError(path, f"program does not accept '{alias}'")
        if not raw.command or not raw.command[0]:
            raise ParseError(path, "program has no command")
        return Program(display_name=name, command=tuple(raw.command), icon=raw.icon)

    def resolve(self, menu: Menu, parent: ResolvedMenu | None = None) -> ResolvedMenu:
        """Compute the effective settings for `menu` below `parent`."""
        if parent is None:
            inherited_args: tuple[str, ...] = ()
            inherited_config: Mapping[str, str] = _EMPTY_MAPPING
            inherited_dirs: tuple[Path, ...] = ()
        else:
            inherited_args = parent.fuzzel_args
            inherited_config = parent.fuzzel_config
            inherited_dirs = parent.icon_dirs

        config = dict(inherited_config)
        config.update(menu.own_fuzzel_config)
        return ResolvedMenu(
            menu=menu,
            fuzzel_args=menu.own_fuzzel_args or inherited_args,
            fuzzel_config=MappingProxyType(config),
            icon_dirs=inherited_dirs + menu.own_icon_dirs,
            system_dirs=self.system_dirs,
        )
