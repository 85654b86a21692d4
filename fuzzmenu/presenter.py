# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Translation between menu entries and the picker's line protocol.

Outbound, each entry becomes one line in config order:

    <display name>[\\0icon\\x1f<icon path>]\\n

which is the dmenu-mode convention fuzzel uses to attach an icon to a line.
Inbound, the picker prints the chosen line's text (without the icon part), and
`parse_selection` maps it back to an entry by exact name equality. Position is
never used, since the picker filters and reorders lines while the user types.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence, Union

from fuzzmenu.icons import resolve_icon
from fuzzmenu.tree import Entry, ResolvedMenu

ICON_MARKER = "\0icon\x1f"

IconResolver = Callable[[Union[str, None], Sequence[Path]], Union[Path, None]]


@dataclass(frozen=True)
class Selected:
    entry: Entry


@dataclass(frozen=True)
class NoMatch:
    line: str


@dataclass(frozen=True)
class Cancelled:
    pass


Selection = Union[Selected, NoMatch, Cancelled]


def format_line(name: str, icon_path: Path | None) -> str:
    if icon_path is None:
        return f"{name}\n"
    return f"{name}{ICON_MARKER}{icon_path}\n"


def format_menu(
    resolved: ResolvedMenu,
    items: Sequence[Entry] | None = None,
    resolver: IconResolver = resolve_icon,
) -> bytes:
    """Render `items` (default: the resolved menu's own items) for the picker."""
    if items is None:
        items = resolved.items
    search_dirs = resolved.search_dirs
    lines = [
        format_line(item.display_name, resolver(item.icon, search_dirs))
        for item in items
    ]
    return "".join(lines).encode("UTF-8")


def parse_selection(output_line: str | None, items: Sequence[Entry]) -> Selection:
    """
    Map one line of picker output back to an entry.

    Returns:
        Cancelled: The picker printed nothing.
        Selected: The line equals exactly one item's display name.
        NoMatch: Anything else.
    """
    if output_line is None:
        return Cancelled()
    line = output_line.rstrip("\r\n")
    if not line:
        return Cancelled()
    for item in items:
        if item.display_name == line:
            return Selected(item)
    return NoMatch(line)
