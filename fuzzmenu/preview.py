# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""Rich tree rendering of a menu hierarchy, used by `fuzzmenu --check`."""
from __future__ import annotations

from rich.markup import escape
from rich.tree import Tree

from fuzzmenu.icons import resolve_icon
from fuzzmenu.tree import ConfigTree, Menu, Program, ResolvedMenu


def _entry_label(entry: Program | Menu, resolved: ResolvedMenu) -> str:
    if isinstance(entry, Program):
        command = escape(" ".join(entry.command))
        label = (
            f"[fuzzmenu.program]{escape(entry.display_name)}[/] "
            f"[fuzzmenu.dim]{command}[/]"
        )
    else:
        label = f"[fuzzmenu.menu]▸ {escape(entry.display_name)}[/]"
    if entry.icon:
        icon_path = resolve_icon(entry.icon, resolved.search_dirs)
        shown = str(icon_path) if icon_path else f"{entry.icon} (not found)"
        label += f" [fuzzmenu.icon]{escape(shown)}[/]"
    return label


def _add_items(node: Tree, tree: ConfigTree, resolved: ResolvedMenu) -> None:
    for entry in resolved.items:
        branch = node.add(_entry_label(entry, resolved))
        if isinstance(entry, Menu):
            _add_items(branch, tree, tree.resolve(entry, resolved))


def render_tree(tree: ConfigTree, title: str = "menu") -> Tree:
    root = tree.resolve(tree.root)
    preview = Tree(f"[fuzzmenu.menu]{escape(title)}[/]")
    if root.fuzzel_args:
        preview.add(f"[fuzzmenu.dim]fuzzel-args: {escape(' '.join(root.fuzzel_args))}[/]")
    _add_items(preview, tree, root)
    return preview
