# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Icon lookup for menu entries.

An icon spec is either a path to an image, or a bare name such as `firefox`
that is looked up as `<dir>/<name>.png` then `<dir>/<name>.svg` in each search
directory, in order. The first hit wins; a miss yields `None` and the entry is
shown as text only.

System search roots come from the XDG base directory variables and are always
searched after the directories named in the config.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Sequence

from fuzzmenu.logger import logger

ICON_EXTENSIONS = (".png", ".svg")
DEFAULT_DATA_DIRS = "/usr/local/share/:/usr/share/"
DATA_SUBDIRS = ("icons", "pixmaps")


def system_icon_dirs(environ: Mapping[str, str] | None = None) -> tuple[Path, ...]:
    """Return the platform icon roots: data home first, then each system data dir."""
    environ = os.environ if environ is None else environ
    data_home = environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = environ.get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS

    roots = [Path(data_home)]
    roots.extend(Path(entry) for entry in data_dirs.split(os.pathsep) if entry)

    dirs: list[Path] = []
    for root in roots:
        for subdir in DATA_SUBDIRS:
            candidate = root / subdir
            if candidate not in dirs:
                dirs.append(candidate)
    return tuple(dirs)


def resolve_icon(spec: str | None, search_dirs: Sequence[Path]) -> Path | None:
    if not spec:
        return None

    as_path = Path(spec).expanduser()
    # Paths, and names that exist as given, are used unchanged.
    if as_path.is_file():
        return as_path

    for directory in search_dirs:
        for extension in ICON_EXTENSIONS:
            candidate = Path(directory) / f"{spec}{extension}"
            if candidate.is_file():
                return candidate

    logger.debug("No icon found for '%s'.", spec)
    return None
