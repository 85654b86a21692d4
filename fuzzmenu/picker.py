# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Runs the external picker (`fuzzel --dmenu`) for one menu level.

Each call is self-contained: the formatted menu is written to the picker's
stdin, stdin is closed, stdout is read to EOF and the process is reaped before
`pick()` returns. Per-menu config overrides are written to a temporary INI file
passed with `--config=`, which is removed on the way out.
"""
from __future__ import annotations

import os
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from fuzzmenu.exceptions import PickerLaunchFailure
from fuzzmenu.logger import logger
from fuzzmenu.tree import ResolvedMenu

DEFAULT_PICKER = "fuzzel"
BASE_ARGS = ("--dmenu",)
MAIN_SECTION = "main"


def user_picker_config(environ: Mapping[str, str] | None = None) -> Path | None:
    """Path of the user's own fuzzel.ini, if one exists."""
    environ = os.environ if environ is None else environ
    config_home = environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    path = base / "fuzzel" / "fuzzel.ini"
    return path if path.is_file() else None


def render_picker_config(config: Mapping[str, str], include: Path | None = None) -> str:
    """
    Render `section.key` overrides as INI text.

    Keys without a section go under `[main]`. An `include=` line, when given,
    comes first so the overrides win over the included file.
    """
    sections: dict[str, list[tuple[str, str]]] = {MAIN_SECTION: []}
    for key, value in config.items():
        section, _, name = key.rpartition(".")
        sections.setdefault(section or MAIN_SECTION, []).append((name, value))

    lines: list[str] = []
    for section, entries in sections.items():
        if section == MAIN_SECTION and include is not None:
            entries = [("include", str(include)), *entries]
        if not entries:
            continue
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        lines.extend(f"{name}={value}" for name, value in entries)
    return "\n".join(lines) + "\n"


class Picker:
    """
    Launches the picker process.

    Args:
        executable (str): Picker program name or path.
        base_args (Sequence[str]): Arguments that put the picker in dmenu mode.
        include_user_config (bool): Pull the user's fuzzel.ini into generated
            per-menu config files.
    """

    def __init__(
        self,
        executable: str = DEFAULT_PICKER,
        base_args: Sequence[str] = BASE_ARGS,
        include_user_config: bool = True,
    ):
        self.executable = executable
        self.base_args = tuple(base_args)
        self.include_user_config = include_user_config

    def build_command(
        self, resolved: ResolvedMenu, config_path: Path | None = None
    ) -> list[str]:
        command = [self.executable, *self.base_args]
        if config_path is not None:
            command.append(f"--config={config_path}")
        if not resolved.sort:
            command.append("--no-sort")
        command.extend(resolved.fuzzel_args)
        return command

    @contextmanager
    def _config_file(self, config: Mapping[str, str]) -> Iterator[Path | None]:
        if not config:
            yield None
            return
        include = user_picker_config() if self.include_user_config else None
        try:
            handle = tempfile.NamedTemporaryFile(
                "w", encoding="UTF-8", prefix="fuzzmenu-", suffix=".ini", delete=False
            )
        except OSError as error:
            raise PickerLaunchFailure([self.executable], error) from error
        path = Path(handle.name)
        try:
            try:
                with handle:
                    handle.write(render_picker_config(config, include))
            except OSError as error:
                raise PickerLaunchFailure([self.executable], error) from error
            yield path
        finally:
            path.unlink(missing_ok=True)

    def pick(self, menu_input: bytes, resolved: ResolvedMenu) -> str | None:
        """
        Show one menu level and block until the user chooses or dismisses it.

        Returns:
            The first line the picker printed, or None when it printed nothing.

        Raises:
            PickerLaunchFailure: If the picker cannot be started.
        """
        with self._config_file(resolved.fuzzel_config) as config_path:
            command = self.build_command(resolved, config_path)
            logger.debug("Starting picker: %s", command)
            try:
                process = subprocess.Popen(
                    command, stdin=subprocess.PIPE, stdout=subprocess.PIPE
                )
            except OSError as error:
                raise PickerLaunchFailure(command, error) from error
            stdout, _ = process.communicate(menu_input)

        logger.debug("Picker exited with status %s.", process.returncode)
        output = stdout.decode("UTF-8", errors="replace")
        if not output:
            return None
        return output.split("\n", 1)[0]
