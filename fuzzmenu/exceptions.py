# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by fuzzmenu.

Exception Hierarchy:
- FuzzmenuError
    ├── ConfigError
    ├── ParseError
    ├── SelectionMismatch
    ├── PickerLaunchFailure
    └── ProgramLaunchFailure

Every failure is fatal for the current run. Nothing is retried: the engine turns
these into a terminal `Failed` state and the CLI reports them before exiting
non-zero.
"""
from __future__ import annotations

from typing import Sequence


class FuzzmenuError(Exception):
    """Base exception for fuzzmenu."""

    kind = "Error"


class ConfigError(FuzzmenuError):
    """Raised when the config file cannot be found, read or decoded."""

    kind = "ConfigError"


class ParseError(FuzzmenuError):
    """Raised when the config document violates the menu tree invariants."""

    kind = "ParseError"

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class SelectionMismatch(FuzzmenuError):
    """Raised when the picker returns a line that matches no displayed item."""

    kind = "SelectionMismatch"

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"picker returned {line!r}, which matches no menu item")


class PickerLaunchFailure(FuzzmenuError):
    """Raised when the picker executable cannot be started."""

    kind = "PickerLaunchFailure"

    def __init__(self, command: Sequence[str], error: OSError):
        self.command = tuple(command)
        self.error = error
        super().__init__(f"failed to start picker '{self.command[0]}': {error}")


class ProgramLaunchFailure(FuzzmenuError):
    """Raised when the selected program cannot be spawned."""

    kind = "ProgramLaunchFailure"

    def __init__(self, command: Sequence[str], error: OSError):
        self.command = tuple(command)
        self.error = error
        super().__init__(f"failed to spawn '{self.command[0]}': {error}")
