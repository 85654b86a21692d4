# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The menu control loop.

The engine is a small closed state machine:

    AtMenu(root, None)
      ├── picker printed nothing        -> Cancelled
      ├── picker printed an unknown name -> Failed(SelectionMismatch)
      ├── picker could not start         -> Failed(PickerLaunchFailure)
      ├── a program was chosen           -> Executing(command)
      │                                      └── spawn fails -> Failed(ProgramLaunchFailure)
      └── a submenu was chosen           -> AtMenu(child, resolved parent)

`transition()` is the pure part: it maps a parsed selection to the next state.
`MenuEngine` performs the side effects around it (running the picker, spawning
the program), one picker process at a time. There is no way back up the tree;
every run ends in `Executing`, `Cancelled` or `Failed`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Union

from fuzzmenu import presenter
from fuzzmenu.exceptions import (
    FuzzmenuError,
    PickerLaunchFailure,
    ProgramLaunchFailure,
    SelectionMismatch,
)
from fuzzmenu.icons import resolve_icon
from fuzzmenu.launcher import spawn_program
from fuzzmenu.logger import logger
from fuzzmenu.picker import Picker
from fuzzmenu.presenter import IconResolver, Selection, format_menu, parse_selection
from fuzzmenu.tree import ConfigTree, Menu, Program, ResolvedMenu

PickFn = Callable[[bytes, ResolvedMenu], Union[str, None]]
SpawnFn = Callable[[Sequence[str]], object]


@dataclass(frozen=True)
class AtMenu:
    node: Menu
    context: ResolvedMenu | None = None


@dataclass(frozen=True)
class Executing:
    command: tuple[str, ...]


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class Failed:
    error: FuzzmenuError


State = Union[AtMenu, Executing, Cancelled, Failed]


def transition(resolved: ResolvedMenu, selection: Selection) -> State:
    """Next state after the picker returned `selection` for the `resolved` level."""
    match selection:
        case presenter.Cancelled():
            return Cancelled()
        case presenter.NoMatch(line=line):
            return Failed(SelectionMismatch(line))
        case presenter.Selected(entry=Program(command=command)):
            return Executing(command)
        case presenter.Selected(entry=Menu() as child):
            return AtMenu(child, resolved)
    raise TypeError(f"Unexpected selection: {selection!r}")


def exit_code(state: State) -> int:
    return 1 if isinstance(state, Failed) else 0


class MenuEngine:
    """
    Drives the picker through the menu tree until a terminal state.

    Args:
        tree (ConfigTree): The menu hierarchy.
        picker (PickFn | None): Shows one level and returns the chosen line or
            None. Defaults to `Picker().pick`.
        spawner (SpawnFn | None): Starts the chosen program without waiting on it.
            Defaults to `spawn_program`.
        resolver (IconResolver): Maps icon specs to files.
    """

    def __init__(
        self,
        tree: ConfigTree,
        picker: PickFn | None = None,
        spawner: SpawnFn | None = None,
        resolver: IconResolver = resolve_icon,
    ):
        self.tree = tree
        self.picker = picker or Picker().pick
        self.spawner = spawner or spawn_program
        self.resolver = resolver

    def start(self) -> AtMenu:
        return AtMenu(self.tree.root)

    def step(self, state: AtMenu) -> State:
        """Show one menu level and return the state its selection leads to."""
        resolved = self.tree.resolve(state.node, state.context)
        menu_input = format_menu(resolved, resolver=self.resolver)
        try:
            output = self.picker(menu_input, resolved)
        except PickerLaunchFailure as error:
            return Failed(error)
        return transition(resolved, parse_selection(output, resolved.items))

    def launch(self, state: Executing) -> State:
        try:
            self.spawner(state.command)
        except ProgramLaunchFailure as error:
            return Failed(error)
        return state

    def run(self) -> State:
        state: State = self.start()
        while isinstance(state, AtMenu):
            logger.info("Showing menu '%s'.", state.node.display_name or "/")
            state = self.step(state)

        if isinstance(state, Executing):
            state = self.launch(state)

        if isinstance(state, Failed):
            logger.error("%s: %s", state.error.kind, state.error)
        elif isinstance(state, Cancelled):
            logger.info("Selection cancelled.")
        return state
