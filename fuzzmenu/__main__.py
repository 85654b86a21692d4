"""
Fuzzmenu

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""
from __future__ import annotations

import logging
import os
import sys
from argparse import ArgumentParser
from typing import Sequence

from rich.markup import escape

from fuzzmenu.config import find_config, load_document
from fuzzmenu.console import console
from fuzzmenu.engine import Failed, MenuEngine, exit_code
from fuzzmenu.exceptions import FuzzmenuError
from fuzzmenu.logger import logger
from fuzzmenu.picker import DEFAULT_PICKER, Picker
from fuzzmenu.preview import render_tree
from fuzzmenu.tree import ConfigTree
from fuzzmenu.utils import setup_logging
from fuzzmenu.version import __version__

EXIT_INTERRUPTED = 130


def get_root_parser(prog: str = "fuzzmenu") -> ArgumentParser:
    parser = ArgumentParser(
        prog=prog,
        description="Hierarchical application menu driven through fuzzel.",
        epilog="Without CONFIG, $FUZZMENU_CONFIG or "
        "$XDG_CONFIG_HOME/fuzzmenu/default.yaml is used.",
    )
    parser.add_argument(
        "config", nargs="?", help="Path to the menu config file (YAML or TOML)."
    )
    parser.add_argument(
        "--picker",
        default=os.environ.get("FUZZMENU_PICKER", DEFAULT_PICKER),
        help="Picker executable to run in dmenu mode (default: %(default)s).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the config, print the menu tree and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase console log verbosity (-v info, -vv debug).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", help="Also append logs to this file.")
    parser.add_argument(
        "--log-mode", choices=("cli", "json"), help="Console log output format."
    )
    parser.add_argument("--version", action="store_true", help=f"Show {prog} version")
    return parser


def console_log_level(verbose: int, debug: bool) -> int:
    if debug or verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def report(error: FuzzmenuError) -> None:
    console.print(f"[fuzzmenu.error]❌ {error.kind}:[/] {escape(str(error))}")


def main(argv: Sequence[str] | None = None) -> int:
    args = get_root_parser().parse_args(argv)
    if args.version:
        print(f"fuzzmenu {__version__}")
        return 0

    setup_logging(
        mode=args.log_mode,
        log_filename=args.log_file,
        console_log_level=console_log_level(args.verbose, args.debug),
    )

    try:
        config_path = find_config(args.config)
        tree = ConfigTree.build(load_document(config_path))
    except FuzzmenuError as error:
        logger.debug("Config failed to load: %s", error)
        report(error)
        return 1

    if args.check:
        console.print(render_tree(tree, title=str(config_path)))
        return 0

    engine = MenuEngine(tree, picker=Picker(args.picker).pick)
    try:
        state = engine.run()
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return EXIT_INTERRUPTED

    if isinstance(state, Failed):
        report(state.error)
    return exit_code(state)


if __name__ == "__main__":
    sys.exit(main())
