# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""Fire-and-forget launch of the selected program."""
from __future__ import annotations

import subprocess
from typing import Sequence

from fuzzmenu.exceptions import ProgramLaunchFailure
from fuzzmenu.logger import logger


def spawn_program(command: Sequence[str]) -> subprocess.Popen:
    """
    Start `command` in its own session and return without waiting for it.

    The child inherits fuzzmenu's standard streams.

    Raises:
        ProgramLaunchFailure: If the executable cannot be started.
    """
    argv = list(command)
    try:
        process = subprocess.Popen(argv, start_new_session=True)
    except OSError as error:
        raise ProgramLaunchFailure(argv, error) from error
    logger.info("Launched '%s' (pid %d).", argv[0], process.pid)
    return process
