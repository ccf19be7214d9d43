"""Synchronous command execution with the terminal passed through."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


class CommandRunner(Protocol):
    """Runs *argv* in *cwd*, blocks until it exits and returns the exit code."""

    def __call__(self, argv: Sequence[str], cwd: Path | None = None) -> int: ...


class SubprocessRunner:
    """CommandRunner backed by :func:`subprocess.run`.

    Standard streams are inherited so interactive tools can prompt the user.
    No timeout is applied.
    """

    def __call__(self, argv: Sequence[str], cwd: Path | None = None) -> int:
        argv_list = list(argv)
        logger.info("CMD %s (cwd=%s)", shlex.join(argv_list), cwd or ".")

        # Resolve shims such as npm.cmd on Windows.
        executable = shutil.which(argv_list[0])
        if executable is None:
            logger.error("Executable not found: %s", argv_list[0])
            return COMMAND_NOT_FOUND

        completed = subprocess.run([executable, *argv_list[1:]], cwd=cwd, check=False)
        logger.debug("EXIT %d %s", completed.returncode, argv_list[0])
        return completed.returncode
