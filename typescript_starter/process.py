"""
process.py

Responsibility: the single place that spawns child processes.

Every component that shells out receives a `ProcessRunner` instead of
calling `subprocess` directly, so tests can substitute a fake.
"""

from __future__ import annotations

import errno
import logging
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    stdout: str = ""


class ProcessError(Exception):
    """
    A spawned command failed.

    `exit_code_name` is "ENOENT" when the executable itself could not be
    found, a signal name for commands killed by a signal, and
    "EXIT_<code>" otherwise.
    """

    def __init__(self, exit_code: int, exit_code_name: str, command: str = "", output: str = "") -> None:
        self.exit_code = exit_code
        self.exit_code_name = exit_code_name
        self.command = command
        self.output = output
        super().__init__(f"Command failed ({exit_code_name}): {command}")


ProcessRunner = Callable[..., ProcessResult]


def _exit_code_name(returncode: int) -> str:
    if returncode < 0:
        try:
            return signal.Signals(-returncode).name
        except ValueError:
            pass
    return f"EXIT_{returncode}"


def run_process(
    cmd: str,
    args: Sequence[str] = (),
    *,
    cwd: str | Path | None = None,
    quiet: bool = True,
) -> ProcessResult:
    """
    Run `cmd args...` to completion, raising ProcessError on failure.

    With quiet=False the child's output goes straight to the terminal
    (used for long-running installs) and the returned stdout is empty.
    """
    argv = [cmd, *args]
    command = " ".join(argv)
    LOG.debug("Running command: %s (cwd=%s)", command, cwd or ".")
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            check=True,
            text=True,
            capture_output=quiet,
        )
    except FileNotFoundError as e:
        raise ProcessError(e.errno or errno.ENOENT, "ENOENT", command) from e
    except subprocess.CalledProcessError as e:
        LOG.debug("Command output: %s", e.stderr or e.stdout)
        raise ProcessError(e.returncode, _exit_code_name(e.returncode), command, e.stderr or e.stdout or "") from e
    except OSError as e:
        code = e.errno or 1
        raise ProcessError(code, errno.errorcode.get(code, "EIO"), command) from e

    return ProcessResult(stdout=(completed.stdout or "").strip())
