"""Subprocess seam shared by the cargo adapters."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable


@dataclass
class CommandResult:
    """Exit status and captured output of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


CommandRunner = Callable[..., CommandResult]


def run_command(
    args: Iterable[str],
    *,
    cwd: Path,
    capture_output: bool = False,
) -> CommandResult:
    """Run ``args`` in ``cwd`` without raising on a non-zero exit.

    ``FileNotFoundError`` propagates when the executable does not exist.
    """
    completed = subprocess.run(
        list(args),
        cwd=str(cwd),
        check=False,
        text=True,
        capture_output=capture_output,
    )
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = ["CommandResult", "CommandRunner", "run_command"]
