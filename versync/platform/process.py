"""Subprocess execution with Result-based error handling.

Usage:
    match run(["git", "grep", "-n", "-F", "-e", "1.0.0"], cwd=root):
        case Ok(proc):
            print(proc.stdout)
        case Err(error):
            print(error)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from versync.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessOutput", "run"]


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured output of a finished process."""

    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, -1 if it never ran.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    *,
    ok_codes: tuple[int, ...] = (0,),
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Execute a command and capture its output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        ok_codes: Exit codes treated as success. ``git grep`` exits 1 when
            nothing matches, which is not a failure.
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(ProcessOutput) when the exit code is in ok_codes, Err(ProcessError)
        otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode not in ok_codes:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(ProcessOutput(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr))
