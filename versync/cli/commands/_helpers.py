"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from versync.core.errors import ErrorCode
from versync.output.console import Style
from versync.versioning.errors import VersionError

if TYPE_CHECKING:
    from versync.output.console import ConsoleProtocol

USAGE = (
    "Provide 2 arguments [from] and [to] to update version, "
    "'show' to print the current one, or 'check' to verify every version file."
)
VERSION_NOTE = (
    "Note that the version should follow semantic-versioning and PEP440, "
    "e.g. '1.2.3' or '1.2.3-a4'"
)


def version_error_code(error: VersionError) -> ErrorCode:
    match error.kind:
        case "io_failed":
            return ErrorCode.IO_ERROR
        case "config_invalid":
            return ErrorCode.CONFIG_ERROR
        case _:
            return ErrorCode.USER_ERROR


def exit_version_error(error: VersionError, console: ConsoleProtocol) -> NoReturn:
    """Print the error and its hint, then exit with the mapped code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(version_error_code(error)))


def exit_usage(console: ConsoleProtocol, message: str = USAGE) -> NoReturn:
    console.error(message)
    console.print(VERSION_NOTE, Style.DIM)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))
