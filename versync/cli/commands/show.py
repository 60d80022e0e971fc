"""Show command - print the canonical version."""

from __future__ import annotations

import typer

from versync.cli.commands._helpers import exit_version_error
from versync.cli.context import CLIContext
from versync.core.result import Err
from versync.versioning.service import show


def run_show(ctx: CLIContext) -> None:
    """Print the canonical version alone on stdout."""
    result = show(root=ctx.workspace.root, sites=ctx.config.sites)
    if isinstance(result, Err):
        exit_version_error(result.error, ctx.console)
    # plain echo: CI captures this value verbatim
    typer.echo(result.value)
