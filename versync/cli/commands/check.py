"""Check command - verify every version site agrees with the canonical one."""

from __future__ import annotations

from versync.cli.commands._helpers import exit_version_error
from versync.cli.context import CLIContext
from versync.core.result import Err
from versync.output.console import Style
from versync.versioning.service import check


def run_check(ctx: CLIContext) -> None:
    result = check(root=ctx.workspace.root, sites=ctx.config.sites)
    if isinstance(result, Err):
        exit_version_error(result.error, ctx.console)

    readings = result.value
    for reading in readings:
        ctx.console.print(f"{reading.location}: {reading.version}", Style.DIM)
    ctx.console.success(f"{len(readings)} version sites agree on {readings[0].version}")
