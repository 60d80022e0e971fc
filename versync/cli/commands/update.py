"""Update command - move every version site from one version to another."""

from __future__ import annotations

from versync.cli.commands._helpers import exit_version_error
from versync.cli.context import CLIContext
from versync.core.result import Err
from versync.output.console import Style
from versync.versioning.service import UpdateReport, is_conventional_version, update


def run_update(ctx: CLIContext, version_from: str, version_to: str, *, dry_run: bool) -> None:
    for value in (version_from, version_to):
        if value and not is_conventional_version(value):
            ctx.console.warning(f"'{value}' does not look like a SemVer / PEP 440 version")

    result = update(
        root=ctx.workspace.root,
        sites=ctx.config.sites,
        version_from=version_from,
        version_to=version_to,
        excludes=ctx.config.exclude,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        exit_version_error(result.error, ctx.console)

    print_report(ctx, result.value)


def print_report(ctx: CLIContext, report: UpdateReport) -> None:
    console = ctx.console
    if report.dry_run:
        console.info(
            f"dry run: would update version from {report.version_from} to {report.version_to}"
        )
        for change in report.changes:
            console.print(f"{change.site.path}:{change.line_no}")
            console.print(f"  - {change.old_line}", Style.DIM)
            console.print(f"  + {change.new_line}")
        return

    console.print(f"Update version from {report.version_from} to {report.version_to}")
    for path in report.paths:
        console.print(path)

    console.newline()
    console.print("files which include the previous version number:")
    if report.residuals:
        console.warning(f"{len(report.residuals)} line(s) still mention {report.version_from}")
    for hit in report.residuals:
        console.print(str(hit))
