from __future__ import annotations

from pathlib import Path

import typer

from versync import __version__
from versync.cli.commands._helpers import exit_usage
from versync.cli.commands.check import run_check
from versync.cli.commands.show import run_show
from versync.cli.commands.update import run_update
from versync.cli.context import build_context
from versync.output.console import RichConsole

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def run(
    args: list[str] | None = typer.Argument(
        None,
        metavar="show | check | FROM TO",
        help="'show', 'check', or the current and the new version.",
        show_default=False,
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Repository root (overrides auto detection)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <root>/versync.toml when present)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print planned changes without writing"),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Keep the release version consistent across the files that declare it.

    Before a release, run with the current and the new version, e.g.
    [bold]versync 1.2.3 1.3.0[/bold].
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    argv = args or []
    if len(argv) == 1 and argv[0] in {"show", "check"}:
        ctx = build_context(root=root, config_path=config)
        if argv[0] == "show":
            run_show(ctx)
        else:
            run_check(ctx)
        return

    if len(argv) != 2:
        exit_usage(RichConsole())

    ctx = build_context(root=root, config_path=config)
    run_update(ctx, argv[0], argv[1], dry_run=dry_run)


def main() -> None:
    app()
