from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from versync.core.errors import ErrorCode
from versync.core.result import Err
from versync.core.workspace import Workspace, detect_workspace
from versync.output.console import ConsoleProtocol, RichConsole
from versync.versioning.config import Config, load_config, load_config_or_default


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    config: Config
    console: ConsoleProtocol


def build_context(*, root: Path | None = None, config_path: Path | None = None) -> CLIContext:
    workspace_result = detect_workspace(root=root)
    if isinstance(workspace_result, Err):
        typer.echo(f"error: {workspace_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    workspace = workspace_result.value

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(workspace.config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        workspace=workspace,
        config=config_result.value,
        console=RichConsole(),
    )
