"""Repository root detection.

The workspace is the checkout whose version files are kept in sync. It is
identified by the canonical manifest (``Cargo.toml`` by default) or a
``versync.toml`` (which may name another canonical source), preferring
a directory that is also a git checkout so that running from inside a nested
crate still resolves to the repository root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_MARKER",
    "ROOT_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "WorkspaceSource",
    "detect_workspace",
    "find_workspace_upward",
    "is_workspace_root",
]

DEFAULT_MARKER = "Cargo.toml"
ROOT_ENV_VAR = "VERSYNC_ROOT"
CONFIG_FILENAME = "versync.toml"

WorkspaceSource = Literal["option", "env", "git", "marker"]


@dataclass(frozen=True)
class WorkspaceError:
    """Error when the repository root cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A detected repository checkout."""

    root: Path
    source: WorkspaceSource = "marker"

    @property
    def config_path(self) -> Path:
        """Path to the optional versync.toml."""
        return self.root / CONFIG_FILENAME


def is_workspace_root(path: Path, marker: str = DEFAULT_MARKER) -> bool:
    """Check if path holds the canonical manifest or a versync.toml."""
    return (path / marker).is_file() or (path / CONFIG_FILENAME).is_file()


def find_workspace_upward(
    start: Path,
    marker: str = DEFAULT_MARKER,
    *,
    require_git: bool = False,
) -> Path | None:
    """Search upward from start for a directory holding the marker.

    With ``require_git`` only directories that are also git checkouts match.
    """
    for parent in (start, *start.parents):
        if not is_workspace_root(parent, marker):
            continue
        if require_git and not (parent / ".git").exists():
            continue
        return parent
    return None


def detect_workspace(
    *,
    root: Path | None = None,
    start_dir: Path | None = None,
    marker: str = DEFAULT_MARKER,
    env_var: str = ROOT_ENV_VAR,
) -> Result[Workspace, WorkspaceError]:
    """Detect the repository root.

    Detection order:
    1. Explicit ``root`` (the ``--root`` option)
    2. ``$VERSYNC_ROOT``
    3. Nearest ancestor of start_dir (or cwd) with the marker or a versync.toml,
       and a .git entry
    4. Nearest ancestor with the marker or a versync.toml
    """
    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            return Err(WorkspaceError(f"--root '{root}' is not a directory", searched_from=None))
        return Ok(Workspace(root=resolved, source="option"))

    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir():
            return Ok(Workspace(root=env_path, source="env"))
        return Err(
            WorkspaceError(
                message=f"${env_var} is set to '{env_value}' but it is not a directory",
                searched_from=None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_workspace_upward(search_start, marker, require_git=True)
    if found is not None:
        return Ok(Workspace(root=found, source="git"))

    found = find_workspace_upward(search_start, marker)
    if found is not None:
        return Ok(Workspace(root=found, source="marker"))

    return Err(
        WorkspaceError(
            message=f"Could not find repository root ({marker} or {CONFIG_FILENAME} not found)",
            searched_from=search_start,
        )
    )
