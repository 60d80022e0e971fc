"""Filesystem helpers.

Reads and writes keep content byte-exact: no newline translation in either
direction, so a CRLF file stays CRLF and a missing trailing newline stays
missing.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path

__all__ = ["CommitError", "atomic_write_text", "commit_texts", "read_text_exact"]


class CommitError(OSError):
    """A transactional commit failed.

    ``restored`` lists the targets that had already been replaced and were
    put back to their original text; ``unrestored`` lists any that could not
    be put back and need manual inspection.
    """

    def __init__(
        self,
        path: Path,
        cause: OSError,
        *,
        restored: list[Path],
        unrestored: list[Path],
    ) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause
        self.restored = restored
        self.unrestored = unrestored


def read_text_exact(path: Path, *, encoding: str = "utf-8") -> str:
    """Read text without translating line endings."""
    with path.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


def _stage(path: Path, content: str, encoding: str) -> Path:
    """Write content to a temp file beside path, carrying over its permission bits."""
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _stage(path, content, encoding)
    try:
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def commit_texts(
    contents: Mapping[Path, str],
    originals: Mapping[Path, str],
    *,
    encoding: str = "utf-8",
) -> None:
    """Replace several files as one unit.

    Every new content is staged next to its target first; targets are only
    replaced once all staging succeeded. If a replace fails, targets already
    replaced are rewritten from ``originals``.

    Raises:
        CommitError: Staging or replacing failed. Nothing is left modified
            unless ``unrestored`` is non-empty.
    """
    staged: dict[Path, Path] = {}
    try:
        for path, content in contents.items():
            try:
                staged[path] = _stage(path, content, encoding)
            except OSError as e:
                raise CommitError(path, e, restored=[], unrestored=[]) from e

        replaced: list[Path] = []
        for path, tmp_path in staged.items():
            try:
                os.replace(tmp_path, path)
            except OSError as e:
                restored, unrestored = _restore(replaced, originals, encoding)
                raise CommitError(path, e, restored=restored, unrestored=unrestored) from e
            replaced.append(path)
    finally:
        for tmp_path in staged.values():
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)


def _restore(
    paths: list[Path],
    originals: Mapping[Path, str],
    encoding: str,
) -> tuple[list[Path], list[Path]]:
    restored: list[Path] = []
    unrestored: list[Path] = []
    for path in paths:
        try:
            atomic_write_text(path, originals[path], encoding=encoding)
        except OSError:
            unrestored.append(path)
        else:
            restored.append(path)
    return restored, unrestored
