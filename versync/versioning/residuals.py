"""Residual reference scan.

After an update, occurrences of the old version left in the tree are
reported to the operator. They are advisory: changelogs and release notes
legitimately keep old version numbers.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from versync.core.result import Err
from versync.platform.process import run as run_process

__all__ = ["ResidualHit", "scan_residuals"]

_GIT_GREP_TIMEOUT_SECONDS = 60.0

# "<lineno>:<text>" or "<lineno>\0<text>" depending on the git version
_GREP_LINE_RE = re.compile(r"^(\d+)[:\0](.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True, order=True)
class ResidualHit:
    path: str  # posix, relative to the scanned root
    line_no: int
    text: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line_no}: {self.text}"


def scan_residuals(root: Path, needle: str, excludes: Iterable[str] = ()) -> list[ResidualHit]:
    """Find every line under root containing needle literally.

    Uses ``git grep`` in a git checkout (tracked text files only) and a
    filesystem walk otherwise. Directories named in ``excludes`` are skipped
    in both modes.
    """
    if not needle:
        return []
    skip = frozenset(excludes)

    hits: list[ResidualHit] | None = None
    if (root / ".git").exists():
        hits = _git_grep(root, needle)
    if hits is None:
        hits = list(_walk_grep(root, needle, skip))

    return sorted(h for h in hits if not _is_excluded(h.path, skip))


def _is_excluded(rel_path: str, skip: frozenset[str]) -> bool:
    parts = rel_path.split("/")[:-1]
    return any(part in skip for part in parts)


def _git_grep(root: Path, needle: str) -> list[ResidualHit] | None:
    """Run git grep; None when git is unusable here."""
    result = run_process(
        ["git", "grep", "--no-color", "-z", "-n", "-I", "-F", "-e", needle],
        cwd=root,
        ok_codes=(0, 1),
        timeout=_GIT_GREP_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return None

    hits: list[ResidualHit] = []
    for raw in _lines(result.value.stdout):
        path, sep, rest = raw.partition("\0")
        if not sep:
            continue
        m = _GREP_LINE_RE.match(rest)
        if m is None:
            continue
        hits.append(ResidualHit(path=path, line_no=int(m.group(1)), text=m.group(2)))
    return hits


def _walk_grep(root: Path, needle: str, skip: frozenset[str]) -> Iterable[ResidualHit]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        base = Path(dirpath)
        for name in sorted(filenames):
            path = base / name
            text = _read_text_file(path)
            if text is None or needle not in text:
                continue
            rel = path.relative_to(root).as_posix()
            for index, line in enumerate(_lines(text)):
                if needle in line:
                    yield ResidualHit(path=rel, line_no=index + 1, text=line)


def _lines(text: str) -> list[str]:
    """Split on line feeds only; form feeds and other separators stay inside a line."""
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and not lines[-1]:
        lines.pop()
    return lines


def _read_text_file(path: Path) -> str | None:
    """Read a UTF-8 text file; None for binaries and unreadable files."""
    try:
        data = path.read_bytes()
    except OSError:
        return None
    if b"\0" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
