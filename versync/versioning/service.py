"""Read, verify and rewrite the version across every version site.

All operations return Result values; nothing here prints. The update is
planned in full before any file is touched, then committed as one unit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from versync.core.result import Err, Ok, Result
from versync.platform.files import CommitError, commit_texts, read_text_exact
from versync.versioning.errors import VersionError
from versync.versioning.residuals import ResidualHit, scan_residuals
from versync.versioning.sites import SiteMatch, VersionSite

__all__ = [
    "SiteChange",
    "SiteVersion",
    "UpdatePlan",
    "UpdateReport",
    "check",
    "is_conventional_version",
    "plan_update",
    "show",
    "update",
    "validate_version",
]

_FORBIDDEN_RE = re.compile(r"[\s\"'\\]")
_CONVENTIONAL_RE = re.compile(
    r"^\d+(?:\.\d+)*(?:[-+._]?[0-9A-Za-z]+(?:[.-][0-9A-Za-z]+)*)?$"
)
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


@dataclass(frozen=True, slots=True)
class SiteChange:
    """One planned line substitution."""

    site: VersionSite
    path: Path
    line_no: int
    old_line: str
    new_line: str


@dataclass(frozen=True, slots=True)
class SiteVersion:
    """The version one site declares, as read by `check`."""

    site: VersionSite
    line_no: int
    version: str

    @property
    def location(self) -> str:
        return f"{self.site.path}:{self.line_no}"


@dataclass(frozen=True, slots=True)
class UpdatePlan:
    changes: tuple[SiteChange, ...]
    contents: dict[Path, str] = field(default_factory=dict[Path, str])
    originals: dict[Path, str] = field(default_factory=dict[Path, str])

    @property
    def modified(self) -> dict[Path, str]:
        """New contents of the files that actually change."""
        return {p: t for p, t in self.contents.items() if t != self.originals.get(p)}


@dataclass(frozen=True, slots=True)
class UpdateReport:
    version_from: str
    version_to: str
    changes: tuple[SiteChange, ...]
    residuals: tuple[ResidualHit, ...] = ()
    dry_run: bool = False

    @property
    def paths(self) -> list[str]:
        """Rewritten paths in site order, each listed once."""
        return list(dict.fromkeys(c.site.path for c in self.changes))


def validate_version(value: str, *, label: str = "version") -> Result[str, VersionError]:
    """Reject values that cannot be embedded in a quoted declaration."""
    if not value:
        return Err(VersionError(kind="usage", message=f"{label} version must not be empty"))
    if _FORBIDDEN_RE.search(value):
        return Err(
            VersionError(
                kind="usage",
                message=f"invalid {label} version: {value!r}",
                hint="whitespace, quotes and backslashes are not allowed",
            )
        )
    return Ok(value)


def is_conventional_version(value: str) -> bool:
    """True for values shaped like SemVer or PEP 440 (e.g. 1.2.3, 1.2.3-a4)."""
    return _CONVENTIONAL_RE.match(value) is not None


def _split_lines(text: str) -> list[str]:
    return _LINE_RE.findall(text)


def _strip_eol(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _read(path: Path, site: VersionSite) -> Result[str, VersionError]:
    try:
        return Ok(read_text_exact(path))
    except FileNotFoundError:
        return Err(
            VersionError(
                kind="site_not_found",
                message=f"version file not found: {site.path}",
                hint=str(path),
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            VersionError(
                kind="io_failed",
                message=f"failed to read {site.path}: {e}",
                hint=str(path),
            )
        )


def _find(text: str, site: VersionSite) -> SiteMatch | None:
    return site.find([_strip_eol(line) for line in _split_lines(text)])


def show(*, root: Path, sites: Sequence[VersionSite]) -> Result[str, VersionError]:
    """Return the version declared by the canonical source (the first site)."""
    canonical = sites[0]
    text = _read(root / canonical.path, canonical)
    if isinstance(text, Err):
        if text.error.kind == "site_not_found":
            return Err(
                VersionError(
                    kind="not_found",
                    message=f"canonical version source not found: {canonical.path}",
                    hint=text.error.hint,
                )
            )
        return text

    m = _find(text.value, canonical)
    if m is None:
        return Err(
            VersionError(
                kind="not_found",
                message=f"no version declaration found in {canonical.path}",
                hint=f"expected a line matching {canonical.pattern}",
            )
        )
    return Ok(m.version)


def check(
    *, root: Path, sites: Sequence[VersionSite]
) -> Result[tuple[SiteVersion, ...], VersionError]:
    """Read the version declared by every site and require them to agree.

    Returns one reading per site, canonical first. Sites sharing a file are
    read independently.
    """
    readings: list[SiteVersion] = []
    for site in sites:
        text = _read(root / site.path, site)
        if isinstance(text, Err):
            return text
        m = _find(text.value, site)
        if m is None:
            return Err(
                VersionError(
                    kind="site_not_found",
                    message=f"no version declaration found in {site.path}",
                    hint=f"expected a line matching {site.pattern}",
                )
            )
        readings.append(SiteVersion(site=site, line_no=m.line_no, version=m.version))

    canonical = readings[0].version
    if any(r.version != canonical for r in readings):
        return Err(
            VersionError(
                kind="out_of_sync",
                message=f"version files are out of sync with {sites[0].path} ({canonical})",
                hint=", ".join(f"{r.location}={r.version}" for r in readings),
            )
        )
    return Ok(tuple(readings))


def plan_update(
    *,
    root: Path,
    sites: Sequence[VersionSite],
    version_from: str,
    version_to: str,
) -> Result[UpdatePlan, VersionError]:
    """Compute the new content of every site file without writing anything.

    Each site's first matching line must declare ``version_from``; it is
    rebuilt through the site's template with ``version_to``. Sites sharing a
    file are applied one after the other on the same planned text.
    """
    originals: dict[Path, str] = {}
    contents: dict[Path, str] = {}
    changes: list[SiteChange] = []

    for site in sites:
        path = root / site.path
        if path not in contents:
            text = _read(path, site)
            if isinstance(text, Err):
                return text
            originals[path] = contents[path] = text.value

        lines = _split_lines(contents[path])
        m = site.find([_strip_eol(line) for line in lines])
        if m is None:
            return Err(
                VersionError(
                    kind="site_not_found",
                    message=f"no version declaration found in {site.path}",
                    hint=f"expected a line matching {site.pattern}",
                )
            )
        if m.version != version_from:
            return Err(
                VersionError(
                    kind="site_not_found",
                    message=(
                        f"{site.path}:{m.line_no} declares {m.version}, expected {version_from}"
                    ),
                    hint="run `versync check` to list every site's version",
                )
            )

        new_line = site.render(m, version_to)
        rendered = site.find([new_line])
        if rendered is None or rendered.version != version_to:
            return Err(
                VersionError(
                    kind="config_invalid",
                    message=f"template for {site.path} does not produce a line its pattern accepts",
                    hint=new_line,
                )
            )

        # keep the original line terminator
        lines[m.index] = new_line + lines[m.index][len(m.line) :]
        contents[path] = "".join(lines)
        changes.append(
            SiteChange(site=site, path=path, line_no=m.line_no, old_line=m.line, new_line=new_line)
        )

    return Ok(UpdatePlan(changes=tuple(changes), contents=contents, originals=originals))


def update(
    *,
    root: Path,
    sites: Sequence[VersionSite],
    version_from: str,
    version_to: str,
    excludes: Iterable[str] = (),
    dry_run: bool = False,
) -> Result[UpdateReport, VersionError]:
    """Move every version site from ``version_from`` to ``version_to``.

    Fails without modifying anything when either version is malformed, when
    ``version_from`` is not the canonical version, or when any site cannot be
    resolved. Residual references to ``version_from`` are reported, never
    treated as failures.
    """
    for label, value in (("from", version_from), ("to", version_to)):
        valid = validate_version(value, label=label)
        if isinstance(valid, Err):
            return valid

    current = show(root=root, sites=sites)
    if isinstance(current, Err):
        return current
    if current.value != version_from:
        return Err(
            VersionError(
                kind="version_mismatch",
                message=(
                    f"Specified base version {version_from} does not match "
                    f"the current version {current.value}."
                ),
                hint=f"expected {version_from}, found {current.value} in {sites[0].path}",
            )
        )

    plan = plan_update(
        root=root,
        sites=sites,
        version_from=version_from,
        version_to=version_to,
    )
    if isinstance(plan, Err):
        return plan

    if dry_run:
        return Ok(
            UpdateReport(
                version_from=version_from,
                version_to=version_to,
                changes=plan.value.changes,
                dry_run=True,
            )
        )

    try:
        commit_texts(plan.value.modified, plan.value.originals)
    except CommitError as e:
        if e.unrestored:
            hint = "not restored, inspect manually: " + ", ".join(str(p) for p in e.unrestored)
        else:
            hint = "no version file was left modified"
        return Err(
            VersionError(
                kind="io_failed",
                message=f"failed to write {e.path}: {e.cause}",
                hint=hint,
            )
        )

    residuals = scan_residuals(root, version_from, excludes)
    return Ok(
        UpdateReport(
            version_from=version_from,
            version_to=version_to,
            changes=plan.value.changes,
            residuals=tuple(residuals),
        )
    )
