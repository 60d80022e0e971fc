"""Version sites: the lines that must mirror the canonical version.

Each site is matched line by line against a regular expression with a named
``version`` group. Other named groups capture the text around the version
(indentation, quoting) so the template can rebuild the line unchanged apart
from the version itself.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from functools import cached_property

__all__ = [
    "DEFAULT_SITES",
    "DEFAULT_SCAN_EXCLUDES",
    "SiteMatch",
    "VersionSite",
    "template_fields",
]


@dataclass(frozen=True, slots=True)
class SiteMatch:
    """First line of a file matching a site's pattern."""

    index: int  # 0-based line index
    line: str  # without line terminator
    version: str
    groups: dict[str, str]

    @property
    def line_no(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class VersionSite:
    """A (path, pattern, template) triple naming one version line in one file."""

    path: str  # relative to the repository root
    pattern: str
    template: str
    role: str = field(default="", compare=False)

    @cached_property
    def regex(self) -> re.Pattern[str]:
        return re.compile(self.pattern)

    def find(self, lines: list[str]) -> SiteMatch | None:
        """Return the first matching line, or None."""
        for index, line in enumerate(lines):
            m = self.regex.search(line)
            if m is None:
                continue
            groups = {k: v or "" for k, v in m.groupdict().items()}
            return SiteMatch(index=index, line=line, version=m.group("version"), groups=groups)
        return None

    def render(self, match: SiteMatch, version: str) -> str:
        """Rebuild the matched line declaring ``version``."""
        return self.template.format_map({**match.groups, "version": version})


def template_fields(template: str) -> set[str]:
    """Field names referenced by a str.format template.

    Raises:
        ValueError: The template is not a valid format string.
    """
    names: set[str] = set()
    for _, name, _, _ in string.Formatter().parse(template):
        if name is not None:
            names.add(name)
    return names


DEFAULT_SITES: tuple[VersionSite, ...] = (
    # Canonical source: the workspace manifest. Only the first declaration
    # counts; dependency tables further down carry their own versions.
    VersionSite(
        path="Cargo.toml",
        pattern=r'^(?P<key>version\s*=\s*)"(?P<version>[^"]+)"(?P<tail>\s*)$',
        template='{key}"{version}"{tail}',
        role="build manifest",
    ),
    VersionSite(
        path="python/setup.py",
        pattern=r'^(?P<indent> *)version="(?P<version>[^"]+)",$',
        template='{indent}version="{version}",',
        role="package descriptor",
    ),
    VersionSite(
        path="python/py_src/sudachipy/__init__.py",
        pattern=r'^__version__ = "(?P<version>[^"]+)"$',
        template='__version__ = "{version}"',
        role="runtime version constant",
    ),
    VersionSite(
        path="python/docs/source/conf.py",
        pattern=r"^release = '(?P<version>[^']+)'$",
        template="release = '{version}'",
        role="documentation config",
    ),
)

DEFAULT_SCAN_EXCLUDES: tuple[str, ...] = (
    ".git",
    "target",
    "node_modules",
    "__pycache__",
    ".venv",
    "build",
    "dist",
)
