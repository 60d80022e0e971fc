"""Typed loading of the optional versync.toml.

Example:

    exclude = ["target", "node_modules"]

    [[site]]
    path = "Cargo.toml"
    pattern = '^version = "(?P<version>[^"]+)"$'
    template = 'version = "{version}"'

The first ``[[site]]`` is the canonical version source. Either key may be
omitted to keep the built-in default.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from versync.core.result import Err, Ok, Result
from versync.core.structured import StrDict, as_str_dict, get_list, get_str, get_str_list
from versync.versioning.sites import (
    DEFAULT_SCAN_EXCLUDES,
    DEFAULT_SITES,
    VersionSite,
    template_fields,
)

__all__ = ["Config", "ConfigError", "load_config", "load_config_or_default"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    sites: tuple[VersionSite, ...] = DEFAULT_SITES
    exclude: tuple[str, ...] = DEFAULT_SCAN_EXCLUDES

    @property
    def canonical(self) -> VersionSite:
        return self.sites[0]

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[Config, str]:
        """Create Config from parsed TOML, validating every site."""
        sites = DEFAULT_SITES
        if "site" in data:
            raw_sites = get_list(data, "site")
            if not raw_sites:
                return Err("'site' must be a non-empty array of tables")
            parsed: list[VersionSite] = []
            for i, raw in enumerate(raw_sites):
                table = as_str_dict(raw)
                if table is None:
                    return Err(f"site #{i + 1} must be a table")
                site = _parse_site(table, i)
                if isinstance(site, Err):
                    return site
                parsed.append(site.value)
            sites = tuple(parsed)

        exclude = DEFAULT_SCAN_EXCLUDES
        if "exclude" in data:
            values = get_str_list(data, "exclude")
            if values is None:
                return Err("'exclude' must be an array of strings")
            exclude = tuple(values)

        return Ok(cls(sites=sites, exclude=exclude))


def _parse_site(table: StrDict, index: int) -> Result[VersionSite, str]:
    label = f"site #{index + 1}"
    path = get_str(table, "path")
    pattern = get_str(table, "pattern")
    template = get_str(table, "template")
    if path is None or pattern is None or template is None:
        return Err(f"{label} needs non-empty 'path', 'pattern' and 'template'")

    try:
        regex = re.compile(pattern)
    except re.error as e:
        return Err(f"{label} ({path}): invalid pattern: {e}")
    if "version" not in regex.groupindex:
        return Err(f"{label} ({path}): pattern has no (?P<version>...) group")

    try:
        fields = template_fields(template)
    except ValueError as e:
        return Err(f"{label} ({path}): invalid template: {e}")
    unknown = fields - set(regex.groupindex) - {"version"}
    if unknown:
        names = ", ".join(sorted(unknown))
        return Err(f"{label} ({path}): template references unknown fields: {names}")

    return Ok(
        VersionSite(
            path=path,
            pattern=pattern,
            template=template,
            role=get_str(table, "role") or "",
        )
    )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    config = Config.from_dict(result.value)
    if isinstance(config, Err):
        return Err(ConfigError(f"Invalid config: {config.error}", path=path))
    return Ok(config.value)


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, else return defaults.

    A file that exists but is invalid is an error, never a fallback.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
