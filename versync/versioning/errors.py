"""Error payloads for version synchronization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

VersionErrorKind = Literal[
    "usage",
    "not_found",
    "version_mismatch",
    "site_not_found",
    "out_of_sync",
    "io_failed",
    "config_invalid",
]


@dataclass(frozen=True, slots=True)
class VersionError:
    kind: VersionErrorKind
    message: str
    hint: str | None = None
