"""Version synchronization: sites, config, residual scan and the service."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .errors import VersionError
from .residuals import ResidualHit, scan_residuals
from .service import (
    SiteChange,
    SiteVersion,
    UpdatePlan,
    UpdateReport,
    check,
    plan_update,
    show,
    update,
)
from .sites import DEFAULT_SCAN_EXCLUDES, DEFAULT_SITES, VersionSite

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_SCAN_EXCLUDES",
    "DEFAULT_SITES",
    "ResidualHit",
    "SiteChange",
    "SiteVersion",
    "UpdatePlan",
    "UpdateReport",
    "VersionError",
    "VersionSite",
    "check",
    "load_config",
    "load_config_or_default",
    "plan_update",
    "scan_residuals",
    "show",
    "update",
]
