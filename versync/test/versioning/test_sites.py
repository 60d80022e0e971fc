from __future__ import annotations

import pytest

from versync.versioning.sites import DEFAULT_SITES, VersionSite, template_fields

CARGO, SETUP, INIT, CONF = DEFAULT_SITES


def test_default_sites_cover_every_role() -> None:
    assert [s.role for s in DEFAULT_SITES] == [
        "build manifest",
        "package descriptor",
        "runtime version constant",
        "documentation config",
    ]
    assert CARGO.path == "Cargo.toml"


def test_cargo_site_ignores_other_version_keys() -> None:
    lines = [
        "[workspace.package]",
        'rust-version = "1.75"',
        'sudachi = { path = "sudachi", version = "0.6.8" }',
        'version = "0.6.8"',
        'version = "0.1.0"',
    ]
    m = CARGO.find(lines)
    assert m is not None
    assert m.version == "0.6.8"
    assert m.line_no == 4


def test_cargo_site_keeps_spacing_when_rendered() -> None:
    m = CARGO.find(['version="0.6.8"  '])
    assert m is not None
    assert CARGO.render(m, "0.6.9") == 'version="0.6.9"  '


def test_setup_site_keeps_indentation() -> None:
    m = SETUP.find(["setup(", '        version="0.6.8",', ")"])
    assert m is not None
    assert SETUP.render(m, "0.7.0-a1") == '        version="0.7.0-a1",'


@pytest.mark.parametrize(
    ("site", "line", "version"),
    [
        (INIT, '__version__ = "0.6.8"', "0.6.8"),
        (CONF, "release = '0.6.8'", "0.6.8"),
    ],
)
def test_python_sites_match(site: VersionSite, line: str, version: str) -> None:
    m = site.find(["# header", line])
    assert m is not None
    assert m.version == version
    assert site.render(m, "1.0.0") == line.replace(version, "1.0.0")


def test_find_returns_none_without_match() -> None:
    assert CONF.find(["version = '0.6'"]) is None


def test_optional_group_renders_empty() -> None:
    site = VersionSite(
        path="x.py",
        pattern=r'^(?P<prefix>v)?__version__ = "(?P<version>[^"]+)"$',
        template='{prefix}__version__ = "{version}"',
    )
    m = site.find(['__version__ = "1.0.0"'])
    assert m is not None
    assert site.render(m, "2.0.0") == '__version__ = "2.0.0"'


def test_template_fields() -> None:
    assert template_fields('{indent}version="{version}",') == {"indent", "version"}
    with pytest.raises(ValueError):
        template_fields("{version")
