"""Tests for versync.core.workspace module."""

from __future__ import annotations

from pathlib import Path

import pytest

from versync.core.result import Err, Ok
from versync.core.workspace import (
    ROOT_ENV_VAR,
    Workspace,
    detect_workspace,
    find_workspace_upward,
    is_workspace_root,
)


@pytest.fixture(autouse=True)
def _no_env_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)


def _make_root(path: Path, *, git: bool = False) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "Cargo.toml").write_text('[package]\nversion = "0.1.0"\n', encoding="utf-8")
    if git:
        (path / ".git").mkdir()
    return path


class TestWorkspace:
    def test_config_path(self, tmp_path: Path) -> None:
        assert Workspace(root=tmp_path).config_path == tmp_path / "versync.toml"


def test_is_workspace_root(tmp_path: Path) -> None:
    assert is_workspace_root(tmp_path) is False
    _make_root(tmp_path)
    assert is_workspace_root(tmp_path) is True


def test_find_upward_prefers_git_root(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo", git=True)
    crate = _make_root(root / "sudachi")
    start = crate / "src"
    start.mkdir()

    assert find_workspace_upward(start) == crate
    assert find_workspace_upward(start, require_git=True) == root


def test_detect_from_nested_directory(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo", git=True)
    _make_root(root / "sudachi")

    result = detect_workspace(start_dir=root / "sudachi")

    assert isinstance(result, Ok)
    assert result.value.root == root.resolve()
    assert result.value.source == "git"


def test_detect_without_git_uses_marker(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo")
    nested = root / "python"
    nested.mkdir()

    result = detect_workspace(start_dir=nested)

    assert isinstance(result, Ok)
    assert result.value.root == root.resolve()
    assert result.value.source == "marker"


def test_detect_explicit_root_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path / "elsewhere"))

    result = detect_workspace(root=tmp_path)

    assert isinstance(result, Ok)
    assert result.value.source == "option"


def test_detect_explicit_root_must_exist(tmp_path: Path) -> None:
    result = detect_workspace(root=tmp_path / "missing")
    assert isinstance(result, Err)


def test_detect_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))

    result = detect_workspace(start_dir=Path("/"))

    assert isinstance(result, Ok)
    assert result.value.root == tmp_path.resolve()
    assert result.value.source == "env"


def test_detect_env_var_invalid(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path / "missing"))

    result = detect_workspace()

    assert isinstance(result, Err)
    assert ROOT_ENV_VAR in result.error.message


def test_detect_not_found(tmp_path: Path) -> None:
    result = detect_workspace(start_dir=tmp_path)

    assert isinstance(result, Err)
    assert "Cargo.toml" in result.error.message
    assert result.error.searched_from == tmp_path.resolve()


def test_detect_config_file_as_marker(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    (root / "pkg").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "versync.toml").write_text('[[site]]\npath = "VERSION"\n', encoding="utf-8")

    result = detect_workspace(start_dir=root / "pkg")

    assert isinstance(result, Ok)
    assert result.value.root == root.resolve()
    assert result.value.source == "git"
