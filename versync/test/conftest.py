from __future__ import annotations

from pathlib import Path

import pytest

REPO_FILES: dict[str, str] = {
    "Cargo.toml": (
        "[workspace]\n"
        'members = ["sudachi", "sudachi-cli", "python"]\n'
        'resolver = "2"\n'
        "\n"
        "[workspace.package]\n"
        'rust-version = "1.75"\n'
        'version = "1.0.0"\n'
        'edition = "2021"\n'
    ),
    "python/setup.py": (
        "from setuptools import setup\n"
        "from setuptools_rust import Binding, RustExtension\n"
        "\n"
        "setup(\n"
        '    name="SudachiPy",\n'
        '    version="1.0.0",\n'
        '    description="Python version of Sudachi, the Japanese Morphological Analyzer",\n'
        '    rust_extensions=[RustExtension("sudachipy.sudachipy", binding=Binding.PyO3)],\n'
        ")\n"
    ),
    "python/py_src/sudachipy/__init__.py": (
        "from .sudachipy import Dictionary, Tokenizer\n"
        "\n"
        '__version__ = "1.0.0"\n'
    ),
    "python/docs/source/conf.py": (
        "project = 'SudachiPy'\n"
        "copyright = '2019, Works Applications'\n"
        "version = '1.0'\n"
        "release = '1.0.0'\n"
    ),
    "CHANGELOG.md": "# Changelog\n\n## 1.0.0\n\n- First stable release\n",
    "README.md": "# Sudachi\n\nA Japanese morphological analyzer.\n",
}


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A checkout where every version site declares 1.0.0."""
    root = tmp_path / "repo"
    for rel, text in REPO_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
    return root
