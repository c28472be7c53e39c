"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from wagecalc.backend import version
from wagecalc.backend.version import get_project_version, read_pyproject_version

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


@pytest.fixture(autouse=True)
def _clear_version_cache():
    get_project_version.cache_clear()
    yield
    get_project_version.cache_clear()


def test_read_pyproject_version_finds_project_table() -> None:
    assert read_pyproject_version(PYPROJECT) == "0.3.0"


def test_get_project_version_prefers_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"


def test_get_project_version_falls_back_to_pyproject(monkeypatch: pytest.MonkeyPatch) -> None:
    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_pyproject_version(PYPROJECT)


def test_read_pyproject_version_ignores_other_tables(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        '[tool.other]\nversion = "0.0.1"\n\n[project]\nname = "x"\nversion = "1.2.3"\n',
        encoding="utf-8",
    )

    assert read_pyproject_version(pyproject) == "1.2.3"


def test_read_pyproject_version_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        read_pyproject_version(tmp_path / "pyproject.toml")


def test_pyproject_path_points_at_repository_root() -> None:
    assert version.PYPROJECT_PATH == PYPROJECT
