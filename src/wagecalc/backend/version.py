"""Report the WageCalc version from package metadata or the source checkout."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "wagecalc"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_PROJECT_VERSION = re.compile(
    r"^\[project\][^\[]*?^version\s*=\s*\"(?P<version>[^\"]+)\"",
    re.MULTILINE | re.DOTALL,
)


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, or the one declared in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Extract ``[project].version`` from the ``pyproject.toml`` at ``path``."""

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    match = _PROJECT_VERSION.search(path.read_text(encoding="utf-8"))
    if match is None:
        raise RuntimeError(f"No [project] version declared in {path}")
    return match.group("version")


__all__ = ["get_project_version", "read_pyproject_version"]
