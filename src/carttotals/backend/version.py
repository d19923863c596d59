"""Resolve the project version from package metadata or ``pyproject.toml``."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "carttotals"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_SECTION_PATTERN = re.compile(r"^\[(?P<name>[^\]]+)\]\s*$")
_VERSION_PATTERN = re.compile(r'^version\s*=\s*"(?P<version>[^"]*)"')


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, or the one declared in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Return ``[project].version`` from the TOML file at ``path``."""

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    in_project = False
    for line in path.read_text(encoding="utf-8").splitlines():
        section = _SECTION_PATTERN.match(line.strip())
        if section:
            in_project = section.group("name") == "project"
            continue
        if not in_project:
            continue
        match = _VERSION_PATTERN.match(line.strip())
        if match and match.group("version"):
            return match.group("version")

    raise RuntimeError(f"Unable to determine project version from {path.name}")


__all__ = ["PACKAGE_NAME", "get_project_version", "read_pyproject_version"]
