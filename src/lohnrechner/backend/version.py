"""Expose the project version consistently across the API and tooling."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "lohnrechner"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_SECTION = re.compile(r"^\[(?P<name>[^\]]+)\]$")
_VERSION = re.compile(r'^version\s*=\s*["\'](?P<value>[^"\']*)["\']')


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, else the one in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Return ``project.version`` from a ``pyproject.toml`` file.

    Only the ``[project]`` table is consulted so that tool sections declaring
    their own ``version`` keys are ignored.
    """

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    in_project = False
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        section = _SECTION.match(line)
        if section:
            in_project = section.group("name").strip() == "project"
            continue
        if in_project:
            match = _VERSION.match(line)
            if match and match.group("value"):
                return match.group("value")

    raise RuntimeError(f"Unable to determine project version from {path.name}")


__all__ = ["PACKAGE_NAME", "PYPROJECT_PATH", "get_project_version", "read_pyproject_version"]
