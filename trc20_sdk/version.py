"""
Version of the installed trc20-sdk distribution.

A source checkout that was never installed has no distribution metadata; the
version is then taken from the ``[project]`` table of the adjacent
pyproject.toml.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION = "trc20-sdk"
UNKNOWN_VERSION = "0.1.0"

_PYPROJECT = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _version_from_pyproject(pyproject: pathlib.Path = _PYPROJECT) -> Optional[str]:
    try:
        with pyproject.open("rb") as f:
            project = tomli.load(f).get("project", {})
    except (OSError, tomli.TOMLDecodeError):
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version() -> str:
    """Installed metadata first, then pyproject.toml, then UNKNOWN_VERSION."""
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return _version_from_pyproject() or UNKNOWN_VERSION


__version__ = get_version()
