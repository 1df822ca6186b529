"""Version lookup for erdsl.

A source checkout reports the version declared in its ``pyproject.toml``; an
installed package reports its distribution metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "erdsl"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_version(pyproject: Path) -> str | None:
    if not pyproject.is_file():
        return None
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except tomllib.TOMLDecodeError:
        return None
    if project.get("name") != DISTRIBUTION:
        return None
    return project.get("version")


def get_version(pyproject: Path = _PYPROJECT) -> str:
    """Return the erdsl version, or ``0.0.0`` when neither source is available."""
    source = _source_version(pyproject)
    if source:
        return source
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
