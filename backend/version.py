"""
Application version: the repo-root VERSION file, else the installed distribution's metadata.
"""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "mentor-assignment-service"


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def get_version() -> str:
    """Return the version string, or '0.0.0' if neither source is available."""
    path = _version_file_path()
    if path.is_file():
        try:
            raw = path.read_text(encoding="utf-8").strip()
        except OSError:
            raw = ""
        if raw:
            return raw.splitlines()[0].strip()
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"
