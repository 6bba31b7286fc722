"""Version information for the installed package."""

from __future__ import annotations

import importlib.metadata

from .constants import EditorConstants


def get_version() -> str:
    """Return the installed distribution version, or 'unknown' from a source tree."""
    try:
        return importlib.metadata.version(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    return f"{EditorConstants.APP_NAME} {get_version()}"
