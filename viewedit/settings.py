"""User settings stored in the platform config directory.

The settings file is a small JSON object, for example::

    {"quit_key": "x", "save_key": "w", "filler": "~"}

Unknown keys are ignored; missing or broken files fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Editor preferences; key bindings are letters pressed with Ctrl."""
    quit_key: str = EditorConstants.QUIT_KEY
    save_key: str = EditorConstants.SAVE_KEY
    filler: str = EditorConstants.FILLER_GLYPH


def default_settings_path() -> Path:
    """Return the path of the settings file for this platform."""
    config_dir = Path(platformdirs.user_config_dir(EditorConstants.APP_NAME))
    return config_dir / EditorConstants.SETTINGS_FILENAME


def _valid_key(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1 and value.isalpha()


def _apply(settings: EditorSettings, data: Dict[str, Any]) -> EditorSettings:
    for name in ("quit_key", "save_key"):
        if name not in data:
            continue
        value = data[name]
        if _valid_key(value):
            setattr(settings, name, value.lower())
        else:
            logger.warning(f"Ignoring invalid {name} setting: {value!r}")
    if "filler" in data:
        value = data["filler"]
        if isinstance(value, str) and len(value) == 1:
            settings.filler = value
        else:
            logger.warning(f"Ignoring invalid filler setting: {value!r}")
    if settings.quit_key == settings.save_key:
        logger.warning("quit_key and save_key are the same, using defaults")
        settings.quit_key = EditorConstants.QUIT_KEY
        settings.save_key = EditorConstants.SAVE_KEY
    return settings


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings, falling back to defaults on any problem.

    Args:
        path: Settings file to read; defaults to the platform location.

    Returns:
        The loaded settings.
    """
    settings_file = path or default_settings_path()
    settings = EditorSettings()
    if not settings_file.exists():
        return settings

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    return _apply(settings, data)
