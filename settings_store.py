"""
settings_store.py
Remembers the folders (and exit options) between runs.

Stored as JSON in ~/.config/image_sorter/settings.json.
Set IMAGE_SORTER_CONFIG to use a different file.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Optional

from browser_session import EXIT_ASK, EXIT_POLICIES


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "IMAGE_SORTER_CONFIG"
DEFAULT_CONFIG_PATH = os.path.expanduser("~/.config/image_sorter/settings.json")


@dataclass
class Settings:
    source_dir: str = ""
    output_dir: str = ""
    exit_policy: str = EXIT_ASK
    use_trash: bool = True


def validate_folders(source_dir: str, output_dir: str) -> Optional[str]:
    """Return an error message for the setup screen, or None if the folders are usable."""
    source_dir = (source_dir or "").strip()
    output_dir = (output_dir or "").strip()

    if not source_dir or not output_dir:
        return "Choose both the image folder and the output folder."
    if not os.path.isdir(source_dir):
        return f"Image folder does not exist:\n\n{source_dir}"
    if os.path.exists(output_dir) and not os.path.isdir(output_dir):
        return f"Output path is not a folder:\n\n{output_dir}"
    return None


def config_path() -> str:
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def _from_dict(raw: dict) -> Settings:
    """Build Settings from whatever was in the file; bad values fall back to defaults."""
    settings = Settings()

    for key in ("source_dir", "output_dir"):
        value = raw.get(key)
        if isinstance(value, str):
            setattr(settings, key, value)

    if raw.get("exit_policy") in EXIT_POLICIES:
        settings.exit_policy = raw["exit_policy"]

    if isinstance(raw.get("use_trash"), bool):
        settings.use_trash = raw["use_trash"]

    return settings


def load_settings(path: Optional[str] = None) -> Settings:
    path = path or config_path()
    if not os.path.exists(path):
        return Settings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return Settings()

    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()

    return _from_dict(raw)


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    path = path or config_path()
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
