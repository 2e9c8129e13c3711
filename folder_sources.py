"""
folder_sources.py
Suggested folders for the setup screen drop-downs and folder pickers.

Includes:
- The user's picture-ish folders (Pictures, Desktop, Downloads)
- OneDrive redirected versions of the same folders (common on Windows)
- Mounted drives / partitions (camera SD cards show up here)
"""

import os
from typing import List

import psutil


USER_FOLDER_NAMES = ["Pictures", "Desktop", "Downloads"]


def _add_if_exists(roots: list, path: str):
    """Helper: add a path if it's an existing directory and isn't already in the list."""
    if path and os.path.isdir(path) and path not in roots:
        roots.append(path)


def get_folder_suggestions() -> List[str]:
    roots: List[str] = []

    # ------------------------------------------------------------
    # 1) User profile folders (local)
    # ------------------------------------------------------------
    home = os.environ.get("USERPROFILE") or os.path.expanduser("~")
    for name in USER_FOLDER_NAMES:
        _add_if_exists(roots, os.path.join(home, name))

    # ------------------------------------------------------------
    # 2) OneDrive redirected folders
    # ------------------------------------------------------------
    onedrive = os.environ.get("OneDrive")
    if onedrive and os.path.isdir(onedrive):
        for name in USER_FOLDER_NAMES:
            _add_if_exists(roots, os.path.join(onedrive, name))

    # ------------------------------------------------------------
    # 3) Drives / partitions (C:\, D:\, /media/card ...)
    # ------------------------------------------------------------
    for part in psutil.disk_partitions(all=False):
        _add_if_exists(roots, part.mountpoint)

    # ------------------------------------------------------------
    # 4) Stable de-dupe on absolute paths
    # ------------------------------------------------------------
    seen = set()
    cleaned = []
    for r in roots:
        r = os.path.abspath(r)
        if r not in seen:
            seen.add(r)
            cleaned.append(r)

    return cleaned


def initial_dir_for(current: str, suggestions: List[str]) -> str:
    """
    Pick where a folder picker should open.
    The field's own value wins if it's a real folder, then the first suggestion.
    """
    current = (current or "").strip()
    if current and os.path.isdir(current):
        return current
    if suggestions:
        return suggestions[0]
    return os.path.expanduser("~")
