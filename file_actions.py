"""
file_actions.py
The three things we ever do to files:

- keep_image(src, output_dir)       copy into the output folder (never overwrites)
- undo_keep(src, output_dir)        delete the kept copy if it's there
- discard_file(path, use_trash)     delete a source image (Recycle Bin or permanent)

keep/undo return an ActionResult instead of raising, so the UI can just show
result.message in the notice.
"""

import logging
import os
import shutil
from dataclasses import dataclass

# send2trash safely sends files to the OS Recycle Bin instead of deleting permanently
from send2trash import send2trash

from image_scanner import format_size


logger = logging.getLogger(__name__)

# ActionResult.status values
SAVED = "saved"
EXISTS = "exists"
DELETED = "deleted"
MISSING = "missing"
ERROR = "error"


@dataclass
class ActionResult:
    status: str
    path: str
    message: str

    @property
    def ok(self) -> bool:
        return self.status != ERROR


def kept_path(src: str, output_dir: str) -> str:
    """Where the kept copy of `src` lives: output folder + same file name."""
    return os.path.join(output_dir, os.path.basename(src))


def keep_image(src: str, output_dir: str) -> ActionResult:
    """Copy `src` into `output_dir` unless a file with that name is already there."""
    dest = kept_path(src, output_dir)
    name = os.path.basename(src)

    if os.path.exists(dest):
        logger.info("Already kept: %s", dest)
        return ActionResult(EXISTS, dest, f"Already in output folder: {name}")

    try:
        shutil.copy2(src, dest)
        size = os.path.getsize(dest)
    except OSError as e:
        logger.error("Could not copy %s to %s: %s", src, dest, e)
        return ActionResult(ERROR, dest, f"Could not save {name}: {e}")

    logger.info("Kept %s -> %s", src, dest)
    return ActionResult(SAVED, dest, f"Saved: {name} ({format_size(size)})")


def undo_keep(src: str, output_dir: str) -> ActionResult:
    """Delete the kept copy of `src`. Nothing is touched if there isn't one."""
    dest = kept_path(src, output_dir)
    name = os.path.basename(src)

    if not os.path.isfile(dest):
        return ActionResult(MISSING, dest, f"Not found in output folder: {name}")

    try:
        os.remove(dest)
    except OSError as e:
        logger.error("Could not delete %s: %s", dest, e)
        return ActionResult(ERROR, dest, f"Could not delete {name}: {e}")

    logger.info("Removed kept copy %s", dest)
    return ActionResult(DELETED, dest, f"Deleted: {name}")


def discard_file(path: str, use_trash: bool = True):
    """
    Delete a source image.
    use_trash=True  -> OS Recycle Bin (send2trash)
    use_trash=False -> gone for good (os.remove)
    Errors propagate; the caller decides what to do per file.
    """
    if use_trash:
        send2trash(path)
    else:
        os.remove(path)
