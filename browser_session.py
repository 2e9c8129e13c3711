"""State for one sorting session: the image list, the cursor, and the output folder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from file_actions import ActionResult, discard_file, keep_image, undo_keep
from image_scanner import scan_images


logger = logging.getLogger(__name__)

# Key symbol (Tk keysym) -> action name
KEY_ACTIONS = {
    "Left": "previous",
    "Right": "next",
    "Up": "keep",
    "Down": "undo_keep",
    "Escape": "exit",
}

# What happens to viewed source images when the user leaves
EXIT_ASK = "ask"
EXIT_DELETE = "delete"
EXIT_KEEP = "keep"
EXIT_POLICIES = (EXIT_ASK, EXIT_DELETE, EXIT_KEEP)


class NoImagesFound(Exception):
    """The source folder has no supported images."""

    def __init__(self, folder: str):
        super().__init__(f"No images found in {folder}")
        self.folder = folder


def action_for_key(keysym: str) -> Optional[str]:
    return KEY_ACTIONS.get(keysym)


class ExitPlan(NamedTuple):
    delete: bool
    close: bool


def exit_plan(policy: str, answer: Optional[bool] = None) -> ExitPlan:
    """
    What the exit flow should do.

    `answer` is the reply to the "delete viewed images?" prompt, which is only
    shown for EXIT_ASK: True = delete, False = don't delete, None = cancelled.
    Unknown policies behave like EXIT_KEEP.
    """
    if policy == EXIT_DELETE:
        return ExitPlan(delete=True, close=True)
    if policy == EXIT_ASK:
        if answer is None:
            return ExitPlan(delete=False, close=False)
        return ExitPlan(delete=bool(answer), close=True)
    return ExitPlan(delete=False, close=True)


@dataclass
class BulkDeleteReport:
    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def message(self) -> str:
        msg = f"Deleted {len(self.deleted)} viewed image(s)."
        if self.failed:
            msg += f" {len(self.failed)} could not be deleted."
        return msg


@dataclass
class BrowserSession:
    images: Tuple[str, ...]
    output_dir: str
    use_trash: bool = True
    cursor: int = 0

    def __post_init__(self):
        self.images = tuple(self.images)
        if not self.images:
            raise ValueError("BrowserSession needs at least one image")
        self.cursor = max(0, min(self.cursor, len(self.images) - 1))

    def __len__(self) -> int:
        return len(self.images)

    @property
    def current_path(self) -> str:
        return self.images[self.cursor]

    @property
    def title(self) -> str:
        return f"Image {self.cursor + 1} of {len(self.images)}"

    # ---------------- Navigation ----------------
    # Both return True only if the cursor actually moved.
    def move_previous(self) -> bool:
        if self.cursor > 0:
            self.cursor -= 1
            return True
        return False

    def move_next(self) -> bool:
        if self.cursor < len(self.images) - 1:
            self.cursor += 1
            return True
        return False

    # ---------------- Keep / undo ----------------
    def keep(self) -> ActionResult:
        return keep_image(self.current_path, self.output_dir)

    def undo_keep(self) -> ActionResult:
        return undo_keep(self.current_path, self.output_dir)

    # ---------------- Bulk delete ----------------
    def viewed_images(self) -> Tuple[str, ...]:
        """Everything up to and including the current image."""
        return self.images[: self.cursor + 1]

    def delete_viewed(self) -> BulkDeleteReport:
        """
        Delete every source image at index <= cursor.
        One failure never stops the rest; failures end up in the report.
        """
        report = BulkDeleteReport()
        for path in self.viewed_images():
            try:
                discard_file(path, use_trash=self.use_trash)
            except Exception as e:
                logger.warning("Could not delete %s: %s", path, e)
                report.failed.append((path, str(e)))
            else:
                report.deleted.append(path)

        logger.info(report.message)
        return report


def open_session(source_dir: str, output_dir: str, use_trash: bool = True) -> BrowserSession:
    """Scan `source_dir` and start at the first image. Raises NoImagesFound if empty."""
    images = scan_images(source_dir)
    if not images:
        raise NoImagesFound(source_dir)
    return BrowserSession(images=tuple(images), output_dir=output_dir, use_trash=use_trash)
