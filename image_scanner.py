"""
image_scanner.py
Builds the list of images to sort from ONE folder (no recursion).

Notes:
- Order is whatever os.scandir gives us. We do NOT sort.
- Extension match is case-insensitive (".JPG" counts).
"""

import logging
import os
from typing import Iterable, List


logger = logging.getLogger(__name__)

SUPPORTED_EXTS = (".jpg", ".png", ".gif")

BYTES_IN_KB = 1024
BYTES_IN_MB = 1024 * 1024
BYTES_IN_GB = 1024 * 1024 * 1024


def format_size(num_bytes: int) -> str:
    if num_bytes >= BYTES_IN_GB:
        return f"{num_bytes / BYTES_IN_GB:.2f} GB"
    if num_bytes >= BYTES_IN_MB:
        return f"{num_bytes / BYTES_IN_MB:.2f} MB"
    if num_bytes >= BYTES_IN_KB:
        return f"{num_bytes / BYTES_IN_KB:.1f} KB"
    return f"{num_bytes} B"


def is_supported_image(name: str, extensions: Iterable[str] = SUPPORTED_EXTS) -> bool:
    """True if the file name ends with one of the extensions (any case)."""
    ext = os.path.splitext(name)[1].lower()
    return ext in {e.lower() for e in extensions}


def scan_images(folder: str, extensions: Iterable[str] = SUPPORTED_EXTS) -> List[str]:
    """
    Return full paths of the image files directly inside `folder`.

    Subdirectories are skipped, and so are entries we can't stat.
    Raises OSError if the folder itself can't be listed.
    """
    extensions = tuple(extensions)
    images: List[str] = []

    with os.scandir(folder) as it:
        for entry in it:
            try:
                if not entry.is_file(follow_symlinks=True):
                    continue
            except OSError:
                continue

            if is_supported_image(entry.name, extensions):
                images.append(entry.path)

    logger.info("Found %d image(s) in %s", len(images), folder)
    return images
