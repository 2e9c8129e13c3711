"""
image_loader.py
Decode an image file into frames (Pillow) and size it for the viewport.

- Still images -> 1 frame
- Animated GIFs -> every frame + its duration in ms

The file is opened inside a `with` block and closed as soon as the frames are
copied out, so the source file is never left locked (we may delete it later).
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from PIL import Image


# Images smaller than this in BOTH directions are shown as-is (centered).
FIT_THRESHOLD = 700

DEFAULT_FRAME_MS = 100

FIT_CENTER = "center"
FIT_SCALE = "fit"


@dataclass
class LoadedImage:
    path: str
    frames: List[Image.Image] = field(default_factory=list)
    durations: List[int] = field(default_factory=list)

    @property
    def is_animated(self) -> bool:
        return len(self.frames) > 1

    def close(self):
        """Release the decoded pixel buffers."""
        for frame in self.frames:
            frame.close()
        self.frames = []
        self.durations = []


def _frame_duration(img: Image.Image) -> int:
    duration = img.info.get("duration", DEFAULT_FRAME_MS)
    # Some GIFs say 0 (or garbage); browsers fall back to ~100ms too
    if not isinstance(duration, (int, float)) or duration <= 0:
        return DEFAULT_FRAME_MS
    return int(duration)


def load_image(path: str) -> LoadedImage:
    """Decode `path`. Pillow errors (OSError, UnidentifiedImageError...) propagate."""
    loaded = LoadedImage(path=path)

    with Image.open(path) as img:
        n_frames = getattr(img, "n_frames", 1) if getattr(img, "is_animated", False) else 1
        try:
            for frame_idx in range(n_frames):
                img.seek(frame_idx)
                loaded.frames.append(img.convert("RGBA"))
                loaded.durations.append(_frame_duration(img))
        except Exception:
            # A bad frame halfway through: free the ones we already decoded
            loaded.close()
            raise

    return loaded


def choose_fit_mode(size: Tuple[int, int]) -> str:
    width, height = size
    if width < FIT_THRESHOLD and height < FIT_THRESHOLD:
        return FIT_CENTER
    return FIT_SCALE


def fit_size(size: Tuple[int, int], viewport: Tuple[int, int]) -> Tuple[int, int]:
    """Largest size that fits inside `viewport` with the same aspect ratio."""
    width, height = size
    view_w, view_h = viewport
    if width <= 0 or height <= 0 or view_w <= 0 or view_h <= 0:
        return (max(1, width), max(1, height))

    scale = min(view_w / width, view_h / height)
    return (max(1, int(width * scale)), max(1, int(height * scale)))


def render_frame(frame: Image.Image, viewport: Tuple[int, int]) -> Image.Image:
    """Return the frame the way it should be drawn in a viewport of this size."""
    if choose_fit_mode(frame.size) == FIT_CENTER:
        return frame
    target = fit_size(frame.size, viewport)
    if target == frame.size:
        return frame
    return frame.resize(target, Image.LANCZOS)  # type: ignore
