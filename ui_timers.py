"""
ui_timers.py
Things driven by Tk timers (widget.after / widget.after_cancel).

Both classes take `schedule(ms, callback) -> job_id` and `cancel(job_id)`
so they work with any Tk widget, and with a fake clock in tests.
"""

import logging
from typing import Any, Callable, List, Optional


logger = logging.getLogger(__name__)

Schedule = Callable[[int, Callable[[], None]], Any]
Cancel = Callable[[Any], None]

NOTICE_MS = 2000


class TransientNotice:
    """
    One message slot that hides itself.

    show() replaces whatever is visible and restarts the countdown,
    so the hide always happens `duration_ms` after the LAST show().
    """

    def __init__(
        self,
        schedule: Schedule,
        cancel: Cancel,
        on_show: Callable[[str], None],
        on_hide: Callable[[], None],
        duration_ms: int = NOTICE_MS,
    ):
        self._schedule = schedule
        self._cancel = cancel
        self._on_show = on_show
        self._on_hide = on_hide
        self.duration_ms = duration_ms

        self._job = None
        self.message: Optional[str] = None

    @property
    def visible(self) -> bool:
        return self.message is not None

    def show(self, message: str):
        if self._job is not None:
            self._cancel(self._job)
            self._job = None

        self.message = message
        self._on_show(message)
        self._job = self._schedule(self.duration_ms, self._hide)

    def _hide(self):
        self._job = None
        self.message = None
        self._on_hide()

    def cancel(self):
        """Hide right now (used when the window goes away)."""
        if self._job is not None:
            self._cancel(self._job)
            self._job = None
        self.message = None


class FramePlayer:
    """
    Cycles through animation frames for ONE image.

    stop() cancels the pending tick. A tick that still fires after stop()
    (already queued by Tk) is ignored, so a disposed image never gets drawn.
    """

    def __init__(
        self,
        schedule: Schedule,
        cancel: Cancel,
        durations: List[int],
        on_frame: Callable[[int], None],
    ):
        self._schedule = schedule
        self._cancel = cancel
        self._durations = list(durations)
        self._on_frame = on_frame

        self._job = None
        self._running = False
        self._generation = 0
        self.frame_index = 0

    def start(self):
        if self._running or len(self._durations) < 2:
            return
        self._running = True
        self._generation += 1
        self._schedule_next()

    def stop(self):
        self._running = False
        self._generation += 1
        if self._job is not None:
            self._cancel(self._job)
            self._job = None

    def _schedule_next(self):
        generation = self._generation
        self._job = self._schedule(
            self._durations[self.frame_index], lambda: self._tick(generation)
        )

    def _tick(self, generation: int):
        if not self._running or generation != self._generation:
            return
        self._job = None

        self.frame_index = (self.frame_index + 1) % len(self._durations)
        try:
            self._on_frame(self.frame_index)
        except Exception as e:
            # Drawing failed -> treat the rest of the animation as a still image
            logger.warning("Animation stopped: %s", e)
            self.stop()
            return

        self._schedule_next()
