"""
ui_app.py

WHAT THIS FILE DOES (high level):
1) Shows one image at a time from the source folder.
2) Arrow keys:
   - Left / Right -> previous / next image (stops at the ends, no wraparound)
   - Up           -> KEEP: copy the image into the output folder
   - Down         -> UNDO KEEP: delete that copy from the output folder
3) Escape (or the window close button) -> exit, optionally deleting every
   image viewed so far from the SOURCE folder (see exit_policy).
4) A small notice in the top-right corner says what just happened and
   disappears after 2 seconds.

IMPORTANT:
- Everything runs on the Tkinter main thread. Timers use .after().
- Only ONE decoded image is alive at a time. It is released before the next
  one is loaded, and before the bulk delete (so no file is held open).
"""

import logging
import os
import tkinter as tk
from tkinter import messagebox, ttk

from PIL import ImageTk

import theme
from browser_session import EXIT_ASK, BrowserSession, action_for_key, exit_plan
from image_loader import load_image, render_frame
from ui_timers import FramePlayer, TransientNotice


logger = logging.getLogger(__name__)

KEY_HINTS = "←/→ browse   ↑ keep   ↓ undo keep   Esc exit"

# How many failed file names to list in the bulk delete warning
MAX_LISTED_FAILURES = 10


class ImageBrowserApp(tk.Tk):
    def __init__(self, session: BrowserSession, exit_policy: str = EXIT_ASK):
        super().__init__()

        # ---------------- Window setup ----------------
        self.title("Image Sorter")
        self.geometry("1100x760")
        self.minsize(480, 360)

        self.session = session
        self.exit_policy = exit_policy

        # The ONE decoded image currently on screen, and what draws it
        self._loaded = None          # LoadedImage
        self._photo = None           # ImageTk.PhotoImage (must stay referenced or Tk drops it)
        self._player = None          # FramePlayer for animated images
        self._frame_index = 0
        self._viewport = (1, 1)

        # Action name -> handler. Keys are mapped to action names in browser_session.
        self._handlers = {
            "previous": self.show_previous,
            "next": self.show_next,
            "keep": self.keep_current,
            "undo_keep": self.undo_keep_current,
            "exit": self.request_exit,
        }

        theme.apply_theme(self)
        self._build_ui()

        self.notice = TransientNotice(
            schedule=self.after,
            cancel=self.after_cancel,
            on_show=self._show_notice_label,
            on_hide=self._hide_notice_label,
        )

        self.bind("<Key>", self._on_key)
        self.protocol("WM_DELETE_WINDOW", self.request_exit)

        self.load_image()

    # ---------------- UI BUILD ----------------
    def _build_ui(self):
        """Creates every widget and places them on the window."""

        # Image area (fills the window)
        self.canvas = tk.Canvas(self, bg=theme.BG, highlightthickness=0, bd=0)
        self.canvas.pack(fill="both", expand=True)
        self.canvas.bind("<Configure>", self._on_resize)

        # Bottom status label with the key hints
        self.bottom_label = ttk.Label(self, text=KEY_HINTS, foreground=theme.MUTED)
        self.bottom_label.pack(fill="x", padx=12, pady=(4, 8))

        # Transient notice (placed over the canvas only while visible)
        self.notice_label = tk.Label(
            self,
            text="",
            bg="black",
            fg="white",
            font=theme.NOTICE_FONT,
            padx=10,
            pady=10
        )

    # ---------------- Notice ----------------
    def _show_notice_label(self, message: str):
        self.notice_label.config(text=message)
        self.notice_label.place(relx=1.0, x=-12, y=12, anchor="ne")
        self.notice_label.lift()

    def _hide_notice_label(self):
        self.notice_label.place_forget()

    # ---------------- Image loading ----------------
    def load_image(self):
        """Release the current image, decode the one at the cursor and show it."""
        self._release_image()

        path = self.session.current_path
        self.title(f"{self.session.title} - {os.path.basename(path)}")

        try:
            self._loaded = load_image(path)
        except Exception as e:
            logger.error("Could not open %s: %s", path, e)
            messagebox.showerror("Image Load Error", f"Could not open image:\n\n{path}\n\n{e}", parent=self)
            return

        self._frame_index = 0
        self._render()

        if self._loaded.is_animated:
            self._player = FramePlayer(
                schedule=self.after,
                cancel=self.after_cancel,
                durations=self._loaded.durations,
                on_frame=self._on_frame,
            )
            self._player.start()

    def _release_image(self):
        # Stop the animation FIRST so no frame tick touches a closed image
        if self._player is not None:
            self._player.stop()
            self._player = None

        if self._loaded is not None:
            self._loaded.close()
            self._loaded = None

        self.canvas.delete("image")
        self._photo = None

    def _render(self):
        """Draw the current frame for the current canvas size."""
        if self._loaded is None or not self._loaded.frames:
            return

        frame = self._loaded.frames[self._frame_index]
        shown = render_frame(frame, self._viewport)

        self._photo = ImageTk.PhotoImage(shown)
        self.canvas.delete("image")
        self.canvas.create_image(
            self._viewport[0] // 2,
            self._viewport[1] // 2,
            image=self._photo,
            anchor="center",
            tags="image"
        )

    def _on_frame(self, index: int):
        self._frame_index = index
        self._render()

    def _on_resize(self, event):
        size = (max(1, event.width), max(1, event.height))
        if size != self._viewport:
            self._viewport = size
            self._render()

    # ---------------- Keys ----------------
    def _on_key(self, event):
        action = action_for_key(event.keysym)
        if action is None:
            return
        self._handlers[action]()
        return "break"

    def show_previous(self):
        if self.session.move_previous():
            self.load_image()

    def show_next(self):
        if self.session.move_next():
            self.load_image()

    def keep_current(self):
        self._show_result(self.session.keep())

    def undo_keep_current(self):
        self._show_result(self.session.undo_keep())

    def _show_result(self, result):
        # Failures get a red notice so they don't look like "Saved"
        self.notice_label.config(bg="black" if result.ok else theme.ERROR_BG)
        self.notice.show(result.message)

    # ---------------- Exit ----------------
    def request_exit(self):
        """
        Escape and the window close button both end up here.
        exit_policy decides whether viewed images are deleted first.
        """
        answer = None
        if self.exit_policy == EXIT_ASK:
            count = len(self.session.viewed_images())
            answer = messagebox.askyesnocancel(
                "Exit",
                f"Delete the {count} image(s) you viewed from the source folder?\n\n"
                "Yes: delete and exit\n"
                "No: exit without deleting\n"
                "Cancel: keep sorting",
                parent=self
            )

        plan = exit_plan(self.exit_policy, answer)
        if not plan.close:
            return

        if plan.delete:
            self.delete_viewed_images()

        # Stops any animation tick before the window goes away
        self._release_image()
        self.notice.cancel()
        self.destroy()

    def delete_viewed_images(self):
        # Release the displayed image so the file isn't locked while we delete it
        self._release_image()

        report = self.session.delete_viewed()
        if report.failed:
            names = "\n".join(os.path.basename(p) for p, _err in report.failed[:MAX_LISTED_FAILURES])
            if len(report.failed) > MAX_LISTED_FAILURES:
                names += "\n..."
            messagebox.showwarning("Delete", f"{report.message}\n\n{names}", parent=self)
