"""
theme.py
Blue/black theme shared by both windows.

Tkinter/ttk theming is limited, so we:
- set a dark window background
- style ttk widgets where possible
- give plain tk widgets (Canvas, Label) the colors below by hand
"""

import tkinter as tk
from tkinter import ttk


BG = "#0b1020"        # deep blue-black background
PANEL = "#0f1730"     # panel background color
BLUE = "#2d6cff"      # accent blue
TEXT = "#e8ecff"      # main text color
MUTED = "#b6c2ff"     # softer text color
FIELD_BG = "#070b16"  # entry / combobox background
SELECT = "#123a8a"    # selection background
ERROR_BG = "#8a1c1c"  # failed-action notice background

FONT = ("Segoe UI", 10)
NOTICE_FONT = ("Segoe UI", 11, "bold")


def apply_theme(window: tk.Misc):
    """Apply the theme to a Tk/Toplevel window and its ttk widgets."""
    window.configure(bg=BG)

    style = ttk.Style(window)

    # "clam" is the easiest theme to style consistently
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass

    style.configure(".", background=BG, foreground=TEXT, font=FONT)
    style.configure("TFrame", background=BG)
    style.configure("TLabel", background=BG, foreground=TEXT)
    style.configure("TCheckbutton", background=BG, foreground=TEXT)
    style.map("TCheckbutton", background=[("active", BG)])

    style.configure("TButton", background=PANEL, foreground=TEXT, bordercolor=BLUE)
    style.map("TButton",
              background=[("active", "#13204a")],
              foreground=[("active", TEXT)])

    style.configure("TCombobox", fieldbackground=FIELD_BG, foreground=TEXT)

    # Combobox dropdown list colors (works differently on some systems, but helps)
    window.option_add("*TCombobox*Listbox.background", FIELD_BG)
    window.option_add("*TCombobox*Listbox.foreground", TEXT)
    window.option_add("*TCombobox*Listbox.selectBackground", SELECT)
    window.option_add("*TCombobox*Listbox.selectForeground", TEXT)
