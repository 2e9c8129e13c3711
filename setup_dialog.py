"""
setup_dialog.py

WHAT THIS FILE DOES:
1) Shows the "pick your folders" window before sorting starts.
2) Source folder + output folder fields, pre-filled from last time.
3) "Browse..." buttons open a folder picker and overwrite the field.
4) Start -> validate, save settings, close. The caller reads `.result`.

If the user closes the window instead, `.result` stays None and the
caller should quit without opening the browser window.
"""

import logging
import os
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

import theme
from browser_session import EXIT_ASK, EXIT_DELETE, EXIT_KEEP
from folder_sources import get_folder_suggestions, initial_dir_for
from settings_store import Settings, save_settings, validate_folders


logger = logging.getLogger(__name__)

# Combobox label -> exit policy value
EXIT_CHOICES = {
    "Ask me": EXIT_ASK,
    "Always delete viewed images": EXIT_DELETE,
    "Never delete": EXIT_KEEP,
}


class FolderSetupApp(tk.Tk):
    def __init__(self, settings: Settings):
        super().__init__()

        self.title("Image Sorter - Choose Folders")
        self.geometry("720x240")
        self.minsize(620, 240)

        self.settings = settings
        self.result = None  # Settings once the user presses Start

        self.suggestions = get_folder_suggestions()

        theme.apply_theme(self)
        self._build_ui()

        self.bind("<Return>", lambda _e: self.confirm())

    # ---------------- UI BUILD ----------------
    def _build_ui(self):
        form = ttk.Frame(self)
        form.pack(fill="both", expand=True, padx=12, pady=12)
        form.columnconfigure(1, weight=1)

        self.source_var = tk.StringVar(value=self.settings.source_dir)
        self.output_var = tk.StringVar(value=self.settings.output_dir)

        self._folder_row(form, 0, "Images to sort:", self.source_var, "Select the folder with images")
        self._folder_row(form, 1, "Save kept images to:", self.output_var, "Select the output folder")

        # ---------- Exit options ----------
        ttk.Label(form, text="On exit:").grid(row=2, column=0, sticky="w", pady=(12, 4))

        label_for_policy = {v: k for k, v in EXIT_CHOICES.items()}
        self.exit_var = tk.StringVar(value=label_for_policy.get(self.settings.exit_policy, "Ask me"))
        ttk.Combobox(
            form,
            textvariable=self.exit_var,
            values=list(EXIT_CHOICES),
            state="readonly",
            width=30
        ).grid(row=2, column=1, sticky="w", padx=8, pady=(12, 4))

        self.trash_var = tk.BooleanVar(value=self.settings.use_trash)
        ttk.Checkbutton(
            form,
            text="Send deleted images to the Recycle Bin",
            variable=self.trash_var
        ).grid(row=3, column=1, sticky="w", padx=8)

        # ---------- Buttons ----------
        buttons = ttk.Frame(self)
        buttons.pack(fill="x", padx=12, pady=(0, 12))
        ttk.Button(buttons, text="Start", command=self.confirm).pack(side="right")
        ttk.Button(buttons, text="Cancel", command=self.destroy).pack(side="right", padx=6)

    def _folder_row(self, parent, row: int, label: str, var: tk.StringVar, picker_title: str):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", pady=4)

        # Editable combobox: type a path or pick a suggestion
        ttk.Combobox(
            parent,
            textvariable=var,
            values=self.suggestions,
            width=60
        ).grid(row=row, column=1, sticky="ew", padx=8, pady=4)

        ttk.Button(
            parent,
            text="Browse...",
            command=lambda: self._browse(var, picker_title)
        ).grid(row=row, column=2, pady=4)

    # ---------------- Actions ----------------
    def _browse(self, var: tk.StringVar, title: str):
        chosen = filedialog.askdirectory(
            parent=self,
            title=title,
            initialdir=initial_dir_for(var.get(), self.suggestions),
            mustexist=True
        )
        # askdirectory returns "" (or an empty tuple on some platforms) on cancel
        if chosen:
            var.set(os.path.abspath(chosen))

    def confirm(self):
        source = self.source_var.get().strip()
        output = self.output_var.get().strip()

        error = validate_folders(source, output)
        if error:
            messagebox.showerror("Error", error, parent=self)
            return

        try:
            os.makedirs(output, exist_ok=True)
        except OSError as e:
            messagebox.showerror("Error", f"Could not create the output folder.\n\n{e}", parent=self)
            return

        settings = Settings(
            source_dir=os.path.abspath(source),
            output_dir=os.path.abspath(output),
            exit_policy=EXIT_CHOICES.get(self.exit_var.get(), EXIT_ASK),
            use_trash=bool(self.trash_var.get()),
        )

        try:
            save_settings(settings)
        except OSError as e:
            # Not fatal: we can still sort, we just won't remember the folders
            logger.warning("Could not save settings: %s", e)

        self.result = settings
        self.destroy()


def ask_folders(settings: Settings):
    """Run the setup window. Returns the confirmed Settings, or None if cancelled."""
    app = FolderSetupApp(settings)
    app.mainloop()
    return app.result
