"""
ImageSorter.py
- This is the entry point of the program.
- Step 1: folder setup window (setup_dialog.py)
- Step 2: scan the source folder
- Step 3: browser window (ui_app.py) and Tkinter's event loop
"""

import logging
from tkinter import messagebox

from browser_session import NoImagesFound, open_session
from settings_store import load_settings
from setup_dialog import ask_folders
from ui_app import ImageBrowserApp


logger = logging.getLogger(__name__)


def run():
    """Run the app. Returns the browser window, or None if we never got that far."""
    settings = ask_folders(load_settings())
    if settings is None:
        logger.info("Setup cancelled")
        return None

    try:
        session = open_session(settings.source_dir, settings.output_dir, use_trash=settings.use_trash)
    except NoImagesFound as e:
        messagebox.showwarning("Image Sorter", f"There are no images in this folder:\n\n{e.folder}")
        return None
    except OSError as e:
        messagebox.showerror("Image Sorter", f"Could not read the image folder.\n\n{e}")
        return None

    app = ImageBrowserApp(session, exit_policy=settings.exit_policy)
    # Keeps the window open and handles key presses, resizes, timers
    app.mainloop()
    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run()


# This check ensures main() only runs when you run `python ImageSorter.py`
# and not when the file is imported by other modules.
if __name__ == "__main__":
    main()
