import os

import pytest

tk = pytest.importorskip("tkinter")
from PIL import Image

import ui_app
from browser_session import open_session


@pytest.fixture(autouse=True)
def _need_display():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.destroy()


@pytest.fixture
def dialogs(monkeypatch):
    """Record messagebox calls; askyesnocancel answers with dialogs['answer']."""
    calls = {"error": [], "warning": [], "asked": 0, "answer": None}

    def ask(*args, **kwargs):
        calls["asked"] += 1
        return calls["answer"]

    monkeypatch.setattr(ui_app.messagebox, "showerror", lambda *a, **k: calls["error"].append(a))
    monkeypatch.setattr(ui_app.messagebox, "showwarning", lambda *a, **k: calls["warning"].append(a))
    monkeypatch.setattr(ui_app.messagebox, "askyesnocancel", ask)
    return calls


@pytest.fixture
def real_images(tmp_path):
    source = tmp_path / "source"
    output = tmp_path / "output"
    source.mkdir()
    output.mkdir()
    Image.new("RGB", (40, 30), (255, 0, 0)).save(source / "a.png")
    Image.new("RGB", (40, 30), (0, 255, 0)).save(source / "b.png")
    frames = [Image.new("RGB", (20, 10), c) for c in ((255, 0, 0), (0, 0, 255))]
    frames[0].save(source / "c.gif", save_all=True, append_images=frames[1:], duration=[50, 50], loop=0)
    return source, output


def _app(folder, exit_policy):
    source, output = folder
    session = open_session(str(source), str(output), use_trash=False)
    app = ui_app.ImageBrowserApp(session, exit_policy=exit_policy)
    app.update_idletasks()
    return app


def _close(app):
    try:
        app.destroy()
    except tk.TclError:
        pass


def _exists(app):
    try:
        return bool(app.winfo_exists())
    except tk.TclError:
        return False


@pytest.mark.parametrize(
    "answer, deleted, still_open",
    [
        (True, True, False),
        (False, False, False),
        (None, False, True),
    ],
)
def test_ask_policy_follows_the_answer(real_images, dialogs, answer, deleted, still_open):
    dialogs["answer"] = answer
    app = _app(real_images, "ask")
    app.show_next()
    viewed = app.session.viewed_images()

    app.request_exit()

    assert dialogs["asked"] == 1
    assert all(not os.path.exists(p) for p in viewed) is deleted
    assert all(os.path.exists(p) for p in viewed) is not deleted
    assert os.path.exists(app.session.images[2])
    assert _exists(app) is still_open
    _close(app)


def test_delete_policy_deletes_without_asking(real_images, dialogs):
    app = _app(real_images, "delete")

    app.request_exit()

    assert dialogs["asked"] == 0
    assert not os.path.exists(app.session.images[0])
    assert all(os.path.exists(p) for p in app.session.images[1:])
    assert not _exists(app)


def test_keep_policy_never_deletes(real_images, dialogs):
    app = _app(real_images, "keep")
    app.show_next()
    app.show_next()

    app.request_exit()

    assert dialogs["asked"] == 0
    assert all(os.path.exists(p) for p in app.session.images)
    assert not _exists(app)


def test_exit_stops_animation(real_images, dialogs):
    app = _app(real_images, "keep")
    gif = next(i for i, p in enumerate(app.session.images) if p.endswith(".gif"))
    while app.session.cursor < gif:
        app.show_next()
    assert app._player is not None

    app.request_exit()

    assert app._player is None
    assert app._loaded is None


def test_decode_error_keeps_window_at_cursor(image_folder, dialogs):
    # image_folder holds files with image names but garbage bytes
    app = _app(image_folder, "keep")

    assert len(dialogs["error"]) == 1
    assert app.session.cursor == 0
    assert _exists(app)

    app.show_next()

    assert len(dialogs["error"]) == 2
    assert app.session.cursor == 1
    assert _exists(app)
    _close(app)


def test_failed_keep_shows_error_notice(real_images, dialogs, tmp_path):
    app = _app(real_images, "keep")
    app.session.output_dir = str(tmp_path / "missing" / "dir")

    app.keep_current()

    assert app.notice.message.startswith("Could not save")
    assert app.notice_label.cget("bg") == ui_app.theme.ERROR_BG
    _close(app)
