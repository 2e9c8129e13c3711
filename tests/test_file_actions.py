import os

import pytest

import file_actions
from file_actions import (
    DELETED,
    ERROR,
    EXISTS,
    MISSING,
    SAVED,
    discard_file,
    keep_image,
    kept_path,
    undo_keep,
)


def test_kept_path_uses_basename(tmp_path):
    src = os.path.join("some", "where", "cat.png")
    assert kept_path(src, str(tmp_path)) == os.path.join(str(tmp_path), "cat.png")


def test_keep_copies_bytes_and_reports_size(image_folder):
    source, output = image_folder
    src = source / "a.jpg"

    result = keep_image(str(src), str(output))

    assert result.status == SAVED
    assert result.ok
    assert (output / "a.jpg").read_bytes() == src.read_bytes()
    assert "a.jpg" in result.message
    assert " B)" in result.message


def test_keep_does_not_overwrite(image_folder):
    source, output = image_folder
    (output / "a.jpg").write_bytes(b"something else")

    result = keep_image(str(source / "a.jpg"), str(output))

    assert result.status == EXISTS
    assert (output / "a.jpg").read_bytes() == b"something else"


def test_keep_reports_copy_errors(image_folder):
    source, output = image_folder

    result = keep_image(str(source / "a.jpg"), str(output / "missing" / "dir"))

    assert result.status == ERROR
    assert not result.ok
    assert "Could not save" in result.message


def test_undo_keep_missing(image_folder):
    source, output = image_folder

    result = undo_keep(str(source / "b.png"), str(output))

    assert result.status == MISSING
    assert result.ok


def test_undo_keep_deletes_copy_only(image_folder):
    source, output = image_folder
    keep_image(str(source / "b.png"), str(output))

    result = undo_keep(str(source / "b.png"), str(output))

    assert result.status == DELETED
    assert not (output / "b.png").exists()
    assert (source / "b.png").exists()


def test_undo_keep_reports_delete_errors(image_folder, monkeypatch):
    source, output = image_folder
    keep_image(str(source / "b.png"), str(output))

    def refuse(path):
        raise PermissionError("locked")

    monkeypatch.setattr(file_actions.os, "remove", refuse)

    result = undo_keep(str(source / "b.png"), str(output))

    assert result.status == ERROR
    assert "locked" in result.message


def test_discard_file_uses_trash(tmp_path, monkeypatch):
    target = tmp_path / "x.jpg"
    target.write_bytes(b"x")
    trashed = []
    monkeypatch.setattr(file_actions, "send2trash", trashed.append)

    discard_file(str(target), use_trash=True)

    assert trashed == [str(target)]


def test_discard_file_permanent(tmp_path):
    target = tmp_path / "x.jpg"
    target.write_bytes(b"x")

    discard_file(str(target), use_trash=False)

    assert not target.exists()


def test_discard_file_propagates_errors(tmp_path):
    with pytest.raises(OSError):
        discard_file(str(tmp_path / "gone.jpg"), use_trash=False)
