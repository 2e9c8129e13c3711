import sys
from pathlib import Path

import pytest

# Allow importing the top-level modules from the repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


class FakeClock:
    """Stands in for widget.after / widget.after_cancel."""

    def __init__(self):
        self.now = 0
        self._jobs = {}
        self._next_id = 0

    def schedule(self, ms, callback):
        self._next_id += 1
        job_id = self._next_id
        self._jobs[job_id] = (self.now + ms, callback)
        return job_id

    def cancel(self, job_id):
        self._jobs.pop(job_id, None)

    @property
    def pending(self):
        return len(self._jobs)

    def advance(self, ms):
        """Move time forward, firing due callbacks in order (including ones they schedule)."""
        target = self.now + ms
        while True:
            due = [(when, job_id) for job_id, (when, _cb) in self._jobs.items() if when <= target]
            if not due:
                break
            when, job_id = min(due)
            _when, callback = self._jobs.pop(job_id)
            self.now = when
            callback()
        self.now = target


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def image_folder(tmp_path):
    """Source folder with three images and one text file, plus an empty output folder."""
    source = tmp_path / "source"
    output = tmp_path / "output"
    source.mkdir()
    output.mkdir()
    for name in ("a.jpg", "b.png", "c.gif"):
        (source / name).write_bytes(b"fake image bytes for " + name.encode())
    (source / "notes.txt").write_text("not an image", encoding="utf-8")
    return source, output
