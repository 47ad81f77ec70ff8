"""Tests for the folder dialog wrapper (Tk is replaced, no display needed)."""

from pathlib import Path

import pytest

from pkg_merge.exceptions import PickerCancelledError, PickerError
from pkg_merge.picker import pick_directory

tkinter = pytest.importorskip("tkinter")
from tkinter import filedialog  # noqa: E402


class _FakeRoot:
    destroyed = False

    def withdraw(self):
        pass

    def destroy(self):
        type(self).destroyed = True


@pytest.fixture
def fake_tk(monkeypatch):
    _FakeRoot.destroyed = False
    monkeypatch.setattr(tkinter, "Tk", _FakeRoot)
    return _FakeRoot


class TestPickDirectory:
    def test_returns_selected_path(self, monkeypatch, fake_tk, tmp_path):
        monkeypatch.setattr(filedialog, "askdirectory", lambda **kw: str(tmp_path))
        assert pick_directory() == Path(tmp_path)
        assert fake_tk.destroyed

    def test_cancel(self, monkeypatch, fake_tk):
        monkeypatch.setattr(filedialog, "askdirectory", lambda **kw: "")
        with pytest.raises(PickerCancelledError):
            pick_directory()
        assert fake_tk.destroyed

    def test_dialog_failure(self, monkeypatch, fake_tk):
        def boom(**kw):
            raise tkinter.TclError("bad window path")

        monkeypatch.setattr(filedialog, "askdirectory", boom)
        with pytest.raises(PickerError, match="bad window path"):
            pick_directory()

    def test_no_display(self, monkeypatch):
        def no_display():
            raise tkinter.TclError("no display name and no $DISPLAY environment variable")

        monkeypatch.setattr(tkinter, "Tk", no_display)
        with pytest.raises(PickerError, match="cannot open folder dialog"):
            pick_directory()
