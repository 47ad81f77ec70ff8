"""Native folder-selection dialog used when no input directory is given."""

from __future__ import annotations

from pathlib import Path

import structlog

from pkg_merge.exceptions import PickerCancelledError, PickerError

logger = structlog.get_logger(__name__)


def pick_directory(title: str = "Select the folder containing the package pieces") -> Path:
    """Ask the user for a directory with the Tk folder dialog.

    Raises :class:`PickerCancelledError` when the dialog is dismissed and
    :class:`PickerError` when no dialog can be shown (no Tk, no display).
    """
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError as exc:
        raise PickerError(f"tkinter is not available: {exc}") from exc

    try:
        root = tkinter.Tk()
    except tkinter.TclError as exc:
        raise PickerError(f"cannot open folder dialog: {exc}") from exc

    try:
        root.withdraw()
        selected = filedialog.askdirectory(parent=root, title=title, mustexist=True)
    except tkinter.TclError as exc:
        raise PickerError(f"folder dialog failed: {exc}") from exc
    finally:
        root.destroy()

    if not selected:
        raise PickerCancelledError()

    logger.info("picker.selected", directory=selected)
    return Path(selected)
