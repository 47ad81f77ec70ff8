"""Exception hierarchy for pkg-merge.

Scan-time problems never raise; they are logged and recorded as skipped
files.  Everything below aborts the whole run.
"""

from __future__ import annotations

from pathlib import Path


class PkgMergeError(Exception):
    """Base class for every error raised by pkg-merge."""


class InputDirectoryError(PkgMergeError):
    """The input path is missing or is not a directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"argument '{path}' is not a directory")


# ── Folder dialog ─────────────────────────────────────────────

class PickerError(PkgMergeError):
    """The folder-selection dialog failed."""


class PickerCancelledError(PickerError):
    """The user dismissed the folder-selection dialog."""

    def __init__(self) -> None:
        super().__init__("user pressed cancel")


# ── Assembly / merge ──────────────────────────────────────────

class AssemblyError(PkgMergeError):
    """Pieces could not be grouped into packages."""


class OrphanPieceError(AssemblyError):
    """A non-base piece has no base piece (index 0) to attach to."""

    def __init__(self, package_id: str, piece_index: int, source_path: Path) -> None:
        self.package_id = package_id
        self.piece_index = piece_index
        self.source_path = source_path
        super().__init__(
            f"piece {piece_index} of package '{package_id}' ({source_path.name}) "
            f"has no base piece {package_id}_0"
        )


class MergeError(PkgMergeError):
    """A package could not be merged."""


class EmptyPieceError(MergeError):
    """A piece file to append has zero size."""

    def __init__(self, source_path: Path) -> None:
        self.source_path = source_path
        super().__init__(f"piece '{source_path}' is empty")
