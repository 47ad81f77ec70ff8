"""Pydantic models shared by the scanner, assembler and merger."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ─────────────────────────────────────────────────────

class SkipReason(str, Enum):
    """Why a directory entry was left out of every package."""
    NOT_A_FILE = "not_a_file"
    WRONG_EXTENSION = "wrong_extension"
    MERGED_OUTPUT = "merged_output"
    MISSING_INDEX = "missing_index"
    INVALID_INDEX = "invalid_index"
    DUPLICATE = "duplicate"


# ── Scan ──────────────────────────────────────────────────────

class PieceRecord(BaseModel):
    """One on-disk piece of a logical package."""
    model_config = ConfigDict(frozen=True)

    package_id: str
    piece_index: int = Field(ge=0)
    source_path: Path

    @property
    def is_base(self) -> bool:
        return self.piece_index == 0


class SkippedFile(BaseModel):
    """A directory entry rejected while scanning."""
    model_config = ConfigDict(frozen=True)

    name: str
    reason: SkipReason
    detail: str = ""


class ScanResult(BaseModel):
    """Everything the scanner found in one directory."""
    directory: Path
    records: list[PieceRecord] = Field(default_factory=list)
    skipped: list[SkippedFile] = Field(default_factory=list)

    def skipped_for(self, reason: SkipReason) -> list[SkippedFile]:
        return [s for s in self.skipped if s.reason == reason]


# ── Assembly ──────────────────────────────────────────────────

class PackageGroup(BaseModel):
    """A base piece plus the pieces appended to it, in index order."""
    package_id: str
    base_piece: PieceRecord
    other_pieces: list[PieceRecord] = Field(default_factory=list)

    @property
    def pieces(self) -> list[PieceRecord]:
        return [self.base_piece, *self.other_pieces]


# ── Merge ─────────────────────────────────────────────────────

class MergeProgress(BaseModel):
    """Byte progress for the piece currently being appended."""
    model_config = ConfigDict(frozen=True)

    package_id: str
    piece_index: int
    copied: int
    total: int

    @property
    def percentage(self) -> float:
        """Percentage of the current piece copied so far."""
        return self.copied / self.total * 100


class MergeResult(BaseModel):
    """Outcome of merging one package."""
    package_id: str
    output_path: Path
    pieces: int
    bytes_written: int
