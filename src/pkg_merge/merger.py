"""Merge grouped pieces into one output file per package."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import BinaryIO, Callable, Mapping

import structlog

from pkg_merge.config import DEFAULT_CHUNK_SIZE
from pkg_merge.exceptions import EmptyPieceError
from pkg_merge.models import MergeProgress, MergeResult, PackageGroup, PieceRecord

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[MergeProgress], None]


def merged_file_path(
    package_id: str,
    output_dir: str | Path,
    *,
    extension: str = ".pkg",
    merged_marker: str = "-merged",
) -> Path:
    """Return ``<output_dir>/<package_id><merged_marker><extension>``."""
    return Path(output_dir) / f"{package_id}{merged_marker}{extension}"


def _append_piece(
    piece: PieceRecord,
    out: BinaryIO,
    *,
    chunk_size: int,
    on_progress: ProgressCallback | None,
) -> int:
    """Stream one piece onto *out* and return the number of bytes copied."""
    total = piece.source_path.stat().st_size
    if total == 0:
        raise EmptyPieceError(piece.source_path)

    copied = 0
    with piece.source_path.open("rb") as inp:
        while chunk := inp.read(chunk_size):
            out.write(chunk)
            copied += len(chunk)
            if on_progress is not None:
                on_progress(MergeProgress(
                    package_id=piece.package_id,
                    piece_index=piece.piece_index,
                    copied=copied,
                    total=total,
                ))
    return copied


def merge_group(
    group: PackageGroup,
    output_dir: str | Path,
    *,
    extension: str = ".pkg",
    merged_marker: str = "-merged",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: ProgressCallback | None = None,
) -> MergeResult:
    """Copy the base piece to a fresh merged file and append the rest.

    An existing merged file is replaced, never appended to.  If a piece
    turns out to be empty :class:`EmptyPieceError` is raised and the
    partially written output is left on disk.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output = merged_file_path(
        group.package_id, output_dir, extension=extension, merged_marker=merged_marker
    )

    log = logger.bind(package_id=group.package_id, output=str(output))
    log.info("merge.started", pieces=len(group.other_pieces))

    if output.exists():
        output.unlink()
        log.debug("merge.removed_stale_output")

    shutil.copyfile(group.base_piece.source_path, output)
    written = group.base_piece.source_path.stat().st_size
    log.debug("merge.copied_base", file=group.base_piece.source_path.name, size=written)

    with output.open("ab") as out:
        for piece in group.other_pieces:
            written += _append_piece(piece, out, chunk_size=chunk_size, on_progress=on_progress)
            log.debug("merge.appended_piece", piece_index=piece.piece_index, file=piece.source_path.name)

    log.info("merge.finished", bytes_written=written)
    return MergeResult(
        package_id=group.package_id,
        output_path=output,
        pieces=len(group.pieces),
        bytes_written=written,
    )


def merge_packages(
    groups: Mapping[str, PackageGroup],
    output_dir: str | Path,
    *,
    extension: str = ".pkg",
    merged_marker: str = "-merged",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: ProgressCallback | None = None,
    on_group: Callable[[PackageGroup], None] | None = None,
) -> list[MergeResult]:
    """Merge every group in turn; the first failure aborts the run."""
    results: list[MergeResult] = []
    for group in groups.values():
        if on_group is not None:
            on_group(group)
        results.append(merge_group(
            group,
            output_dir,
            extension=extension,
            merged_marker=merged_marker,
            chunk_size=chunk_size,
            on_progress=on_progress,
        ))
    return results
