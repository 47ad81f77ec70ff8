"""Directory scanner — turn split package files into :class:`PieceRecord` objects."""

from __future__ import annotations

from pathlib import Path

import structlog

from pkg_merge.exceptions import InputDirectoryError
from pkg_merge.models import PieceRecord, ScanResult, SkippedFile, SkipReason

logger = structlog.get_logger(__name__)


def parse_leading_int(text: str) -> tuple[int, int]:
    """Parse a base-10 integer from the start of *text*, ``strtol`` style.

    Leading whitespace and one optional sign are accepted; parsing stops at
    the first non-digit.  Returns ``(value, consumed)`` where *consumed* is
    ``0`` when no digit was found.

    >>> parse_leading_int("12abc")
    (12, 2)
    >>> parse_leading_int("abc")
    (0, 0)
    """
    pos = len(text) - len(text.lstrip())
    sign = 1
    if pos < len(text) and text[pos] in "+-":
        sign = -1 if text[pos] == "-" else 1
        pos += 1

    start = pos
    while pos < len(text) and text[pos] in "0123456789":
        pos += 1

    if pos == start:
        return 0, 0
    return sign * int(text[start:pos]), pos


def split_piece_name(file_name: str) -> tuple[str, str] | None:
    """Split ``<packageId>_<pieceIndex>.<ext>`` into its id and index text.

    The index text runs from the last underscore up to the first dot, or to
    the end of the name when that dot comes earlier.  Returns ``None`` when
    the name has no underscore.
    """
    underscore = file_name.rfind("_")
    if underscore < 0:
        return None

    begin = underscore + 1
    end = file_name.find(".")
    if end < begin:
        end = len(file_name)
    return file_name[:underscore], file_name[begin:end]


def scan_directory(
    directory: str | Path,
    *,
    extension: str = ".pkg",
    merged_marker: str = "-merged",
) -> ScanResult:
    """Collect every package piece found directly inside *directory*.

    Entries are visited in filename order.  Rejected entries are logged and
    returned in :attr:`ScanResult.skipped`; a directory that does not exist
    raises :class:`InputDirectoryError`.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise InputDirectoryError(directory)

    result = ScanResult(directory=directory)
    seen: dict[tuple[str, int], int] = {}

    def skip(name: str, reason: SkipReason, detail: str = "", *, warn: bool = True) -> None:
        result.skipped.append(SkippedFile(name=name, reason=reason, detail=detail))
        if warn:
            logger.warning(f"scan.{reason.value}", file=name, detail=detail)

    logger.info("scan.started", directory=str(directory))

    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        file_name = path.name

        if not path.is_file():
            skip(file_name, SkipReason.NOT_A_FILE, "not a regular file")
            continue

        if path.suffix != extension:
            skip(file_name, SkipReason.WRONG_EXTENSION, f"not a {extension} file")
            continue

        if merged_marker in file_name:
            skip(file_name, SkipReason.MERGED_OUTPUT, warn=False)
            continue

        parts = split_piece_name(file_name)
        if parts is None:
            skip(file_name, SkipReason.MISSING_INDEX, "no '_<index>' segment")
            continue
        package_id, index_text = parts

        piece_index, consumed = parse_leading_int(index_text)
        if consumed == 0:
            skip(file_name, SkipReason.INVALID_INDEX, f"'{index_text}' fails integer conversion")
            continue
        if piece_index < 0:
            skip(file_name, SkipReason.INVALID_INDEX, f"negative piece index {piece_index}")
            continue

        record = PieceRecord(package_id=package_id, piece_index=piece_index, source_path=path)
        key = (package_id, piece_index)
        if key in seen:
            replaced = result.records[seen[key]]
            skip(replaced.source_path.name, SkipReason.DUPLICATE, f"replaced by {file_name}")
            result.records[seen[key]] = record
            continue

        seen[key] = len(result.records)
        result.records.append(record)

    logger.info(
        "scan.finished",
        directory=str(directory),
        pieces=len(result.records),
        skipped=len(result.skipped),
    )
    return result
