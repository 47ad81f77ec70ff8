"""Command-line entrypoint — merge split package pieces found in a directory."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

import structlog

from pkg_merge.assembler import assemble
from pkg_merge.config import get_settings
from pkg_merge.exceptions import PickerCancelledError, PkgMergeError
from pkg_merge.logger import setup_logging
from pkg_merge.merger import merge_packages
from pkg_merge.models import MergeProgress, PackageGroup
from pkg_merge.picker import pick_directory
from pkg_merge.scanner import scan_directory

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkg-merge",
        allow_abbrev=False,
        description="Merge split package pieces (<id>_<n>.pkg) into <id>-merged.pkg.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="DIR",
        help="Input directory, then output directory (defaults to the input).",
    )
    parser.add_argument("-i", "--input", dest="input_dir", default=None)
    parser.add_argument("-o", "--output", dest="output_dir", default=None)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


_INPUT_FLAGS = ("-i", "--input")
_OUTPUT_FLAGS = ("-o", "--output")


def resolve_directories(argv: Sequence[str]) -> tuple[str | None, str | None]:
    """Assign the input and output directories reading *argv* left to right.

    ``-i``/``-o`` set their slot wherever they appear, so a later flag
    overrides an earlier positional.  A bare path fills the input, then the
    output, if still unset; extras are ignored.  The output falls back to
    the input.
    """
    input_dir: str | None = None
    output_dir: str | None = None

    tokens = iter(argv)
    for token in tokens:
        flag, sep, value = token.partition("=")
        if token[:2] in _INPUT_FLAGS + _OUTPUT_FLAGS and len(token) > 2 and not token.startswith("--"):
            flag, sep, value = token[:2], "=", token[2:]

        if flag in _INPUT_FLAGS or flag in _OUTPUT_FLAGS:
            if not sep:
                value = next(tokens, None)
                if value is None:
                    break
            if flag in _INPUT_FLAGS:
                input_dir = value
            else:
                output_dir = value
        elif flag == "--log-level":
            if not sep:
                next(tokens, None)
        elif token.startswith("-"):
            continue
        elif input_dir is None:
            input_dir = token
        elif output_dir is None:
            output_dir = token

    if input_dir is not None and output_dir is None:
        output_dir = input_dir
    return input_dir, output_dir


def _print_group(group: PackageGroup) -> None:
    pieces = len(group.other_pieces)
    noun = "piece" if pieces == 1 else "pieces"
    print(f"[work] beginning to merge {pieces} {noun} for package {group.package_id}...")


def _print_progress(progress: MergeProgress) -> None:
    print(
        f"\r\t[work] merged {progress.copied}/{progress.total} bytes "
        f"({int(progress.percentage)}%) for part {progress.piece_index}...",
        end="",
        flush=True,
    )
    if progress.copied >= progress.total:
        print("done")


def run(input_dir: str | Path, output_dir: str | Path) -> int:
    """Scan, assemble and merge; return the number of packages written."""
    settings = get_settings()

    print("Reading files...")
    scan = scan_directory(
        input_dir,
        extension=settings.package_extension,
        merged_marker=settings.merged_marker,
    )
    groups = assemble(scan.records)
    results = merge_packages(
        groups,
        output_dir,
        extension=settings.package_extension,
        merged_marker=settings.merged_marker,
        chunk_size=settings.chunk_size,
        on_progress=_print_progress,
        on_group=_print_group,
    )
    return len(results)


def main(
    argv: list[str] | None = None,
    *,
    picker: Callable[[], Path] = pick_directory,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_intermixed_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    input_dir, output_dir = resolve_directories(argv)

    try:
        if input_dir is None:
            input_dir = str(picker())
            output_dir = output_dir or input_dir

        merged = run(input_dir, output_dir)
    except PickerCancelledError:
        print("User pressed cancel.")
        return 1
    except PkgMergeError as exc:
        logger.error("pkg_merge.failed", error=str(exc), kind=type(exc).__name__)
        return 1
    except OSError as exc:
        logger.error("pkg_merge.io_failed", error=str(exc))
        return 1

    print(f"\n[success] completed ({merged} merged)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
