"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import structlog

from pkg_merge.config import get_settings
from pkg_merge.logger import setup_logging
from pkg_merge.models import PackageGroup, PieceRecord

PieceFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch):
    """Fresh settings per test; logging configured by main is undone afterwards."""
    monkeypatch.setattr(
        "pkg_merge.main.setup_logging",
        lambda level="INFO": setup_logging(level, cache_loggers=False),
    )
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def piece_dir(tmp_path: Path) -> Path:
    d = tmp_path / "pieces"
    d.mkdir()
    return d


@pytest.fixture
def make_file(piece_dir: Path) -> PieceFactory:
    """Write ``content`` to ``piece_dir / name`` and return the path."""

    def _make(name: str, content: bytes = b"data") -> Path:
        path = piece_dir / name
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def game_group(make_file: PieceFactory) -> PackageGroup:
    paths = [
        make_file("GAME_0.pkg", b"AAAA"),
        make_file("GAME_1.pkg", b"BBBBBB"),
        make_file("GAME_2.pkg", b"CC"),
    ]
    records = [
        PieceRecord(package_id="GAME", piece_index=i, source_path=p)
        for i, p in enumerate(paths)
    ]
    return PackageGroup(package_id="GAME", base_piece=records[0], other_pieces=records[1:])
