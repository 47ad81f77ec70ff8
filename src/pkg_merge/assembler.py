"""Group scanned pieces into packages."""

from __future__ import annotations

from typing import Iterable

import structlog

from pkg_merge.exceptions import OrphanPieceError
from pkg_merge.models import PackageGroup, PieceRecord

logger = structlog.get_logger(__name__)


def assemble(records: Iterable[PieceRecord]) -> dict[str, PackageGroup]:
    """Build one :class:`PackageGroup` per package id.

    Base pieces seed the groups first; every other piece is then appended
    in ascending index order.  A piece whose package has no base piece
    raises :class:`OrphanPieceError`.
    """
    records = list(records)
    groups: dict[str, PackageGroup] = {}

    for record in records:
        if not record.is_base:
            continue
        if record.package_id in groups:
            logger.warning(
                "assemble.duplicate_base",
                package_id=record.package_id,
                file=record.source_path.name,
                detail="duplicate base piece, keeping the last one",
            )
        groups[record.package_id] = PackageGroup(package_id=record.package_id, base_piece=record)

    others = sorted((r for r in records if not r.is_base), key=lambda r: r.piece_index)
    for record in others:
        group = groups.get(record.package_id)
        if group is None:
            raise OrphanPieceError(record.package_id, record.piece_index, record.source_path)
        group.other_pieces.append(record)

    for group in groups.values():
        logger.debug(
            "assemble.group",
            package_id=group.package_id,
            pieces=[p.piece_index for p in group.pieces],
        )
    return dict(sorted(groups.items()))
