"""
User Mapper
===========

Transforms raw database rows into canonical users.
"""

from typing import Iterable, List

from user_sync.sync.application.dto import CanonicalUser
from user_sync.sync.domain import RawUserRecord


def map_user(row: RawUserRecord) -> CanonicalUser:
    """Copy id/name/email and rename created_at; values are not converted."""
    return CanonicalUser(
        id=row.get("id"),
        name=row.get("name"),
        email=row.get("email"),
        created_at=row.get("created_at"),
    )


def map_users(rows: Iterable[RawUserRecord]) -> List[CanonicalUser]:
    """
    Map a batch of rows, preserving their order.

    Args:
        rows: Rows as returned by the repository

    Returns:
        List of CanonicalUser, same length and order as rows
    """
    return [map_user(row) for row in rows]
