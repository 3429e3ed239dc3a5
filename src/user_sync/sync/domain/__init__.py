"""
Sync Domain Layer
=================

Domain layer for the user sync module.

Contains:
- SyncStage: the stages a run passes through
- SyncResult: the terminal outcome of a run
- RawUserRecord: the row shape read from the database

This layer has no dependencies on infrastructure - pure Python.
"""

from user_sync.sync.domain.entities import RawUserRecord, SyncResult, SyncStage

__all__ = [
    "RawUserRecord",
    "SyncResult",
    "SyncStage",
]
