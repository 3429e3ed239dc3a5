"""
Sync Application Layer
======================

Application layer for the user sync module.

Contains:
- DTOs: the canonical user contract and its wire envelope
- Mapper: row to canonical user transformation
- Services: the SyncJob orchestrator and the interfaces it depends on

This layer depends on the domain layer and on interfaces,
but not on concrete infrastructure implementations.
"""

from user_sync.sync.application.dto import CanonicalUser, UserSyncPayload
from user_sync.sync.application.mapper import map_user, map_users
from user_sync.sync.application.services import (
    SUCCESS_MESSAGE,
    IUserPublisher,
    IUserRepository,
    PublisherFactory,
    RepositoryFactory,
    SyncJob,
)

__all__ = [
    # DTOs
    "CanonicalUser",
    "UserSyncPayload",
    # Mapper
    "map_user",
    "map_users",
    # Services
    "SyncJob",
    "SUCCESS_MESSAGE",
    # Interfaces
    "IUserRepository",
    "IUserPublisher",
    "RepositoryFactory",
    "PublisherFactory",
]
