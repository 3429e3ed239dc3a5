"""
Sync Application Services
=========================

The sync job orchestrates one run of the pipeline:

    resolve config -> fetch users -> map -> publish

Following Dependency Inversion, the job depends on the repository and
publisher interfaces below. Concrete adapters are supplied as factories by
the entry point, and are only built once configuration has resolved.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from user_sync.config import (
    ApiConfig,
    DatabaseConfig,
    Settings,
    resolve_api_config,
    resolve_database_config,
)
from user_sync.core import ApplicationException
from user_sync.shared.infrastructure.logging import get_context_logger, log_latency
from user_sync.sync.application.dto import CanonicalUser
from user_sync.sync.application.mapper import map_users
from user_sync.sync.domain import RawUserRecord, SyncResult, SyncStage

SUCCESS_MESSAGE = "Data successfully sent to third-party API."


# ========== Interfaces (Dependency Inversion) ==========

class IUserRepository(ABC):
    """Interface for reading the users table."""

    @abstractmethod
    async def fetch_users(self) -> List[RawUserRecord]:
        """Return every user row, fully materialized."""


class IUserPublisher(ABC):
    """Interface for delivering a user batch."""

    @abstractmethod
    async def send(self, users: Sequence[CanonicalUser]) -> None:
        """Deliver the batch; raise on any failure."""


RepositoryFactory = Callable[[DatabaseConfig], IUserRepository]
PublisherFactory = Callable[[ApiConfig], IUserPublisher]


# ========== Application Services ==========

class SyncJob:
    """
    One-shot user sync.

    Stages run strictly in sequence. The first ApplicationException aborts
    the remaining stages and is returned inside a FAILED SyncResult; the job
    never raises for an expected failure.
    """

    def __init__(
        self,
        settings: Settings,
        repository_factory: RepositoryFactory,
        publisher_factory: PublisherFactory,
        echo: Callable[[str], None] = print,
    ):
        self._settings = settings
        self._repository_factory = repository_factory
        self._publisher_factory = publisher_factory
        self._echo = echo
        self._stage = SyncStage.IDLE

    @property
    def stage(self) -> SyncStage:
        """Current stage of the run."""
        return self._stage

    async def run(self) -> SyncResult:
        """
        Execute the pipeline once.

        Returns:
            SyncResult: DELIVERED with the record count, or FAILED with the
            error and the last stage reached
        """
        run_id = str(uuid.uuid4())
        logger = get_context_logger(__name__, run_id)
        records = 0
        self._stage = SyncStage.IDLE

        try:
            db_config = resolve_database_config(self._settings)
            api_config = resolve_api_config(self._settings)
            self._stage = SyncStage.CONFIG_RESOLVED
            logger.debug(
                "Configuration resolved",
                extra={"db_host": db_config.host, "db_port": db_config.port, "api_url": api_config.url}
            )

            repository = self._repository_factory(db_config)
            with log_latency(logger, "fetch_users"):
                rows = await repository.fetch_users()
            records = len(rows)
            self._stage = SyncStage.USERS_FETCHED
            self._echo(f"Retrieved {records} user records.")

            users = map_users(rows)
            self._stage = SyncStage.USERS_MAPPED

            publisher = self._publisher_factory(api_config)
            with log_latency(logger, "send_users", records=records):
                await publisher.send(users)
            self._stage = SyncStage.DELIVERED

        except ApplicationException as e:
            failed_after = self._stage
            self._stage = SyncStage.FAILED
            logger.error(
                "Sync failed",
                extra={
                    "error": e.message,
                    "error_kind": type(e).__name__,
                    "failed_after": failed_after.value,
                }
            )
            return SyncResult.failed(run_id, failed_after, e, records)

        self._echo(SUCCESS_MESSAGE)
        logger.info("Sync delivered", extra={"records": records})
        return SyncResult.delivered(run_id, records)
