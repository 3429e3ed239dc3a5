"""
User Sync - Entry Point
=======================

One-shot synchronization of the users table to a third-party API.

STARTUP:
1. Snapshot settings from the environment
2. Setup structured logging
3. Wire the SQLAlchemy repository and httpx publisher into a SyncJob

RUN:
4. Execute the job once and map its result to the process exit code
   (0 delivered, 1 failed)
"""

import asyncio
import sys

from user_sync.config import Settings, load_settings
from user_sync.core import ApplicationException
from user_sync.shared.infrastructure.logging import get_logger, setup_logging
from user_sync.sync.application import SyncJob
from user_sync.sync.domain import SyncResult
from user_sync.sync.infrastructure import ApiPublisher, SQLAlchemyUserRepository

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_sync_job(settings: Settings) -> SyncJob:
    """Wire the concrete adapters into a SyncJob."""
    return SyncJob(
        settings,
        repository_factory=SQLAlchemyUserRepository,
        publisher_factory=ApiPublisher,
    )


def report_failure(message: str) -> None:
    print(f"Fatal error: {message}", file=sys.stderr)


def exit_code_for(result: SyncResult) -> int:
    return EXIT_SUCCESS if result.succeeded else EXIT_FAILURE


def main() -> int:
    """
    Run one sync and return the process exit code.

    This is the only place that decides the exit code and writes the
    failure diagnostic.
    """
    try:
        settings = load_settings()
    except ApplicationException as e:
        report_failure(e.message)
        return EXIT_FAILURE

    setup_logging(settings.log_level)

    try:
        result = asyncio.run(build_sync_job(settings).run())
    except Exception as e:
        logger.exception("Unexpected error during sync")
        report_failure(str(e))
        return EXIT_FAILURE

    if not result.succeeded:
        report_failure(result.message)
    return exit_code_for(result)


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
