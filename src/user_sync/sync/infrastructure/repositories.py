"""
Sync Infrastructure Repositories
================================

SQLAlchemy implementation of the user repository.
"""

from typing import Callable, List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from user_sync.config import USERS_QUERY, DatabaseConfig
from user_sync.core import DatabaseConnectionException, QueryException
from user_sync.infrastructure.database import create_engine_for
from user_sync.shared.infrastructure.logging import get_logger
from user_sync.sync.application import IUserRepository
from user_sync.sync.domain import RawUserRecord

logger = get_logger(__name__)


class SQLAlchemyUserRepository(IUserRepository):
    """
    Reads the users table over a single connection.

    Each fetch creates its own engine, opens one connection, and releases
    both before returning, whether the query succeeded or not.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        engine_factory: Callable[[DatabaseConfig], AsyncEngine] = create_engine_for
    ):
        self._config = config
        self._engine_factory = engine_factory

    async def fetch_users(self) -> List[RawUserRecord]:
        """
        Fetch every user row.

        Returns:
            List of row dicts keyed by column name, in result order

        Raises:
            DatabaseConnectionException: If the engine or connection cannot be opened
            QueryException: If the query fails
        """
        try:
            engine = self._engine_factory(self._config)
        except (SQLAlchemyError, ImportError) as e:
            raise DatabaseConnectionException(
                f"Could not create database engine: {e}",
                {"host": self._config.host, "port": self._config.port}
            ) from e

        try:
            try:
                connection = await engine.connect()
            except (SQLAlchemyError, OSError) as e:
                raise DatabaseConnectionException(
                    f"Could not connect to database: {e}",
                    {"host": self._config.host, "port": self._config.port}
                ) from e

            try:
                result = await connection.execute(text(USERS_QUERY))
                rows = [dict(row) for row in result.mappings().all()]
            except SQLAlchemyError as e:
                raise QueryException(f"User query failed: {e}") from e
            finally:
                await connection.close()
        finally:
            await engine.dispose()

        logger.debug("Fetched user rows", extra={"records": len(rows)})
        return rows
