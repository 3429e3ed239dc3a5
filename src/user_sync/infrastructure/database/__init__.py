"""
Database Infrastructure
=======================

Builds the engine used for a single sync run.

Uses SQLAlchemy 2.0 with aiomysql for async MySQL access. The engine is
created without a pool: one run opens exactly one connection and nothing is
kept around afterwards.
"""

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from user_sync.config import DatabaseConfig

MYSQL_DRIVER = "mysql+aiomysql"


def build_database_url(config: DatabaseConfig) -> URL:
    """
    Build the SQLAlchemy URL for the users database.

    Empty host or database name are left out so the driver defaults apply.
    """
    return URL.create(
        MYSQL_DRIVER,
        username=config.user,
        password=config.password,
        host=config.host or None,
        port=config.port,
        database=config.database or None,
    )


def create_engine_for(config: DatabaseConfig) -> AsyncEngine:
    """
    Create an unpooled async engine for one sync run.

    The caller owns the engine and must dispose of it.
    """
    return create_async_engine(build_database_url(config), poolclass=NullPool)
