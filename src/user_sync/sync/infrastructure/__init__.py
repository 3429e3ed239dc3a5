"""
Sync Infrastructure Layer
=========================

Concrete adapters for the application layer interfaces:
- SQLAlchemyUserRepository: reads the users table
- ApiPublisher: posts the batch to the third-party API
"""

from user_sync.sync.infrastructure.external import ApiPublisher
from user_sync.sync.infrastructure.repositories import SQLAlchemyUserRepository

__all__ = [
    "ApiPublisher",
    "SQLAlchemyUserRepository",
]
