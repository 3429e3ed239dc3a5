"""
Core Module
============

Shared core abstractions used across the sync pipeline.

This module contains framework-agnostic code that defines the error
taxonomy of the system.
"""

from user_sync.core.exceptions import (
    ApplicationException,
    ConfigurationException,
    RepositoryException,
    DatabaseConnectionException,
    QueryException,
    ExternalServiceException,
    ApiTimeoutException,
    ApiException,
    ApiDeliveryException,
)

__all__ = [
    "ApplicationException",
    "ConfigurationException",
    "RepositoryException",
    "DatabaseConnectionException",
    "QueryException",
    "ExternalServiceException",
    "ApiTimeoutException",
    "ApiException",
    "ApiDeliveryException",
]
