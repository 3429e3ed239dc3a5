"""
Core Exceptions
================

Custom exceptions for the user sync pipeline.

Every failure a stage can raise derives from ApplicationException, so the
orchestrator can turn it into a failed run result at a single boundary.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(ApplicationException):
    """Required configuration value missing or malformed."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class DatabaseConnectionException(RepositoryException):
    """Exception when the database connection cannot be opened."""


class QueryException(RepositoryException):
    """Exception when the user query fails to execute."""


class ExternalServiceException(ApplicationException):
    """Base exception for failures talking to the third-party API."""


class ApiTimeoutException(ExternalServiceException):
    """The API exchange did not settle within the deadline."""

    def __init__(self, timeout_seconds: float, details: Optional[dict] = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"API request timed out after {round(timeout_seconds * 1000)} ms",
            details or {"timeout_seconds": timeout_seconds}
        )


class ApiException(ExternalServiceException):
    """The API answered with a non-success status."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        details: Optional[dict] = None
    ):
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(
            f"API Error: {status_code} {status_text}",
            details or {"status_code": status_code, "status_text": status_text}
        )


class ApiDeliveryException(ExternalServiceException):
    """The request never produced a response (DNS, refused connection, ...)."""
