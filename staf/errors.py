"""
================================================================================
STAF Exceptions
================================================================================

Exception hierarchy shared by every STAF layer.

    StafError
    ├── ConfigurationError
    │   └── SuiteDefinitionError
    ├── ApiClientError
    │   ├── ApiConnectionError
    │   └── RateLimitExceeded
    └── SerializationError
        └── ResponseMappingError

Non-2xx HTTP responses are never raised as exceptions; they are returned to
the caller for verification.

================================================================================
"""

from __future__ import annotations


class StafError(Exception):
    """Base exception for all framework errors."""
    pass


class ConfigurationError(StafError):
    """Raised when configuration loading or access fails."""
    pass


class SuiteDefinitionError(ConfigurationError):
    """Raised when a suite definition file is missing or malformed."""
    pass


class ApiClientError(StafError):
    """Base exception for API client errors."""
    pass


class ApiConnectionError(ApiClientError):
    """Raised when network retries are exhausted."""
    pass


class RateLimitExceeded(ApiClientError):
    """Raised when rate limit is exceeded and all retries are exhausted."""
    pass


class SerializationError(StafError):
    """Raised when a body cannot be serialized or deserialized."""
    pass


class ResponseMappingError(SerializationError):
    """Raised when a successful response body cannot be mapped to the requested type."""

    def __init__(self, message: str, status_code: int, raw_body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.raw_body = raw_body


__all__ = [
    "StafError",
    "ConfigurationError",
    "SuiteDefinitionError",
    "ApiClientError",
    "ApiConnectionError",
    "RateLimitExceeded",
    "SerializationError",
    "ResponseMappingError",
]
