"""
================================================================================
STAF Core API Layer
================================================================================

Backend-neutral building blocks shared by every client implementation.

Modules:
    - model: ApiRequest, ApiResponse, Method, ObjectMappingType
    - serialization: JSON and pydantic serialization strategies
    - config: Programmatic client configuration
    - client: BaseApiClient with retry, rate limiting and Allure logging
    - reporting: Allure attachment and redaction helpers

================================================================================
"""

from ..errors import (
    ApiClientError,
    ApiConnectionError,
    RateLimitExceeded,
    ResponseMappingError,
    SerializationError,
)
from .client import BaseApiClient, RawResponse
from .config import ApiClientConfig
from .model import ApiRequest, ApiResponse, Method, ObjectMappingType
from .serialization import (
    JsonSerializationStrategy,
    PydanticSerializationStrategy,
    SerializationStrategy,
    strategy_for,
    to_jsonable,
)

__all__ = [
    "ApiClientConfig",
    "ApiClientError",
    "ApiConnectionError",
    "ApiRequest",
    "ApiResponse",
    "BaseApiClient",
    "JsonSerializationStrategy",
    "Method",
    "ObjectMappingType",
    "PydanticSerializationStrategy",
    "RateLimitExceeded",
    "RawResponse",
    "ResponseMappingError",
    "SerializationError",
    "SerializationStrategy",
    "strategy_for",
    "to_jsonable",
]
