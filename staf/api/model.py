"""
================================================================================
API Request / Response Models
================================================================================

Backend-neutral description of an HTTP exchange. Every client backend
consumes an ApiRequest and produces an ApiResponse, so tests can swap
transports without changing a single assertion.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar
from urllib.parse import quote

from ..errors import ApiClientError


T = TypeVar("T")


class Method(str, Enum):
    """Supported HTTP methods."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ObjectMappingType(str, Enum):
    """
    How request/response bodies are mapped to Python objects.

    JSON maps through the standard json module into builtin containers,
    PYDANTIC maps through pydantic type adapters.
    """
    JSON = "json"
    PYDANTIC = "pydantic"

    @classmethod
    def parse(cls, value: Any) -> "ObjectMappingType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown object mapping type: {value!r}. Allowed: {allowed}"
            ) from None


@dataclass
class ApiRequest(Generic[T]):
    """
    Description of a single API call.

    Attributes:
        method: HTTP method
        path: Endpoint path, may contain {name} placeholders
        base_url: Overrides the client base URL when set
        path_params: Values for path placeholders
        params: Query string parameters (None values are dropped)
        headers: Request headers, merged over client default headers
        body: Raw str/bytes or any object the serialization strategy handles
        form: Form fields sent as application/x-www-form-urlencoded
        response_body_type: Target type for the response body
        timeout: Per-request timeout override in seconds

    Example:
        >>> ApiRequest(
        ...     method=Method.GET,
        ...     path="/board/{row}/{column}",
        ...     path_params={"row": 1, "column": 3},
        ...     response_body_type=str,
        ... ).resolve_path()
        '/board/1/3'
    """
    method: Method
    path: str = ""
    base_url: Optional[str] = None
    path_params: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    form: Optional[Dict[str, Any]] = None
    response_body_type: Any = None
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, Method):
            self.method = Method(self.method.upper())
        if self.body is not None and self.form is not None:
            raise ApiClientError("ApiRequest cannot carry both a body and form fields")

    def resolve_path(self) -> str:
        """Fill and URL-quote path placeholders."""
        names = [
            name for _, name, _, _ in string.Formatter().parse(self.path) if name
        ]
        missing = [name for name in names if name not in self.path_params]
        if missing:
            raise ApiClientError(
                f"Missing path parameters {missing} for path '{self.path}'"
            )
        if not names:
            return self.path
        quoted = {
            name: quote(str(self.path_params[name]), safe="") for name in names
        }
        return self.path.format(**quoted)

    def query_params(self) -> Dict[str, Any]:
        """Query parameters without None values."""
        return {k: v for k, v in self.params.items() if v is not None}

    def form_fields(self) -> Optional[Dict[str, str]]:
        """Form fields without None values, stringified for url-encoding."""
        if self.form is None:
            return None
        return {k: str(v) for k, v in self.form.items() if v is not None}


@dataclass
class ApiResponse(Generic[T]):
    """
    Result of an executed ApiRequest.

    Attributes:
        status_code: HTTP status code
        headers: Response headers
        body: Body mapped to the requested type, or None
        raw_body: Undecoded response text
        elapsed_ms: Round-trip time of the final attempt
        request: The request that produced this response
    """
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[T] = None
    raw_body: str = ""
    elapsed_ms: float = 0.0
    request: Optional[ApiRequest] = None

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    @property
    def content_type(self) -> Optional[str]:
        return self.header("Content-Type")

    def json(self) -> Any:
        """Parse the raw body as JSON."""
        return json.loads(self.raw_body)


__all__ = [
    "Method",
    "ObjectMappingType",
    "ApiRequest",
    "ApiResponse",
]
