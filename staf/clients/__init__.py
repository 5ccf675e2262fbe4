"""
================================================================================
STAF Client Backends
================================================================================

    - HttpxApiClient: httpx.Client backend
    - RequestsApiClient: requests.Session backend
    - ApiService + get/post/put/patch/delete: declarative services on top of
      any backend

Use `create_client` to pick a backend by name and optionally wire it to an
in-process stub.

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from ..api.client import BaseApiClient
from ..api.config import ApiClientConfig
from ..testing.stub import StubApi
from .declarative import ApiService, Endpoint, delete, endpoint, get, patch, post, put
from .httpx_client import HttpxApiClient
from .requests_client import RequestsApiClient


class ClientType(str, Enum):
    """Available client backends."""
    HTTPX = "httpx"
    REQUESTS = "requests"


def create_client(
    client_type: Any,
    config: Optional[ApiClientConfig] = None,
    stub: Optional[StubApi] = None,
) -> BaseApiClient:
    """
    Create a client backend.

    Args:
        client_type: ClientType or its string value
        config: Client configuration (built from ConfigLoader if None)
        stub: Serve every call from this in-process stub instead of the network

    Returns:
        An unopened client; use it as a context manager.
    """
    if not isinstance(client_type, ClientType):
        try:
            client_type = ClientType(str(client_type).lower())
        except ValueError:
            allowed = ", ".join(t.value for t in ClientType)
            raise ValueError(
                f"Unknown client type: {client_type!r}. Allowed: {allowed}"
            ) from None

    if client_type is ClientType.HTTPX:
        transport = stub.httpx_transport() if stub is not None else None
        return HttpxApiClient(config, transport=transport)

    adapters = None
    if stub is not None:
        adapter = stub.requests_adapter()
        adapters = {"http://": adapter, "https://": adapter}
    return RequestsApiClient(config, adapters=adapters)


__all__ = [
    "ApiService",
    "ClientType",
    "Endpoint",
    "HttpxApiClient",
    "RequestsApiClient",
    "create_client",
    "delete",
    "endpoint",
    "get",
    "patch",
    "post",
    "put",
]
