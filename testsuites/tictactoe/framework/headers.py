"""Request header helpers for the tic-tac-toe API."""

from __future__ import annotations

from typing import Dict

from .service_config import ServiceConfig


def default_headers(service: ServiceConfig) -> Dict[str, str]:
    """JSON content type, plus the api-key header when a key is configured."""
    headers = {"Content-Type": "application/json"}
    if service.api_key:
        headers["api-key"] = service.api_key
    return headers


def bearer_auth_headers(service: ServiceConfig) -> Dict[str, str]:
    """Default headers plus a Bearer Authorization header when a token is configured."""
    headers = default_headers(service)
    if service.bearer_token:
        headers["Authorization"] = f"Bearer {service.bearer_token}"
    return headers
