"""
================================================================================
httpx Client Backend
================================================================================

BaseApiClient implementation on top of `httpx.Client`.

An httpx transport can be injected (e.g. `httpx.MockTransport` or a stub
from `staf.testing`) to run suites without network access.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..api.client import BaseApiClient, RawResponse
from ..api.config import ApiClientConfig


class HttpxApiClient(BaseApiClient):
    """
    httpx-based client backend.

    Usage:
        >>> config = ApiClientConfig(base_url="https://learn.openapis.org")
        >>> with HttpxApiClient(config) as client:
        ...     response = client.get("/board", response_body_type=dict)
    """

    name = "httpx"
    transient_errors = (httpx.TimeoutException, httpx.NetworkError)

    def __init__(
        self,
        config: Optional[ApiClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(config)
        self._transport = transport
        self.session: Optional[httpx.Client] = None

    def _open_session(self) -> None:
        self.session = httpx.Client(
            timeout=httpx.Timeout(self.config.timeout),
            verify=self.config.verify_ssl,
            follow_redirects=self.config.follow_redirects,
            transport=self._transport,
        )

    def _close_session(self) -> None:
        if self.session:
            self.session.close()
            self.session = None

    def _execute(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        params: Dict[str, Any],
        content: Optional[bytes],
        form: Optional[Dict[str, str]],
        timeout: float,
    ) -> RawResponse:
        response = self.session.request(
            method,
            url,
            headers=headers,
            params=params or None,
            content=content,
            data=form,
            timeout=timeout,
        )
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            text=response.text,
        )


__all__ = ["HttpxApiClient"]
