"""
================================================================================
requests Client Backend
================================================================================

BaseApiClient implementation on top of `requests.Session`.

Custom transport adapters can be mounted on the session; `staf.testing`
stubs use this to serve responses in-process.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from requests.adapters import BaseAdapter

from ..api.client import BaseApiClient, RawResponse
from ..api.config import ApiClientConfig


class RequestsApiClient(BaseApiClient):
    """
    requests-based client backend.

    Usage:
        >>> with RequestsApiClient(config) as client:
        ...     response = client.put(
        ...         "/board/{row}/{column}",
        ...         path_params={"row": 1, "column": 1},
        ...         body=MarkRequest(mark="X"),
        ...         response_body_type=BoardStatus,
        ...     )
    """

    name = "requests"
    transient_errors = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)

    def __init__(
        self,
        config: Optional[ApiClientConfig] = None,
        session: Optional[requests.Session] = None,
        adapters: Optional[Dict[str, BaseAdapter]] = None,
    ) -> None:
        super().__init__(config)
        self._external_session = session
        self._adapters = dict(adapters or {})
        self.session: Optional[requests.Session] = None

    def _open_session(self) -> None:
        session = self._external_session or requests.Session()
        session.verify = self.config.verify_ssl
        for prefix, adapter in self._adapters.items():
            session.mount(prefix, adapter)
        self.session = session

    def _close_session(self) -> None:
        if self.session and self._external_session is None:
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
            data=form if form is not None else content,
            timeout=timeout,
            allow_redirects=self.config.follow_redirects,
        )
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            text=response.text,
        )


__all__ = ["RequestsApiClient"]
