"""
================================================================================
In-Process API Stubs
================================================================================

A small routing layer that answers HTTP calls without a network. The same
stub can be plugged into both client backends:

    - httpx:    HttpxApiClient(config, transport=stub.httpx_transport())
    - requests: RequestsApiClient(config, adapters={"https://": stub.requests_adapter()})

`staf.clients.create_client(..., stub=stub)` does this wiring for you.

Usage:
    class PingStub(StubApi):
        def __init__(self):
            super().__init__()
            self.add_route("GET", "/ping", lambda request: StubResponse(200, {"pong": True}))

================================================================================
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple
from urllib.parse import parse_qsl, urlsplit

import httpx
import requests
from loguru import logger
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


@dataclass
class StubRequest:
    """Request as seen by a stub route handler."""
    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    path_params: Dict[str, str] = field(default_factory=dict)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parsed JSON body, None for an empty body."""
        if not self.body:
            return None
        return json.loads(self.text())

    def form(self) -> Dict[str, str]:
        """Parsed form-url-encoded body."""
        return dict(parse_qsl(self.text(), keep_blank_values=True))


@dataclass
class StubResponse:
    """
    Response produced by a stub route handler.

    `payload` is rendered as JSON; `text` (when set) is sent verbatim.
    """
    status_code: int = 200
    payload: Any = None
    text: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def render(self) -> Tuple[bytes, Dict[str, str]]:
        headers = dict(self.headers)
        if self.text is not None:
            headers.setdefault("Content-Type", "text/plain; charset=utf-8")
            return self.text.encode("utf-8"), headers
        if self.payload is None:
            return b"", headers
        headers.setdefault("Content-Type", "application/json")
        return json.dumps(self.payload).encode("utf-8"), headers


Handler = Callable[[StubRequest], StubResponse]


def _compile(pattern: str) -> Pattern:
    """Turn '/board/{row}/{column}' into an anchored regex with named groups."""
    regex = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", pattern.rstrip("/"))
    return re.compile(f"^{regex}/?$")


class StubApi:
    """
    Base class for in-process API stubs.

    Attributes:
        base_path: Path prefix of the stubbed service's base URL (e.g. "/ds-api")
        received: Every request handled so far, oldest first
    """

    base_path: str = ""

    def __init__(self) -> None:
        self._routes: List[Tuple[str, Pattern, Handler]] = []
        self.received: List[StubRequest] = []

    def add_route(self, method: str, pattern: str, handler: Handler) -> None:
        self._routes.append((method.upper(), _compile(pattern), handler))

    def handle(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b"",
    ) -> StubResponse:
        """Dispatch one HTTP call to the matching route."""
        parsed = urlsplit(url)
        path = parsed.path
        if self.base_path and path.startswith(self.base_path):
            path = path[len(self.base_path):]
        path = path or "/"

        request = StubRequest(
            method=method.upper(),
            path=path,
            query=dict(parse_qsl(parsed.query, keep_blank_values=True)),
            headers=dict(headers or {}),
            body=body or b"",
        )
        self.received.append(request)

        path_matched = False
        for route_method, regex, handler in self._routes:
            match = regex.match(path)
            if not match:
                continue
            path_matched = True
            if route_method != request.method:
                continue
            request.path_params = match.groupdict()
            response = handler(request)
            logger.debug(f"[stub] {request.method} {path} -> {response.status_code}")
            return response

        if path_matched:
            return StubResponse(405, {"message": f"Method {request.method} not allowed"})
        return StubResponse(404, {"message": f"No route for {request.method} {path}"})

    def reset_received(self) -> None:
        self.received.clear()

    # ------------------------------------------------------------------
    # Backend wiring
    # ------------------------------------------------------------------

    def httpx_transport(self) -> httpx.MockTransport:
        """httpx transport answering from this stub."""

        def handler(request: httpx.Request) -> httpx.Response:
            response = self.handle(
                request.method,
                str(request.url),
                dict(request.headers),
                request.read(),
            )
            content, headers = response.render()
            return httpx.Response(response.status_code, headers=headers, content=content)

        return httpx.MockTransport(handler)

    def requests_adapter(self) -> BaseAdapter:
        """requests transport adapter answering from this stub."""
        return StubAdapter(self)


class StubAdapter(BaseAdapter):
    """requests adapter delegating to a StubApi."""

    def __init__(self, stub: StubApi) -> None:
        super().__init__()
        self.stub = stub

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body or b""
        if isinstance(body, str):
            body = body.encode("utf-8")

        stub_response = self.stub.handle(request.method, request.url, dict(request.headers), body)
        content, headers = stub_response.render()

        response = requests.Response()
        response.status_code = stub_response.status_code
        response.headers = CaseInsensitiveDict(headers)
        response._content = content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        response.connection = self
        try:
            response.reason = HTTPStatus(stub_response.status_code).phrase
        except ValueError:
            response.reason = ""
        return response

    def close(self) -> None:
        pass


__all__ = [
    "StubApi",
    "StubAdapter",
    "StubRequest",
    "StubResponse",
]
