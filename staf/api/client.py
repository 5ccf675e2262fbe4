"""
================================================================================
Base API Client
================================================================================

Transport-independent client contract. Backends (httpx, requests) only
implement session handling and a single raw `_execute` call; everything a
test relies on lives here:

    - URL building and path parameter resolution
    - Header merging and body serialization
    - Automatic retry with exponential backoff for transient failures
    - Rate limit (429) handling with Retry-After parsing
    - Response body mapping through the configured serialization strategy
    - Loguru logging and Allure exchange attachments

Usage:
    >>> with HttpxApiClient(config) as client:
    ...     response = client.send_request(
    ...         ApiRequest(method=Method.GET, path="/board", response_body_type=dict)
    ...     )
    ...     response.status_code
    200

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type
from urllib.parse import urlencode

from loguru import logger

from ..errors import (
    ApiClientError,
    ApiConnectionError,
    RateLimitExceeded,
    ResponseMappingError,
    SerializationError,
)
from .config import ApiClientConfig
from .model import ApiRequest, ApiResponse, Method
from .reporting import attach_exchange, redact_headers
from .serialization import SerializationStrategy, strategy_for


JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class RawResponse:
    """Backend response reduced to what the client layer needs."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    text: str = ""


def _has_header(headers: Mapping[str, Any], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


class BaseApiClient(ABC):
    """
    Base class for API client backends.

    Subclasses must implement:
        - _open_session: create the underlying HTTP session
        - _close_session: release it
        - _execute: perform one HTTP call and return a RawResponse

    and declare the exception types treated as transient network failures
    in `transient_errors`.
    """

    name: str = "base"
    transient_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, config: Optional[ApiClientConfig] = None) -> None:
        """
        Initialize client with configuration.

        Args:
            config: Client configuration. Built from ConfigLoader if None.
        """
        self.config = config or ApiClientConfig.from_loader()
        self.serialization_strategy: SerializationStrategy = strategy_for(
            self.config.object_mapping_type
        )
        self._opened = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> "BaseApiClient":
        """Enter context manager - initialize HTTP session."""
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - close HTTP session."""
        self.close()

    def open(self) -> "BaseApiClient":
        if not self._opened:
            self._open_session()
            self._opened = True
            logger.debug(f"{self.name} client opened (base_url={self.config.base_url!r})")
        return self

    def close(self) -> None:
        if self._opened:
            self._close_session()
            self._opened = False
            logger.debug(f"{self.name} client closed")

    @property
    def is_open(self) -> bool:
        return self._opened

    # ------------------------------------------------------------------
    # Backend contract
    # ------------------------------------------------------------------

    @abstractmethod
    def _open_session(self) -> None:
        """Create the underlying HTTP session."""

    @abstractmethod
    def _close_session(self) -> None:
        """Release the underlying HTTP session."""

    @abstractmethod
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
        """Perform a single HTTP call."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def send_request(self, request: ApiRequest) -> ApiResponse:
        """
        Execute an ApiRequest with automatic retry and Allure logging.

        Args:
            request: Request description

        Returns:
            ApiResponse with the body mapped to request.response_body_type

        Raises:
            ApiClientError: When the client is not opened or the URL cannot be built
            ApiConnectionError: When network retries are exhausted
            RateLimitExceeded: When rate limit retries are exhausted
            ResponseMappingError: When a 2xx body cannot be mapped
        """
        if not self._opened:
            raise ApiClientError(
                f"{type(self).__name__} must be opened before sending requests. "
                f"Use 'with client:' or call client.open()"
            )

        method = request.method.value
        url = self.build_url(request)
        headers = {**self.config.default_headers, **request.headers}
        content = self._encode_body(request, headers)
        form = request.form_fields()
        params = request.query_params()
        timeout = request.timeout or self.config.timeout
        retry_count = self.config.retry_count

        for attempt in range(retry_count):
            try:
                started = time.perf_counter()
                raw = self._execute(method, url, headers, params, content, form, timeout)
                elapsed_ms = (time.perf_counter() - started) * 1000
            except self.transient_errors as e:
                if attempt < retry_count - 1:
                    wait_time = self._calculate_backoff(attempt)
                    logger.warning(
                        f"Network error: {e}. Retrying in {wait_time}s. "
                        f"Attempt {attempt + 1}/{retry_count}"
                    )
                    time.sleep(wait_time)
                    continue
                logger.error(f"All retries exhausted for {method} {url}. Last error: {e}")
                raise ApiConnectionError(
                    f"{method} {url} failed after {retry_count} attempts: {e}"
                ) from e

            if raw.status_code == 429:
                retry_after = self._parse_retry_after(raw.headers)
                logger.warning(
                    f"Rate limited (429) on {method} {url}. "
                    f"Attempt {attempt + 1}/{retry_count}"
                )
                if attempt < retry_count - 1:
                    logger.info(f"Waiting {retry_after}s before retry")
                    time.sleep(retry_after)
                    continue
                break

            logger.info(f"{method} {url} -> {raw.status_code} ({elapsed_ms:.0f} ms)")
            logger.debug(f"Request headers: {redact_headers(headers)}")

            if self.config.report_to_allure:
                attach_exchange(
                    method=method,
                    url=url,
                    headers=headers,
                    body=self._body_text(content, form),
                    params=params,
                    status_code=raw.status_code,
                    response_text=raw.text,
                    elapsed_ms=elapsed_ms,
                )

            return ApiResponse(
                status_code=raw.status_code,
                headers=dict(raw.headers),
                body=self._map_body(request, raw),
                raw_body=raw.text,
                elapsed_ms=elapsed_ms,
                request=request,
            )

        raise RateLimitExceeded(
            f"Rate limit exceeded after {retry_count} retries: {method} {url}"
        )

    def request(self, method: Any, path: str, **kwargs: Any) -> ApiResponse:
        """Build and send an ApiRequest from keyword arguments."""
        return self.send_request(ApiRequest(method=method, path=path, **kwargs))

    def get(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute GET request."""
        return self.request(Method.GET, path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute POST request."""
        return self.request(Method.POST, path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute PUT request."""
        return self.request(Method.PUT, path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute PATCH request."""
        return self.request(Method.PATCH, path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute DELETE request."""
        return self.request(Method.DELETE, path, **kwargs)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def build_url(self, request: ApiRequest) -> str:
        """Join the effective base URL and the resolved request path."""
        path = request.resolve_path()
        if path.startswith(("http://", "https://")):
            return path

        base_url = request.base_url or self.config.base_url
        if not base_url:
            raise ApiClientError(
                f"No base URL configured for request path '{request.path}'"
            )
        if not path:
            return base_url
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    def _encode_body(self, request: ApiRequest, headers: Dict[str, str]) -> Optional[bytes]:
        """
        Encode the request body. Objects go through the serialization strategy
        and get a JSON Content-Type unless one is already set.
        """
        body = request.body
        if body is None:
            return None
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode("utf-8")

        encoded = self.serialization_strategy.serialize(body).encode("utf-8")
        if not _has_header(headers, "Content-Type"):
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return encoded

    def _map_body(self, request: ApiRequest, raw: RawResponse) -> Any:
        """
        Map the response body to the requested type.

        Mapping failures raise for successful responses; for error responses
        the body is left as None and the raw text stays available.
        """
        target = request.response_body_type
        if target is None:
            return None
        if target is bytes:
            return raw.content
        if target is str:
            return raw.text
        if not raw.text.strip():
            return None

        try:
            return self.serialization_strategy.deserialize(raw.text, target)
        except SerializationError as e:
            if 200 <= raw.status_code < 300:
                raise ResponseMappingError(
                    f"Cannot map {raw.status_code} response body to {target}: {e}",
                    status_code=raw.status_code,
                    raw_body=raw.text,
                ) from e
            logger.warning(
                f"Response body of {raw.status_code} is not a {target}; "
                f"keeping raw body only"
            )
            return None

    @staticmethod
    def _body_text(content: Optional[bytes], form: Optional[Dict[str, str]]) -> Optional[str]:
        if form is not None:
            return urlencode(form)
        if content is None:
            return None
        return content.decode("utf-8", errors="replace")

    def _parse_retry_after(self, headers: Mapping[str, str]) -> float:
        """
        Parse Retry-After header from 429 response.

        Returns:
            Wait time in seconds (capped at retry_max_wait)
        """
        retry_after = ""
        for key, value in headers.items():
            if key.lower() == "retry-after":
                retry_after = value
                break

        try:
            wait_time = float(retry_after)
        except ValueError:
            # HTTP-date and missing values fall back to the base backoff
            wait_time = self.config.retry_backoff

        return min(max(wait_time, 0.0), self.config.retry_max_wait)

    def _calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff wait time.

        Formula: base * (2 ^ attempt), capped at max_wait
        """
        wait_time = self.config.retry_backoff * (2 ** attempt)
        return min(wait_time, self.config.retry_max_wait)


__all__ = [
    "BaseApiClient",
    "RawResponse",
    "JSON_CONTENT_TYPE",
    "FORM_CONTENT_TYPE",
]
