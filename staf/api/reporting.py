"""
================================================================================
Allure Reporting Helpers
================================================================================

Attachment helpers used by the client layer and the verification service.

Features:
    - Request/response exchange attachment with cURL reproduction command
    - Sensitive header and body field masking
    - Response truncation for large payloads

================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import allure
from allure_commons.types import AttachmentType


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

MASK = "***MASKED***"

SENSITIVE_HEADERS = {
    "authorization",
    "api-key",
    "x-api-key",
    "cookie",
    "set-cookie",
    "proxy-authorization",
}

SENSITIVE_BODY_TOKENS = (
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "authorization",
)


def attach_json(data: Any, name: str = "Data") -> None:
    """Attach JSON data to the Allure report."""
    allure.attach(
        json.dumps(data, ensure_ascii=False, indent=2, default=str),
        name=name,
        attachment_type=AttachmentType.JSON,
    )


def attach_text(text: str, name: str = "Text") -> None:
    """Attach plain text to the Allure report."""
    allure.attach(text, name=name, attachment_type=AttachmentType.TEXT)


def redact_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Mask sensitive header values before logging.
    """
    masked = {}
    for key, value in (headers or {}).items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = MASK
        else:
            masked[key] = value
    return masked


def redact_body(payload: Any) -> Any:
    """
    Recursively mask sensitive fields in request bodies.
    """
    if isinstance(payload, dict):
        redacted = {}
        for key, value in payload.items():
            if any(token in str(key).lower() for token in SENSITIVE_BODY_TOKENS):
                redacted[key] = MASK
            else:
                redacted[key] = redact_body(value)
        return redacted
    if isinstance(payload, list):
        return [redact_body(item) for item in payload]
    return payload


def truncate(content: str, limit: int = MAX_RESPONSE_LENGTH) -> str:
    if len(content) <= limit:
        return content
    return (
        f"{content[:limit]}\n\n"
        f"... [Truncated, full length: {len(content)} chars] ..."
    )


def build_curl(
    method: str,
    url: str,
    headers: Optional[Mapping[str, Any]] = None,
    body: Optional[str] = None,
) -> str:
    """
    Build a copy-paste ready cURL command for request reproduction.

    Headers are expected to be redacted already.
    """
    parts = [f"curl -X {method}"]

    for key, value in (headers or {}).items():
        parts.append(f"-H '{key}: {value}'")

    if body:
        escaped = body.replace("'", "'\\''")
        parts.append(f"-d '{escaped}'")

    parts.append(f"'{url}'")

    return " \\\n  ".join(parts)


def _pretty(text: str) -> str:
    try:
        return json.dumps(json.loads(text), ensure_ascii=False, indent=2)
    except (json.JSONDecodeError, ValueError):
        return text


def _redacted_body_text(body: Optional[str]) -> Optional[str]:
    """Redact a JSON body; non-JSON bodies are kept as-is."""
    if not body:
        return body
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, ValueError):
        return body
    return json.dumps(redact_body(parsed), ensure_ascii=False)


def attach_exchange(
    method: str,
    url: str,
    headers: Mapping[str, Any],
    body: Optional[str],
    params: Optional[Mapping[str, Any]],
    status_code: int,
    response_text: str,
    elapsed_ms: Optional[float] = None,
) -> None:
    """
    Attach a complete request/response exchange as one Allure step.

    Attaches:
        - Request URL
        - Request headers (masked)
        - Request body (masked)
        - Query parameters
        - cURL command
        - Response status
        - Response body (truncated)
    """
    status_emoji = "✅" if status_code < 400 else "❌"
    title = f"{status_emoji} {method} {url} → {status_code}"
    if elapsed_ms is not None:
        title = f"{title} ({elapsed_ms:.0f} ms)"

    safe_headers = redact_headers(headers)
    safe_body = _redacted_body_text(body)

    with allure.step(title):
        attach_text(url, name="🔗 Request URL")

        if safe_headers:
            attach_json(safe_headers, name="📤 Request Headers")

        if safe_body:
            allure.attach(
                _pretty(safe_body),
                name="📤 Request Body",
                attachment_type=AttachmentType.JSON,
            )

        if params:
            attach_json(dict(params), name="📤 Query Params")

        attach_text(
            build_curl(method, url, safe_headers, safe_body),
            name="🔧 cURL Command",
        )

        attach_text(f"{status_emoji} {status_code}", name="📥 Response Status")

        allure.attach(
            truncate(_pretty(response_text) if response_text else "<empty>"),
            name="📥 Response Body",
            attachment_type=AttachmentType.JSON,
        )


__all__ = [
    "MAX_RESPONSE_LENGTH",
    "MASK",
    "attach_json",
    "attach_text",
    "attach_exchange",
    "build_curl",
    "redact_body",
    "redact_headers",
    "truncate",
]
