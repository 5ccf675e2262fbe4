"""
================================================================================
Response Verification Service
================================================================================

Reusable checks for ApiResponse objects.

Key Features:
    - Soft assertions: collect every failure, report them together
    - Structural JSON comparison of models or dicts with ignore placeholders
    - Status code, body presence, text containment and content type checks
    - Failure details attached to the Allure report

================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional

import allure
from loguru import logger

from ..api.model import ApiResponse
from ..api.reporting import attach_text
from ..api.serialization import to_jsonable
from .json_compare import compare_json


def verify_that(condition: Any, message: str) -> None:
    """Raise AssertionError with `message` unless `condition` holds."""
    if not condition:
        raise AssertionError(message)


class SoftAssertions:
    """
    Collects assertion failures instead of stopping at the first one.

    Usage:
        with SoftAssertions() as soft:
            soft.equal(response.status_code, 200, "status code")
            soft.contains(response.raw_body, "Illegal coordinates", "body")
        # AssertionError listing every failure is raised on exit
    """

    def __init__(self) -> None:
        self.failures: List[str] = []

    def __enter__(self) -> "SoftAssertions":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.assert_all()

    def check(self, condition: bool, message: str) -> bool:
        if not condition:
            self.failures.append(message)
        return condition

    def equal(self, actual: Any, expected: Any, description: str = "value") -> bool:
        return self.check(
            actual == expected,
            f"{description}: expected {expected!r}, got {actual!r}",
        )

    def contains(self, actual: Optional[str], expected_text: str, description: str = "text") -> bool:
        return self.check(
            actual is not None and expected_text in actual,
            f"{description}: expected to contain {expected_text!r}, got {actual!r}",
        )

    def not_none(self, actual: Any, description: str = "value") -> bool:
        return self.check(actual is not None, f"{description}: expected not None")

    def assert_all(self) -> None:
        """Raise one AssertionError listing every collected failure."""
        if not self.failures:
            return
        report = "\n".join(f"  {i}. {failure}" for i, failure in enumerate(self.failures, 1))
        attach_text(report, name="❌ Soft Assertion Failures")
        logger.error(f"{len(self.failures)} soft assertion(s) failed:\n{report}")
        raise AssertionError(f"{len(self.failures)} assertion(s) failed:\n{report}")


class ResponseVerificationService:
    """
    Verifies API responses.

    Provides methods for standard and JSON-based response verification.
    """

    def verify_response(self, http_status: int, api_response: ApiResponse, expected: Any) -> None:
        """Soft-verify status code and body equality."""
        with allure.step(f"Verify response: status {http_status} and expected body"):
            with SoftAssertions() as soft:
                soft.equal(api_response.status_code, http_status, "status code")
                soft.equal(api_response.body, expected, "body")

    def verify_json_response(self, http_status: int, api_response: ApiResponse, expected: Any) -> None:
        """
        Verify status code, then compare the body structurally as JSON.

        Both sides may be models, dataclasses or plain containers; IGNORE
        placeholders in `expected` match any value.
        """
        with allure.step(f"Verify JSON response: status {http_status}"):
            self.verify_status_code(http_status, api_response)
            actual = api_response.body
            if actual is None and api_response.raw_body:
                try:
                    actual = api_response.json()
                except ValueError:
                    raise AssertionError(
                        f"Response body is not JSON: {api_response.raw_body[:500]!r}"
                    ) from None
            differences = compare_json(to_jsonable(actual), to_jsonable(expected))
            if differences:
                report = "\n".join(f"  - {d}" for d in differences)
                attach_text(report, name="❌ JSON Differences")
                raise AssertionError(f"JSON body differs from expected:\n{report}")

    def verify_status_code(self, http_status: int, api_response: ApiResponse) -> None:
        """Verify only the HTTP status code."""
        verify_that(
            api_response.status_code == http_status,
            f"Expected status {http_status}, got {api_response.status_code}. "
            f"Body: {api_response.raw_body[:500]}",
        )

    def verify_response_contains(self, http_status: int, api_response: ApiResponse, expected_text: str) -> None:
        """Soft-verify status code and that the raw body contains the text."""
        with allure.step(f"Verify response: status {http_status} containing '{expected_text}'"):
            with SoftAssertions() as soft:
                soft.equal(api_response.status_code, http_status, "status code")
                soft.contains(api_response.raw_body, expected_text, "body")

    def verify_body_not_null(self, api_response: ApiResponse) -> None:
        """Verify the response has a body (mapped or raw)."""
        verify_that(
            api_response.body is not None or api_response.raw_body,
            f"Expected a response body for status {api_response.status_code}",
        )

    def verify_content_type_json(self, api_response: ApiResponse) -> None:
        content_type = api_response.content_type
        verify_that(content_type is not None, "Content-Type header is missing")
        verify_that(
            "application/json" in content_type.lower(),
            f"Expected JSON Content-Type, got {content_type!r}",
        )


__all__ = [
    "ResponseVerificationService",
    "SoftAssertions",
    "verify_that",
]
