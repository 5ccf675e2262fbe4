"""
Response verification helpers.
"""

from .json_compare import IGNORE, add_ignore, add_ignores, compare_json
from .response_verification import ResponseVerificationService, SoftAssertions, verify_that

__all__ = [
    "IGNORE",
    "ResponseVerificationService",
    "SoftAssertions",
    "add_ignore",
    "add_ignores",
    "compare_json",
    "verify_that",
]
