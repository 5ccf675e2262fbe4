"""
In-process API stubs for running suites without external services.
"""

from .stub import StubAdapter, StubApi, StubRequest, StubResponse

__all__ = [
    "StubAdapter",
    "StubApi",
    "StubRequest",
    "StubResponse",
]
