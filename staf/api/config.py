"""
================================================================================
Programmatic Client Configuration
================================================================================

Settings consumed by every client backend. Build one in code or from the
YAML/env configuration:

    >>> ApiClientConfig(base_url="https://learn.openapis.org",
    ...                 object_mapping_type=ObjectMappingType.PYDANTIC)

    >>> ApiClientConfig.from_loader(ConfigLoader(), base_url=service_url)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..common.config_loader import ConfigLoader
from ..errors import ConfigurationError
from .model import ObjectMappingType


# Default retry settings
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_COUNT = 3
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_RETRY_MAX_WAIT = 5.0


def _number(name: str, value: Any, kind: type) -> Any:
    """Coerce a numeric setting, naming the field when it is not a number."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


@dataclass
class ApiClientConfig:
    """
    Client backend configuration.

    Attributes:
        base_url: Base URL prepended to request paths
        object_mapping_type: Body mapping strategy (JSON or PYDANTIC)
        timeout: Request timeout in seconds
        retry_count: Total attempts for transient failures and 429 responses
        retry_backoff: Base wait for exponential backoff (seconds)
        retry_max_wait: Upper bound for any single wait (seconds)
        default_headers: Headers sent with every request
        verify_ssl: Verify TLS certificates
        follow_redirects: Follow HTTP redirects
        report_to_allure: Attach every exchange to the Allure report
    """
    base_url: str = ""
    object_mapping_type: ObjectMappingType = ObjectMappingType.JSON
    timeout: float = DEFAULT_TIMEOUT
    retry_count: int = DEFAULT_RETRY_COUNT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    retry_max_wait: float = DEFAULT_RETRY_MAX_WAIT
    default_headers: Dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    follow_redirects: bool = True
    report_to_allure: bool = True

    def __post_init__(self) -> None:
        try:
            self.object_mapping_type = ObjectMappingType.parse(self.object_mapping_type)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self.retry_count = _number("retry_count", self.retry_count, int)
        self.timeout = _number("timeout", self.timeout, float)
        self.retry_backoff = _number("retry_backoff", self.retry_backoff, float)
        self.retry_max_wait = _number("retry_max_wait", self.retry_max_wait, float)

        if self.retry_count < 1:
            raise ConfigurationError(
                f"retry_count must be at least 1, got {self.retry_count}"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.retry_backoff < 0 or self.retry_max_wait < 0:
            raise ConfigurationError("retry_backoff and retry_max_wait cannot be negative")

        self.default_headers = dict(self.default_headers or {})

    @classmethod
    def from_loader(
        cls,
        loader: Optional[ConfigLoader] = None,
        section: str = "api",
        **overrides: Any,
    ) -> "ApiClientConfig":
        """
        Build configuration from a ConfigLoader section.

        Args:
            loader: Configuration loader. Uses the process singleton if None.
            section: YAML section holding the client settings.
            **overrides: Explicit values that win over configuration.
        """
        loader = loader or ConfigLoader()
        values: Dict[str, Any] = {
            "base_url": loader.get(f"{section}.base_url", ""),
            "object_mapping_type": loader.get(f"{section}.object_mapping_type", "json"),
            "timeout": loader.get(f"{section}.timeout", DEFAULT_TIMEOUT),
            "retry_count": loader.get(f"{section}.retry_count", DEFAULT_RETRY_COUNT),
            "retry_backoff": loader.get(f"{section}.retry_backoff", DEFAULT_RETRY_BACKOFF),
            "retry_max_wait": loader.get(f"{section}.retry_max_wait", DEFAULT_RETRY_MAX_WAIT),
            "default_headers": loader.get(f"{section}.default_headers", {}) or {},
            "verify_ssl": loader.get(f"{section}.verify_ssl", True),
            "follow_redirects": loader.get(f"{section}.follow_redirects", True),
            "report_to_allure": loader.get(f"{section}.report_to_allure", True),
        }
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "ApiClientConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


__all__ = [
    "ApiClientConfig",
    "DEFAULT_TIMEOUT",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_RETRY_BACKOFF",
    "DEFAULT_RETRY_MAX_WAIT",
]
