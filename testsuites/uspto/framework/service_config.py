"""
USPTO service settings resolved from the `uspto` config section.

Environment overrides: USPTO_BASE_URL, USPTO_DEFAULT_DATASET,
USPTO_DEFAULT_VERSION.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from staf.common import ConfigLoader

from .request_path import BASE_URL, DEFAULT_DATASET, DEFAULT_VERSION


@dataclass(frozen=True)
class UsptoConfig:
    base_url: str = BASE_URL
    default_dataset: str = DEFAULT_DATASET
    default_version: str = DEFAULT_VERSION

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "UsptoConfig":
        loader = loader or ConfigLoader()
        return cls(
            base_url=loader.get("uspto.base_url", BASE_URL),
            default_dataset=loader.get("uspto.default_dataset", DEFAULT_DATASET),
            default_version=loader.get("uspto.default_version", DEFAULT_VERSION),
        )
