"""
Petstore service settings resolved from the `petstore` config section.

Environment override: PETSTORE_BASE_URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from staf.common import ConfigLoader

from .request_path import BASE_URL


@dataclass(frozen=True)
class PetstoreConfig:
    base_url: str = BASE_URL

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "PetstoreConfig":
        loader = loader or ConfigLoader()
        return cls(base_url=loader.get("petstore.base_url", BASE_URL))
