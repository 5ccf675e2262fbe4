"""
Tic-tac-toe service settings resolved from the `tictactoe` config section.

Environment overrides: TICTACTOE_BASE_URL, TICTACTOE_API_KEY,
TICTACTOE_BEARER_TOKEN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from staf.common import ConfigLoader


DEFAULT_BASE_URL = "https://learn.openapis.org"


@dataclass(frozen=True)
class ServiceConfig:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    bearer_token: str = ""

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "ServiceConfig":
        loader = loader or ConfigLoader()
        return cls(
            base_url=loader.get("tictactoe.base_url", DEFAULT_BASE_URL),
            api_key=loader.get("tictactoe.api_key", "") or "",
            bearer_token=loader.get("tictactoe.bearer_token", "") or "",
        )
