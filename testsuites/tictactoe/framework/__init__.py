"""
================================================================================
Tic-Tac-Toe Test Framework
================================================================================

Components for testing the tic-tac-toe API with every STAF client backend.

Modules:
    - service_config: Base URL and credentials from configuration
    - request_path: Endpoint paths
    - models: Mark, MarkRequest, BoardStatus, ErrorResponse
    - board_storage: Reference board states and the winner rule
    - headers: Default and Bearer header helpers
    - board_service: Declarative BoardService
    - stub_api: In-process game for offline runs

Author: Automation Team
License: MIT
================================================================================
"""

from .board_service import BoardService
from .board_storage import BoardStorage, expected_winner, is_valid_coordinate
from .headers import bearer_auth_headers, default_headers
from .models import BoardStatus, ErrorResponse, Mark, MarkRequest
from .service_config import ServiceConfig
from .stub_api import TicTacToeStubApi

__all__ = [
    "BoardService",
    "BoardStatus",
    "BoardStorage",
    "ErrorResponse",
    "Mark",
    "MarkRequest",
    "ServiceConfig",
    "TicTacToeStubApi",
    "bearer_auth_headers",
    "default_headers",
    "expected_winner",
    "is_valid_coordinate",
]
