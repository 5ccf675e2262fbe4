"""
Declarative tic-tac-toe service.

    with create_client(ClientType.HTTPX, config) as client:
        service = BoardService(client, default_headers=bearer_auth_headers(settings))
        status = service.put_mark(1, 1, MarkRequest(mark="X")).body
"""

from __future__ import annotations

from staf.clients import ApiService, get, put

from .models import BoardStatus, MarkRequest
from .request_path import GET_BOARD, GET_SQUARE, PUT_SQUARE


class BoardService(ApiService):

    @get(GET_BOARD, response=BoardStatus)
    def get_board(self):
        """Current board and winner."""

    @get(GET_SQUARE, response=str)
    def get_square(self, row: int, column: int):
        """Single square value as returned by the API."""

    @put(PUT_SQUARE, response=BoardStatus, body="mark")
    def put_mark(self, row: int, column: int, mark: MarkRequest):
        """Place a mark and return the updated board."""
