"""
================================================================================
Tic-Tac-Toe Stub API
================================================================================

In-process implementation of the tic-tac-toe API used for offline runs.

Behaviour:
    - GET /board                  -> 200 BoardStatus
    - GET /board/{row}/{column}   -> 200 "<mark>" (JSON string)
    - PUT /board/{row}/{column}   -> 200 BoardStatus after placing {"mark": ...}
    - Coordinates outside 1..3    -> 400 "Illegal coordinates."
    - Mark other than X / O       -> 400 "Invalid Mark (X or O)."
    - Occupied square             -> 400 "Square is not empty."
    - Missing/wrong api-key       -> 401 when the stub requires a key

================================================================================
"""

from __future__ import annotations

from typing import Optional, Tuple

from staf.testing import StubApi, StubRequest, StubResponse

from .board_storage import BoardStorage, expected_winner, is_valid_coordinate
from .models import Mark
from .request_path import BOARD, SQUARE


ILLEGAL_COORDINATES = "Illegal coordinates."
INVALID_MARK = "Invalid Mark (X or O)."
SQUARE_NOT_EMPTY = "Square is not empty."
UNAUTHORIZED = "Missing or invalid API key."


def _error(status_code: int, message: str) -> StubResponse:
    return StubResponse(status_code, {"message": message})


class TicTacToeStubApi(StubApi):
    """
    Stateful tic-tac-toe game.

    Args:
        required_api_key: When set, every call must carry this api-key header
    """

    def __init__(self, required_api_key: Optional[str] = None) -> None:
        super().__init__()
        self.required_api_key = required_api_key
        self.board = BoardStorage.empty_board().board
        self.add_route("GET", BOARD, self._get_board)
        self.add_route("GET", SQUARE, self._get_square)
        self.add_route("PUT", SQUARE, self._put_square)

    def reset(self) -> None:
        self.board = BoardStorage.empty_board().board
        self.reset_received()

    def _status(self) -> dict:
        return {
            "winner": expected_winner(self.board).value,
            "board": [list(row) for row in self.board],
        }

    def _unauthorized(self, request: StubRequest) -> Optional[StubResponse]:
        if self.required_api_key and request.header("api-key") != self.required_api_key:
            return _error(401, UNAUTHORIZED)
        return None

    @staticmethod
    def _coordinates(request: StubRequest) -> Optional[Tuple[int, int]]:
        try:
            row = int(request.path_params["row"])
            column = int(request.path_params["column"])
        except (KeyError, ValueError):
            return None
        if not is_valid_coordinate(row, column):
            return None
        return row, column

    def _get_board(self, request: StubRequest) -> StubResponse:
        return self._unauthorized(request) or StubResponse(200, self._status())

    def _get_square(self, request: StubRequest) -> StubResponse:
        denied = self._unauthorized(request)
        if denied:
            return denied
        coordinates = self._coordinates(request)
        if coordinates is None:
            return _error(400, ILLEGAL_COORDINATES)
        row, column = coordinates
        return StubResponse(200, self.board[row - 1][column - 1])

    def _put_square(self, request: StubRequest) -> StubResponse:
        denied = self._unauthorized(request)
        if denied:
            return denied
        coordinates = self._coordinates(request)
        if coordinates is None:
            return _error(400, ILLEGAL_COORDINATES)

        try:
            payload = request.json()
        except ValueError:
            payload = None
        mark = payload.get("mark") if isinstance(payload, dict) else payload
        if mark not in (Mark.X.value, Mark.O.value):
            return _error(400, INVALID_MARK)

        row, column = coordinates
        if self.board[row - 1][column - 1] != Mark.EMPTY.value:
            return _error(400, SQUARE_NOT_EMPTY)

        self.board[row - 1][column - 1] = mark
        return StubResponse(200, self._status())
