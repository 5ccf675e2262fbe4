"""
================================================================================
Tic-Tac-Toe Models
================================================================================

Board state and request/response payloads of the tic-tac-toe API.

    - Mark: square value ("." empty, "X", "O")
    - MarkRequest: PUT /board/{row}/{column} body, {"mark": "X"}
    - BoardStatus: {"winner": ".", "board": [[...], [...], [...]]}
    - ErrorResponse: {"message": "..."}

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel


BOARD_SIZE = 3


class Mark(str, Enum):
    """Possible values of a board square."""
    EMPTY = "."
    X = "X"
    O = "O"

    @classmethod
    def from_value(cls, value: str) -> "Mark":
        for mark in cls:
            if mark.value == value:
                return mark
        raise ValueError(f"Invalid mark value: {value!r}")

    def __str__(self) -> str:
        return self.value


class MarkRequest(BaseModel):
    """
    Body for placing a mark.

    `mark` is a plain string so invalid marks can be sent on purpose.
    """
    mark: str


class BoardStatus(BaseModel):
    winner: str
    board: List[List[str]]

    def square(self, row: int, column: int) -> str:
        """Value at 1-based coordinates."""
        return self.board[row - 1][column - 1]


class ErrorResponse(BaseModel):
    message: str
