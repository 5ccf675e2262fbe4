"""
================================================================================
Board Data Storage
================================================================================

Reference board states for verification, and the winner rule they follow.

Usage:
    expected = BoardStorage.x_wins_horizontal()
    assert expected_winner(expected.board) == Mark.X

================================================================================
"""

from __future__ import annotations

from typing import List, Sequence

from .models import BOARD_SIZE, BoardStatus, Mark


Board = List[List[str]]


def _lines(board: Sequence[Sequence[str]]) -> List[List[str]]:
    size = len(board)
    rows = [list(row) for row in board]
    columns = [[board[r][c] for r in range(size)] for c in range(size)]
    diagonals = [
        [board[i][i] for i in range(size)],
        [board[i][size - 1 - i] for i in range(size)],
    ]
    return rows + columns + diagonals


def expected_winner(board: Sequence[Sequence[str]]) -> Mark:
    """
    Winner of a board: the mark filling a whole row, column or diagonal.

    Returns Mark.EMPTY when nobody has won (game running or draw).
    """
    for line in _lines(board):
        first = line[0]
        if first != Mark.EMPTY.value and all(square == first for square in line):
            return Mark.from_value(first)
    return Mark.EMPTY


def is_valid_coordinate(row: int, column: int) -> bool:
    """Board coordinates are 1-based, 1..3 on both axes."""
    return 1 <= row <= BOARD_SIZE and 1 <= column <= BOARD_SIZE


class BoardStorage:
    """Factory of reference board states."""

    @staticmethod
    def _status(board: Board) -> BoardStatus:
        return BoardStatus(winner=expected_winner(board).value, board=board)

    @staticmethod
    def empty_board() -> BoardStatus:
        return BoardStorage._status(
            [[Mark.EMPTY.value] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        )

    @staticmethod
    def x_wins_horizontal() -> BoardStatus:
        """X fills the first row."""
        return BoardStorage._status([
            ["X", "X", "X"],
            ["O", "O", "."],
            [".", ".", "."],
        ])

    @staticmethod
    def o_wins_vertical() -> BoardStatus:
        """O fills the first column."""
        return BoardStorage._status([
            ["O", "X", "X"],
            ["O", "X", "."],
            ["O", ".", "."],
        ])

    @staticmethod
    def x_wins_diagonal() -> BoardStatus:
        return BoardStorage._status([
            ["X", "O", "O"],
            ["O", "X", "."],
            [".", ".", "X"],
        ])

    @staticmethod
    def draw_board() -> BoardStatus:
        """Full board, no winner."""
        return BoardStorage._status([
            ["X", "O", "X"],
            ["O", "X", "O"],
            ["O", "X", "O"],
        ])
