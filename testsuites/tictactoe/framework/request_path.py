"""Tic-tac-toe endpoint paths."""

BOARD = "/board"
SQUARE = "/board/{row}/{column}"

GET_BOARD = BOARD
GET_SQUARE = SQUARE
PUT_SQUARE = SQUARE
