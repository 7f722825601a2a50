from __future__ import annotations
from enum import Enum
from typing import List, Optional

BOARD_SIZE = 15
CENTER = (7, 7)

Board = List[List[Optional[str]]]


class Square(str, Enum):
    NONE = ''
    DL = 'DL'  # double letter
    TL = 'TL'  # triple letter
    DW = 'DW'  # double word
    TW = 'TW'  # triple word
    ST = 'ST'  # start square, scores as double word

    @property
    def letter_multiplier(self) -> int:
        return {Square.DL: 2, Square.TL: 3}.get(self, 1)

    @property
    def word_multiplier(self) -> int:
        return {Square.DW: 2, Square.ST: 2, Square.TW: 3}.get(self, 1)


_ = Square.NONE
DL, TL, DW, TW, ST = Square.DL, Square.TL, Square.DW, Square.TW, Square.ST

BOARD_LAYOUT: tuple = (
    (TW, _, _, DL, _, _, _, TW, _, _, _, DL, _, _, TW),
    (_, DW, _, _, _, TL, _, _, _, TL, _, _, _, DW, _),
    (_, _, DW, _, _, _, DL, _, DL, _, _, _, DW, _, _),
    (DL, _, _, DW, _, _, _, DL, _, _, _, DW, _, _, DL),
    (_, _, _, _, DW, _, _, _, _, _, DW, _, _, _, _),
    (_, TL, _, _, _, TL, _, _, _, TL, _, _, _, TL, _),
    (_, _, DL, _, _, _, DL, _, DL, _, _, _, DL, _, _),
    (TW, _, _, DL, _, _, _, ST, _, _, _, DL, _, _, TW),
    (_, _, DL, _, _, _, DL, _, DL, _, _, _, DL, _, _),
    (_, TL, _, _, _, TL, _, _, _, TL, _, _, _, TL, _),
    (_, _, _, _, DW, _, _, _, _, _, DW, _, _, _, _),
    (DL, _, _, DW, _, _, _, DL, _, _, _, DW, _, _, DL),
    (_, _, DW, _, _, _, DL, _, DL, _, _, _, DW, _, _),
    (_, DW, _, _, _, TL, _, _, _, TL, _, _, _, DW, _),
    (TW, _, _, DL, _, _, _, TW, _, _, _, DL, _, _, TW),
)


def create_empty_board() -> Board:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_at(row: int, col: int) -> Square:
    return BOARD_LAYOUT[row][col]


def is_board_empty(board: Board) -> bool:
    return all(cell is None for row in board for cell in row)


def count_tiles(board: Board) -> int:
    return sum(1 for row in board for cell in row if cell is not None)


def has_neighbour(board: Board, row: int, col: int) -> bool:
    """True if any orthogonally adjacent cell holds a tile."""
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = row + dr, col + dc
        if in_bounds(r, c) and board[r][c] is not None:
            return True
    return False
