from __future__ import annotations
from typing import List, Sequence

from .board import BOARD_SIZE, Board, copy_board
from .dictionary import DictionaryIndex
from .schemas import Direction, PlacedTile, Position, ValidationResult, Word


def place_on(board: Board, tiles: Sequence[PlacedTile]) -> Board:
    """Copy of `board` with `tiles` laid on it. The original is not touched."""
    temp = copy_board(board)
    for t in tiles:
        temp[t.row][t.col] = t.letter
    return temp


def read_word(board: Board, row: int, col: int, direction: Direction, q_as_qu: bool = False) -> Word:
    """Read the contiguous run of tiles through (row, col) along `direction`."""
    dr, dc = (0, 1) if direction == 'horizontal' else (1, 0)
    while row - dr >= 0 and col - dc >= 0 and board[row - dr][col - dc] is not None:
        row, col = row - dr, col - dc

    text = ''
    positions: List[Position] = []
    while row < BOARD_SIZE and col < BOARD_SIZE and board[row][col] is not None:
        cell = board[row][col]
        text += 'QU' if q_as_qu and cell == 'Q' else cell
        positions.append(Position(row=row, col=col))
        row, col = row + dr, col + dc
    return Word(text=text, positions=positions, direction=direction)


def extract_words(tiles: Sequence[PlacedTile], board: Board, q_as_qu: bool = False) -> List[Word]:
    """Words formed by placing `tiles` on `board`: main word first, then
    cross-words in placement order.

    Word length is counted in tiles (positions), never in characters, so a
    digraph tile such as 'LL' alone is not a word.
    """
    if not tiles:
        return []

    rows = {t.row for t in tiles}
    cols = {t.col for t in tiles}
    horizontal = len(rows) == 1
    vertical = not horizontal and len(cols) == 1
    temp = place_on(board, tiles)

    words: List[Word] = []
    if horizontal:
        main = read_word(temp, tiles[0].row, min(cols), 'horizontal', q_as_qu)
    elif vertical:
        main = read_word(temp, min(rows), tiles[0].col, 'vertical', q_as_qu)
    else:
        main = None
    if main is not None and len(main.positions) > 1:
        words.append(main)

    # A single tile reads as horizontal, so its vertical run is checked here
    cross_direction: Direction = 'vertical' if horizontal else 'horizontal'
    for t in tiles:
        cross = read_word(temp, t.row, t.col, cross_direction, q_as_qu)
        if len(cross.positions) > 1:
            words.append(cross)
    return words


def validate_move(
    tiles: Sequence[PlacedTile],
    board: Board,
    language: str,
    dictionary: DictionaryIndex,
    q_as_qu: bool = False,
) -> ValidationResult:
    valid: List[Word] = []
    invalid: List[Word] = []
    for word in extract_words(tiles, board, q_as_qu):
        if dictionary.is_valid_word(word.text, language):
            valid.append(word)
        else:
            invalid.append(word)
    return ValidationResult(is_valid=not invalid, valid_words=valid, invalid_words=invalid)
