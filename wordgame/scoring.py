from __future__ import annotations
from typing import Dict, Iterable, Sequence, Tuple

from .board import Board, square_at
from .config import Config
from .schemas import PlacedTile, Position, ScoreResult, Word
from .tiles import letter_value
from .validator import extract_words, place_on


def calculate_score(
    tiles: Sequence[PlacedTile],
    board: Board,
    language: str,
    blanks: Iterable[Position] = (),
    rack_size: int = Config.RACK_SIZE,
    bingo_bonus: int = Config.BINGO_BONUS,
) -> ScoreResult:
    """Score a placement on the board as it was before the move.

    Does not consult the dictionary. `blanks` are cells already holding a
    blank tile; they score zero.
    """
    if not tiles:
        return ScoreResult()

    placed: Dict[Tuple[int, int], PlacedTile] = {(t.row, t.col): t for t in tiles}
    blank_cells = {(p.row, p.col) for p in blanks}
    temp = place_on(board, tiles)

    total = 0
    words = []
    for word in extract_words(tiles, board):
        scored = _score_word(word, temp, placed, blank_cells, language)
        total += scored.score
        words.append(scored)

    bingo = len(tiles) == rack_size
    if bingo:
        total += bingo_bonus
    return ScoreResult(score=total, words=words, bingo=bingo)


def _score_word(word: Word, board: Board, placed, blank_cells, language: str) -> Word:
    score = 0
    word_multiplier = 1
    for pos in word.positions:
        key = (pos.row, pos.col)
        new_tile = placed.get(key)
        if new_tile is not None:
            value = 0 if new_tile.is_blank else letter_value(new_tile.letter, language)
            square = square_at(pos.row, pos.col)
            value *= square.letter_multiplier
            word_multiplier *= square.word_multiplier
        elif key in blank_cells:
            value = 0
        else:
            value = letter_value(board[pos.row][pos.col], language)
        score += value
    return word.model_copy(update={'score': score * word_multiplier})
