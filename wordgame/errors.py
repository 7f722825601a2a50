from __future__ import annotations
from typing import Iterable, List


class GameError(Exception):
    """Recoverable rule violation. Raised before the game is mutated."""

    code = 'game_error'
    message = 'Game error'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def to_payload(self) -> dict:
        return {'code': self.code, 'message': str(self)}


class GameNotFound(GameError):
    code = 'game_not_found'
    message = 'Game not found'


class GameExists(GameError):
    code = 'game_exists'
    message = 'Game id already in use'


class UnknownLanguage(GameError):
    code = 'unknown_language'
    message = 'Unknown language'

    def __init__(self, language: str):
        self.language = language
        super().__init__(f'Unknown language: {language}')


class InvalidState(GameError):
    code = 'invalid_state'
    message = 'Operation not allowed in the current game state'


class NotInProgress(InvalidState):
    code = 'not_in_progress'
    message = 'Game is not in progress'


class GameAlreadyStarted(InvalidState):
    code = 'game_already_started'
    message = 'Game already started'


class GameFull(GameError):
    code = 'game_full'
    message = 'Game is full'


class DuplicatePlayer(GameError):
    code = 'duplicate_player'
    message = 'Player already in game'


class NotEnoughPlayers(GameError):
    code = 'not_enough_players'
    message = 'Need at least 2 players'


class NotYourTurn(GameError):
    code = 'not_your_turn'
    message = 'Not your turn'


# Placement rules

class PlacementError(GameError):
    code = 'invalid_placement'
    message = 'Invalid tile placement'


class NoTilesPlaced(PlacementError):
    code = 'no_tiles_placed'
    message = 'No tiles placed'


class OutOfBounds(PlacementError):
    code = 'out_of_bounds'
    message = 'Tile placed outside the board'


class DuplicatePosition(PlacementError):
    code = 'duplicate_position'
    message = 'Two tiles placed on the same square'


class MissingLetter(PlacementError):
    code = 'missing_letter'
    message = 'Every placed tile needs a letter'


class SquareOccupied(PlacementError):
    code = 'square_occupied'
    message = 'Cannot place tile on occupied square'


class NotInLine(PlacementError):
    code = 'not_in_line'
    message = 'Tiles must be placed in a straight line'


class NotContiguous(PlacementError):
    code = 'not_contiguous'
    message = 'Tiles must be contiguous'


class MustCoverCenter(PlacementError):
    code = 'must_cover_center'
    message = 'First word must cover center square'


class NotConnected(PlacementError):
    code = 'not_connected'
    message = 'Tiles must connect to existing words'


class InvalidWord(GameError):
    code = 'invalid_word'

    def __init__(self, words: Iterable[str]):
        self.words: List[str] = list(words)
        super().__init__(f"Invalid word(s): {', '.join(self.words)}")

    def to_payload(self) -> dict:
        return {**super().to_payload(), 'words': self.words}


# Rack / bag

class TileNotFound(GameError):
    code = 'tile_not_found'

    def __init__(self, letter: str):
        self.letter = letter
        super().__init__(f'Tile not found: {letter or "blank"}')


class NotEnoughTilesInBag(GameError):
    code = 'not_enough_tiles_in_bag'
    message = 'Not enough tiles in bag'


class NothingToExchange(GameError):
    code = 'nothing_to_exchange'
    message = 'No tiles selected for exchange'
