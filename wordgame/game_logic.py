from __future__ import annotations
import logging
import random
import time
import uuid
from typing import Callable, List, Optional, Sequence, Union

from . import errors
from .board import CENTER, Board, create_empty_board, has_neighbour, in_bounds, is_board_empty
from .config import Config
from .dictionary import DictionaryIndex
from .schemas import (
    Game, GameOptions, GameView, HiddenTile, HistoryLog, MoveRecord, MoveResult,
    PlacedTile, PlayerState, PlayerView, Position, Tile,
)
from .scoring import calculate_score
from .tiles import create_bag, draw_tiles, shuffle_tiles
from .validator import validate_move

log = logging.getLogger("wordgame")

PlacedTileLike = Union[PlacedTile, dict]


def epoch_ms() -> int:
    return int(time.time() * 1000)


class GameEngine:
    """Rules engine for one process. Holds no game state of its own.

    Every operation takes the Game it works on, validates all of its
    preconditions first and only then mutates the game in place. Callers
    must serialize operations on the same game.
    """

    def __init__(
        self,
        dictionary: DictionaryIndex,
        clock: Callable[[], int] = epoch_ms,
        rng: Optional[random.Random] = None,
        max_players: int = Config.MAX_PLAYERS,
        min_players: int = Config.MIN_PLAYERS,
        rack_size: int = Config.RACK_SIZE,
        bingo_bonus: int = Config.BINGO_BONUS,
    ):
        self.dictionary = dictionary
        self.clock = clock
        self.rng = rng or random.Random()
        self.max_players = max_players
        self.min_players = min_players
        self.rack_size = rack_size
        self.bingo_bonus = bingo_bonus

    # Lifecycle

    def create_game(
        self,
        game_id: str,
        language: str,
        creator_id: str,
        creator_name: str,
        options: Optional[GameOptions] = None,
    ) -> Game:
        options = options or GameOptions()
        bag = create_bag(language, self.rng)
        drawn, remaining = draw_tiles(bag, self.rack_size)
        now = self.clock()
        return Game(
            id=game_id,
            language=language,
            strict_mode=options.strict_mode,
            time_limit=options.time_limit or None,
            enable_chat=options.enable_chat,
            enable_history=options.enable_history,
            q_as_qu=options.q_as_qu,
            board=create_empty_board(),
            tile_bag=remaining,
            players=[PlayerState(id=creator_id, name=creator_name, tiles=drawn)],
            created_at=now,
            last_activity=now,
        )

    def add_player(self, game: Game, player_id: str, player_name: str) -> Game:
        if game.status != 'waiting':
            raise errors.GameAlreadyStarted()
        if len(game.players) >= self.max_players:
            raise errors.GameFull()
        if game.player(player_id) is not None:
            raise errors.DuplicatePlayer()

        drawn, game.tile_bag = draw_tiles(game.tile_bag, self.rack_size)
        game.players.append(PlayerState(id=player_id, name=player_name, tiles=drawn))
        game.last_activity = self.clock()
        return game

    def start_game(self, game: Game) -> Game:
        if game.status != 'waiting':
            raise errors.GameAlreadyStarted()
        if len(game.players) < self.min_players:
            raise errors.NotEnoughPlayers()

        now = self.clock()
        game.status = 'playing'
        game.current_player_index = 0
        game.turn_start_time = now
        game.last_activity = now
        log.info("Game %s started with %d players", game.id, len(game.players))
        return game

    def set_connected(self, game: Game, player_id: str, connected: bool) -> Game:
        player = game.player(player_id)
        if player is not None:
            player.connected = connected
        return game

    # Turns

    def make_move(self, game: Game, player_id: str, tiles: Sequence[PlacedTileLike]) -> MoveResult:
        player = self._require_turn(game, player_id)
        placed = [_normalize_placed(t) for t in tiles]
        check_placement(placed, game.board)
        kept = _remove_from_rack(player.tiles, placed)

        validation = validate_move(placed, game.board, game.language, self.dictionary, game.q_as_qu)
        if not validation.is_valid:
            invalid = [w.text for w in validation.invalid_words]
            if not game.strict_mode:
                raise errors.InvalidWord(invalid)
            return self._apply_penalty(game, player, placed, invalid)

        result = calculate_score(
            placed, game.board, game.language, game.blanks,
            rack_size=self.rack_size, bingo_bonus=self.bingo_bonus,
        )
        now = self.clock()

        for t in placed:
            game.board[t.row][t.col] = t.letter
            if t.is_blank:
                game.blanks.append(Position(row=t.row, col=t.col))

        drawn, game.tile_bag = draw_tiles(game.tile_bag, len(placed))
        player.tiles = kept + drawn
        player.score += result.score
        game.pass_count = 0

        word_texts = [w.text for w in result.words]
        game.move_history.append(MoveRecord(
            player_id=player_id, type='move', tiles=placed, words=word_texts,
            score=result.score, timestamp=now,
        ))
        self._log(game, player, 'move', ', '.join(word_texts), result.score, now)

        finished = not player.tiles and not game.tile_bag
        if finished:
            self._end_game(game, player.id)
        else:
            self._advance_turn(game)
        game.last_activity = now
        game.turn_start_time = now
        return MoveResult(score=result.score, words=result.words, finished=finished)

    def pass_turn(self, game: Game, player_id: str) -> Game:
        player = self._require_turn(game, player_id)
        now = self.clock()
        game.pass_count += 1
        game.move_history.append(MoveRecord(player_id=player_id, type='pass', timestamp=now))
        self._log(game, player, 'pass', None, 0, now)

        if game.pass_count >= len(game.players) * 2:
            self._end_game(game)
        else:
            self._advance_turn(game)
        game.last_activity = now
        game.turn_start_time = now
        return game

    def exchange_tiles(self, game: Game, player_id: str, letters: Sequence[str]) -> Game:
        """Swap rack tiles for fresh ones from the bag. Costs the turn.

        Replacements are drawn before the discards go back, so a player
        never gets their own tiles back; the bag is reshuffled afterwards.
        """
        player = self._require_turn(game, player_id)
        letters = [letter.upper() for letter in letters]
        if not letters:
            raise errors.NothingToExchange()
        if len(game.tile_bag) < len(letters):
            raise errors.NotEnoughTilesInBag()

        kept, discarded = _split_rack(player.tiles, letters)
        now = self.clock()

        drawn, bag = draw_tiles(game.tile_bag, len(letters))
        player.tiles = kept + drawn
        bag.extend(discarded)
        shuffle_tiles(bag, self.rng)
        game.tile_bag = bag

        game.move_history.append(MoveRecord(
            player_id=player_id, type='exchange', exchange_count=len(letters), timestamp=now,
        ))
        self._log(game, player, 'exchange', f'{len(letters)} tiles', 0, now)

        # Exchange keeps the running clock unless the game is timed
        if game.time_limit:
            game.turn_start_time = now
        self._advance_turn(game)
        game.last_activity = now
        return game

    # Views

    def get_state_for_player(self, game: Game, player_id: str) -> GameView:
        data = game.model_dump(exclude={'tile_bag', 'players'})
        players = [
            PlayerView(
                id=p.id,
                name=p.name,
                tiles=[t.model_copy() for t in p.tiles] if p.id == player_id else [HiddenTile() for _ in p.tiles],
                score=p.score,
                connected=p.connected,
            )
            for p in game.players
        ]
        return GameView(**data, tile_bag_count=len(game.tile_bag), players=players)

    # Internals

    def _require_turn(self, game: Game, player_id: str) -> PlayerState:
        player = game.current_player
        if player is None:
            raise errors.NotInProgress()
        if player.id != player_id:
            raise errors.NotYourTurn()
        return player

    def _advance_turn(self, game: Game) -> None:
        game.current_player_index = (game.current_player_index + 1) % len(game.players)

    def _apply_penalty(self, game: Game, player: PlayerState, placed: List[PlacedTile], invalid: List[str]) -> MoveResult:
        now = self.clock()
        game.pass_count = 0
        game.move_history.append(MoveRecord(
            player_id=player.id, type='penalty', tiles=placed, words=invalid, timestamp=now,
        ))
        self._log(game, player, 'penalty', ', '.join(invalid), 0, now)
        self._advance_turn(game)
        game.last_activity = now
        game.turn_start_time = now
        log.info("Game %s: %s loses turn for invalid word(s) %s", game.id, player.id, invalid)
        return MoveResult(penalty=True, invalid_words=invalid)

    def _end_game(self, game: Game, finisher_id: Optional[str] = None) -> None:
        deductions = 0
        for p in game.players:
            remaining = p.rack_value()
            p.score -= remaining
            deductions += remaining

        finisher = game.player(finisher_id) if finisher_id else None
        if finisher is not None:
            finisher.score += deductions

        # Ties go to the first player in seat order
        winner = game.players[0]
        for p in game.players:
            if p.score > winner.score:
                winner = p

        game.status = 'finished'
        game.current_player_index = None
        game.winner = winner.id
        game.finished_at = self.clock()
        log.info("Game %s finished, winner %s with %d", game.id, winner.id, winner.score)

    def _log(self, game: Game, player: PlayerState, action: str, details: Optional[str], score: int, now: int) -> None:
        if not game.enable_history:
            return
        taken = round((now - game.turn_start_time) / 1000) if game.turn_start_time else 0
        game.history_logs.append(HistoryLog(
            id=uuid.uuid4().hex,
            player_id=player.id,
            player_name=player.name,
            action=action,
            details=details,
            score=score,
            time_taken=taken,
            timestamp=now,
        ))


def check_placement(tiles: Sequence[PlacedTile], board: Board) -> None:
    """Raise a PlacementError unless `tiles` is a legal placement on `board`."""
    if not tiles:
        raise errors.NoTilesPlaced()

    seen = set()
    for t in tiles:
        if not in_bounds(t.row, t.col):
            raise errors.OutOfBounds()
        if (t.row, t.col) in seen:
            raise errors.DuplicatePosition()
        seen.add((t.row, t.col))
        if board[t.row][t.col] is not None:
            raise errors.SquareOccupied()

    rows = {t.row for t in tiles}
    cols = {t.col for t in tiles}
    if len(rows) > 1 and len(cols) > 1:
        raise errors.NotInLine()

    if len(rows) == 1:
        row = next(iter(rows))
        span = ((row, c) for c in range(min(cols), max(cols) + 1))
    else:
        col = next(iter(cols))
        span = ((r, col) for r in range(min(rows), max(rows) + 1))
    for r, c in span:
        if (r, c) not in seen and board[r][c] is None:
            raise errors.NotContiguous()

    if is_board_empty(board):
        if CENTER not in seen:
            raise errors.MustCoverCenter()
    elif not any(has_neighbour(board, t.row, t.col) for t in tiles):
        raise errors.NotConnected()


def _normalize_placed(tile: PlacedTileLike) -> PlacedTile:
    if not isinstance(tile, PlacedTile):
        tile = PlacedTile.model_validate(tile)
    letter = tile.letter.strip().upper()
    if not letter:
        raise errors.MissingLetter()
    return tile.model_copy(update={'letter': letter})


def _remove_from_rack(rack: List[Tile], placed: Sequence[PlacedTile]) -> List[Tile]:
    """Rack left after playing `placed`. Blank placements consume blanks."""
    kept = list(rack)
    for t in placed:
        idx = next(
            (i for i, r in enumerate(kept) if (r.is_blank if t.is_blank else not r.is_blank and r.letter == t.letter)),
            None,
        )
        if idx is None:
            raise errors.TileNotFound('' if t.is_blank else t.letter)
        kept.pop(idx)
    return kept


def _split_rack(rack: List[Tile], letters: Sequence[str]):
    """Split the rack into (kept, discarded) by letter; '' names a blank."""
    kept = list(rack)
    discarded = []
    for letter in letters:
        idx = next((i for i, r in enumerate(kept) if r.letter == letter), None)
        if idx is None:
            raise errors.TileNotFound(letter)
        discarded.append(kept.pop(idx))
    return kept, discarded
