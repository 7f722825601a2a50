from __future__ import annotations
from pydantic import BaseModel, ConfigDict, PositiveInt
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Union

Direction = Literal['horizontal', 'vertical']
GameStatus = Literal['waiting', 'playing', 'finished']
MoveType = Literal['move', 'pass', 'exchange', 'penalty']


class CamelModel(BaseModel):
    # Wire format is camelCase; Python code uses the snake_case names
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(CamelModel):
    row: int
    col: int


class Tile(CamelModel):
    letter: str = ''
    value: int = 0
    is_blank: bool = False


class HiddenTile(CamelModel):
    hidden: bool = True


class PlacedTile(CamelModel):
    row: int
    col: int
    letter: str
    value: int = 0
    is_blank: bool = False


class Word(CamelModel):
    text: str
    positions: List[Position] = []
    direction: Direction
    score: int = 0


class ValidationResult(CamelModel):
    is_valid: bool
    valid_words: List[Word] = []
    invalid_words: List[Word] = []


class ScoreResult(CamelModel):
    score: int = 0
    words: List[Word] = []
    bingo: bool = False


class GameOptions(CamelModel):
    strict_mode: bool = False
    time_limit: Optional[PositiveInt] = None  # seconds, None = no limit
    enable_chat: bool = True
    enable_history: bool = True
    q_as_qu: bool = False


class PlayerState(CamelModel):
    id: str
    name: str
    tiles: List[Tile] = []
    score: int = 0
    connected: bool = True

    def rack_value(self) -> int:
        return sum(t.value for t in self.tiles)


class MoveRecord(CamelModel):
    player_id: str
    type: MoveType
    tiles: List[PlacedTile] = []
    words: List[str] = []
    score: int = 0
    exchange_count: Optional[int] = None
    timestamp: int


class HistoryLog(CamelModel):
    id: str
    player_id: str
    player_name: str
    action: MoveType
    details: Optional[str] = None
    score: int = 0
    time_taken: int = 0  # seconds
    timestamp: int


class Game(CamelModel):
    id: str
    language: str
    status: GameStatus = 'waiting'
    strict_mode: bool = False
    time_limit: Optional[int] = None
    enable_chat: bool = True
    enable_history: bool = True
    q_as_qu: bool = False
    board: List[List[Optional[str]]]
    blanks: List[Position] = []
    tile_bag: List[Tile] = []
    players: List[PlayerState] = []
    current_player_index: Optional[int] = None
    pass_count: int = 0
    move_history: List[MoveRecord] = []
    history_logs: List[HistoryLog] = []
    winner: Optional[str] = None
    created_at: int
    last_activity: int
    turn_start_time: Optional[int] = None
    finished_at: Optional[int] = None

    @property
    def current_player(self) -> Optional[PlayerState]:
        if self.status != 'playing' or self.current_player_index is None:
            return None
        return self.players[self.current_player_index]

    def player(self, player_id: str) -> Optional[PlayerState]:
        return next((p for p in self.players if p.id == player_id), None)


class MoveResult(CamelModel):
    score: int = 0
    words: List[Word] = []
    penalty: bool = False
    invalid_words: List[str] = []
    finished: bool = False


class PlayerView(CamelModel):
    id: str
    name: str
    tiles: List[Union[Tile, HiddenTile]] = []
    score: int = 0
    connected: bool = True


class GameView(CamelModel):
    id: str
    language: str
    status: GameStatus
    strict_mode: bool
    time_limit: Optional[int] = None
    enable_chat: bool
    enable_history: bool
    q_as_qu: bool
    board: List[List[Optional[str]]]
    blanks: List[Position] = []
    tile_bag_count: int
    players: List[PlayerView]
    current_player_index: Optional[int] = None
    pass_count: int
    move_history: List[MoveRecord] = []
    history_logs: List[HistoryLog] = []
    winner: Optional[str] = None
    created_at: int
    last_activity: int
    turn_start_time: Optional[int] = None
    finished_at: Optional[int] = None


class GameSummary(CamelModel):
    id: str
    status: GameStatus
    language: str
    player_ids: List[str] = []
