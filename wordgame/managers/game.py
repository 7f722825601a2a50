from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..errors import GameExists, GameNotFound
from ..game_logic import GameEngine
from ..schemas import Game, GameOptions, GameSummary, GameView, MoveResult
from .store import GameStore
from .timer import TurnTimer

log = logging.getLogger("wordgame")


def player_room(game_id: str, player_id: str) -> str:
    return f'{game_id}:{player_id}'


class GameManager:
    """Owns the live games of this process.

    Every operation on a game runs under that game's lock, and each
    mutation is followed by persist, timer re-arm and broadcast of the
    per-player views before the lock is released.
    """

    def __init__(self, sio, engine: GameEngine, store: Optional[GameStore] = None):
        self.sio = sio
        self.engine = engine
        self.store = store or GameStore()
        self.timer = TurnTimer(self.on_turn_timeout, clock=engine.clock)
        self.games: Dict[str, Game] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock(self, game_id: str) -> asyncio.Lock:
        if game_id not in self._locks:
            self._locks[game_id] = asyncio.Lock()
        return self._locks[game_id]

    def get(self, game_id: str) -> Game:
        game = self.games.get(game_id)
        if game is None:
            game = self.store.load(game_id)
            if game is None:
                raise GameNotFound()
            self.games[game_id] = game
        return game

    async def _mutate(self, game_id: str, op: Callable[[Game], Any]):
        async with self._lock(game_id):
            game = self.get(game_id)
            result = op(game)
            await self._publish(game)
            return result

    async def _publish(self, game: Game):
        self.store.save(game)
        if game.status == 'finished':
            self.timer.cancel(game.id)
        else:
            self.timer.schedule(game)
        for p in game.players:
            view = self.engine.get_state_for_player(game, p.id)
            await self.sio.emit('game:state', view.model_dump(by_alias=True, mode='json'), room=player_room(game.id, p.id))

    # Operations

    async def create_game(self, game_id: str, language: str, player_id: str, player_name: str,
                          options: Optional[GameOptions] = None) -> Game:
        async with self._lock(game_id):
            if game_id in self.games or self.store.load(game_id) is not None:
                raise GameExists()
            game = self.engine.create_game(game_id, language, player_id, player_name, options)
            self.games[game_id] = game
            await self._publish(game)
            log.info("Game %s created by %s (%s)", game_id, player_id, language)
            return game

    async def join_game(self, game_id: str, player_id: str, player_name: str) -> Game:
        return await self._mutate(game_id, lambda g: self.engine.add_player(g, player_id, player_name))

    async def start_game(self, game_id: str) -> Game:
        return await self._mutate(game_id, self.engine.start_game)

    async def make_move(self, game_id: str, player_id: str, tiles: Sequence[Any]) -> MoveResult:
        return await self._mutate(game_id, lambda g: self.engine.make_move(g, player_id, tiles))

    async def pass_turn(self, game_id: str, player_id: str) -> Game:
        return await self._mutate(game_id, lambda g: self.engine.pass_turn(g, player_id))

    async def exchange_tiles(self, game_id: str, player_id: str, letters: Sequence[str]) -> Game:
        return await self._mutate(game_id, lambda g: self.engine.exchange_tiles(g, player_id, letters))

    async def set_connected(self, game_id: str, player_id: str, connected: bool) -> Game:
        return await self._mutate(game_id, lambda g: self.engine.set_connected(g, player_id, connected))

    async def state_for(self, game_id: str, player_id: str) -> GameView:
        async with self._lock(game_id):
            return self.engine.get_state_for_player(self.get(game_id), player_id)

    def games_for_player(self, player_id: str) -> List[GameSummary]:
        return self.store.games_for_player(player_id)

    async def on_turn_timeout(self, game_id: str, turn_start_time: int):
        async with self._lock(game_id):
            game = self.get(game_id)
            # The turn may have ended while the timer was waiting for the lock
            if game.status != 'playing' or game.turn_start_time != turn_start_time:
                return
            player = game.current_player
            log.info("Game %s: %s ran out of time", game_id, player.id)
            self.engine.pass_turn(game, player.id)
            await self._publish(game)
