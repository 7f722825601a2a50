from __future__ import annotations
import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from ..schemas import Game

log = logging.getLogger("wordgame")

# (game_id, turn_start_time) -> awaitable; the turn start identifies the turn that expired
TimeoutCallback = Callable[[str, int], Awaitable[None]]


def seconds_left(game: Game, now_ms: Optional[int] = None) -> Optional[float]:
    """Seconds until the current turn expires, None when untimed."""
    if game.status != 'playing' or not game.time_limit or game.turn_start_time is None:
        return None
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    deadline = game.turn_start_time + game.time_limit * 1000
    return max(0.0, (deadline - now_ms) / 1000)


class TurnTimer:
    """One pending expiry task per timed game.

    Expiry only reports back through the callback; the caller turns it into
    an ordinary pass on the serialized path.
    """

    def __init__(self, on_timeout: TimeoutCallback, clock: Callable[[], int] = lambda: int(time.time() * 1000)):
        self.on_timeout = on_timeout
        self.clock = clock
        self._tasks: Dict[str, asyncio.Task] = {}

    def schedule(self, game: Game):
        self.cancel(game.id)
        delay = seconds_left(game, self.clock())
        if delay is None:
            return None
        task = asyncio.create_task(self._fire_after(game.id, game.turn_start_time, delay))
        self._tasks[game.id] = task
        return task

    def cancel(self, game_id: str):
        task = self._tasks.pop(game_id, None)
        if task and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def pending(self, game_id: str) -> bool:
        task = self._tasks.get(game_id)
        return bool(task and not task.done())

    def cancel_all(self):
        for game_id in list(self._tasks):
            self.cancel(game_id)

    async def _fire_after(self, game_id: str, turn_start_time: int, delay: float):
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            return
        if self._tasks.get(game_id) is asyncio.current_task():
            del self._tasks[game_id]
        log.info("Turn timer expired for game %s", game_id)
        await self.on_timeout(game_id, turn_start_time)
