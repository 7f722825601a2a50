from __future__ import annotations
from typing import Dict, List, Optional

from ..schemas import Game, GameSummary


class GameStore:
    """In-memory persistence. Games are kept as opaque JSON blobs; only the
    summary fields are indexed."""

    def __init__(self):
        self._blobs: Dict[str, str] = {}
        self._index: Dict[str, GameSummary] = {}

    def save(self, game: Game) -> None:
        self._blobs[game.id] = game.model_dump_json(by_alias=True)
        self._index[game.id] = GameSummary(
            id=game.id,
            status=game.status,
            language=game.language,
            player_ids=[p.id for p in game.players],
        )

    def load(self, game_id: str) -> Optional[Game]:
        blob = self._blobs.get(game_id)
        if blob is None:
            return None
        return Game.model_validate_json(blob)

    def games_for_player(self, player_id: str) -> List[GameSummary]:
        return [s for s in self._index.values() if player_id in s.player_ids]
