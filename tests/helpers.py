from __future__ import annotations

from typing import Iterable, List, Optional

from wordgame.board import count_tiles
from wordgame.schemas import Game, PlacedTile, Tile


def _find(tiles: List[Tile], letter: str) -> Optional[int]:
    return next((i for i, t in enumerate(tiles) if t.letter == letter), None)


def rig_rack(game: Game, player_id: str, letters: Iterable[str]) -> None:
    """Give a player exactly `letters`, keeping every tile accounted for."""
    player = game.player(player_id)
    game.tile_bag.extend(player.tiles)
    player.tiles = []
    for letter in letters:
        idx = _find(game.tile_bag, letter)
        if idx is not None:
            player.tiles.append(game.tile_bag.pop(idx))
            continue
        other = next(p for p in game.players if p is not player and _find(p.tiles, letter) is not None)
        player.tiles.append(other.tiles.pop(_find(other.tiles, letter)))
        other.tiles.append(game.tile_bag.pop(0))


def tile_total(game: Game) -> int:
    return sum(len(p.tiles) for p in game.players) + len(game.tile_bag) + count_tiles(game.board)


def row_word(word: str, row: int, col: int) -> List[PlacedTile]:
    return [PlacedTile(row=row, col=col + i, letter=ch) for i, ch in enumerate(word)]


def col_word(word: str, row: int, col: int) -> List[PlacedTile]:
    return [PlacedTile(row=row + i, col=col, letter=ch) for i, ch in enumerate(word)]


def rack_letters(game: Game, player_id: str) -> List[str]:
    return sorted(t.letter for t in game.player(player_id).tiles)
