from __future__ import annotations
import random
from typing import Dict, List, Optional, Tuple

from .errors import UnknownLanguage
from .schemas import Tile

# letter -> (count, value). The empty letter is the blank. 100 tiles per set.
TILE_SETS: Dict[str, Dict[str, Tuple[int, int]]] = {
    'ca': {
        'A': (12, 1), 'B': (2, 3), 'C': (3, 2), 'Ç': (1, 6), 'D': (3, 2),
        'E': (13, 1), 'F': (1, 4), 'G': (2, 3), 'H': (1, 8), 'I': (8, 1),
        'J': (1, 8), 'L': (4, 1), 'L·L': (1, 8), 'M': (3, 2), 'N': (6, 1),
        'NY': (1, 8), 'O': (5, 1), 'P': (2, 3), 'Q': (1, 8), 'R': (8, 1),
        'S': (8, 1), 'T': (5, 1), 'U': (4, 1), 'V': (1, 4), 'X': (1, 8),
        'Z': (1, 10), '': (2, 0),
    },
    'en': {
        'A': (9, 1), 'B': (2, 3), 'C': (2, 3), 'D': (4, 2), 'E': (12, 1),
        'F': (2, 4), 'G': (3, 2), 'H': (2, 4), 'I': (9, 1), 'J': (1, 8),
        'K': (1, 5), 'L': (4, 1), 'M': (2, 3), 'N': (6, 1), 'O': (8, 1),
        'P': (2, 3), 'Q': (1, 10), 'R': (6, 1), 'S': (4, 1), 'T': (6, 1),
        'U': (4, 1), 'V': (2, 4), 'W': (2, 4), 'X': (1, 8), 'Y': (2, 4),
        'Z': (1, 10), '': (2, 0),
    },
    'es': {
        'A': (12, 1), 'B': (2, 3), 'C': (4, 3), 'CH': (1, 5), 'D': (5, 2),
        'E': (12, 1), 'F': (1, 4), 'G': (2, 2), 'H': (2, 4), 'I': (6, 1),
        'J': (1, 8), 'L': (4, 1), 'LL': (1, 8), 'M': (2, 3), 'N': (5, 1),
        'Ñ': (1, 8), 'O': (9, 1), 'P': (2, 3), 'Q': (1, 5), 'R': (5, 1),
        'RR': (1, 8), 'S': (6, 1), 'T': (4, 1), 'U': (5, 1), 'V': (1, 4),
        'X': (1, 8), 'Y': (1, 4), 'Z': (1, 10), '': (2, 0),
    },
}


def tile_set(language: str) -> Dict[str, Tuple[int, int]]:
    try:
        return TILE_SETS[language]
    except KeyError:
        raise UnknownLanguage(language) from None


def total_tiles(language: str) -> int:
    return sum(count for count, _ in tile_set(language).values())


def create_bag(language: str, rng: Optional[random.Random] = None) -> List[Tile]:
    """Expand the language's tile set into a shuffled list of tiles."""
    tiles = [
        Tile(letter=letter, value=value, is_blank=letter == '')
        for letter, (count, value) in tile_set(language).items()
        for _ in range(count)
    ]
    shuffle_tiles(tiles, rng)
    return tiles


def shuffle_tiles(tiles: List[Tile], rng: Optional[random.Random] = None) -> None:
    # random.shuffle is a Fisher-Yates shuffle
    (rng or random).shuffle(tiles)


def draw_tiles(bag: List[Tile], count: int) -> Tuple[List[Tile], List[Tile]]:
    """Take up to `count` tiles off the end of the bag.

    Returns (drawn, remaining); the input list is left untouched.
    """
    remaining = list(bag)
    drawn = []
    while len(drawn) < count and remaining:
        drawn.append(remaining.pop())
    return drawn, remaining


def letter_value(letter: str, language: str) -> int:
    return TILE_SETS.get(language, {}).get(letter, (0, 0))[1]
