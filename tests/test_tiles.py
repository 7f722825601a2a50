"""Tests for tile sets and the bag."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from wordgame.errors import UnknownLanguage
from wordgame.schemas import Tile
from wordgame.tiles import TILE_SETS, create_bag, draw_tiles, letter_value, total_tiles


class TestTileSets:
    @pytest.mark.parametrize("language", sorted(TILE_SETS))
    def test_every_set_has_100_tiles(self, language: str) -> None:
        assert total_tiles(language) == 100
        assert len(create_bag(language)) == 100

    def test_bag_matches_distribution(self) -> None:
        bag = create_bag("en", random.Random(7))
        counts = Counter(t.letter for t in bag)
        assert counts == {letter: count for letter, (count, _) in TILE_SETS["en"].items()}

    def test_blanks_are_flagged(self) -> None:
        blanks = [t for t in create_bag("es") if t.is_blank]
        assert len(blanks) == 2
        assert all(t.letter == "" and t.value == 0 for t in blanks)

    def test_digraphs_are_single_tiles(self) -> None:
        letters = {t.letter for t in create_bag("es")}
        assert {"CH", "LL", "RR", "Ñ"} <= letters
        assert "L·L" in {t.letter for t in create_bag("ca")}

    def test_unknown_language(self) -> None:
        with pytest.raises(UnknownLanguage):
            create_bag("xx")

    def test_seeded_shuffle_is_reproducible(self) -> None:
        assert create_bag("en", random.Random(3)) == create_bag("en", random.Random(3))


class TestDrawTiles:
    def test_draws_from_the_end(self) -> None:
        bag = [Tile(letter=ch, value=1) for ch in "ABCDE"]
        drawn, remaining = draw_tiles(bag, 2)
        assert [t.letter for t in drawn] == ["E", "D"]
        assert [t.letter for t in remaining] == ["A", "B", "C"]

    def test_input_is_not_mutated(self) -> None:
        bag = [Tile(letter="A", value=1)]
        draw_tiles(bag, 1)
        assert len(bag) == 1

    def test_short_bag_gives_what_it_has(self) -> None:
        bag = [Tile(letter="A", value=1), Tile(letter="B", value=3)]
        drawn, remaining = draw_tiles(bag, 7)
        assert len(drawn) == 2
        assert remaining == []

    def test_empty_bag(self) -> None:
        assert draw_tiles([], 3) == ([], [])


class TestLetterValue:
    def test_known_letters(self) -> None:
        assert letter_value("Q", "en") == 10
        assert letter_value("Q", "es") == 5
        assert letter_value("NY", "ca") == 8

    def test_unknown_letter_is_zero(self) -> None:
        assert letter_value("Ñ", "en") == 0
        assert letter_value("A", "xx") == 0
