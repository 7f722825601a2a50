"""Shared fixtures for the rules engine tests."""

from __future__ import annotations

import random

import pytest

from wordgame.dictionary import DictionaryIndex
from wordgame.game_logic import GameEngine

WORDS = [
    "AT", "TA", "ON", "NO", "TO", "AX", "EX", "QI",
    "ACT", "CAT", "OAT", "QUA", "TAX",
    "CATS", "COAT", "QUAT",
    "READING",
]


class FakeClock:
    """Epoch milliseconds that only move when told to."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


@pytest.fixture
def dictionary() -> DictionaryIndex:
    """Hand-picked English words, no file I/O."""
    return DictionaryIndex(words={"en": WORDS})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(dictionary, clock) -> GameEngine:
    return GameEngine(dictionary, clock=clock, rng=random.Random(1234))


@pytest.fixture
def game(engine):
    """Started two-player English game; alice to move."""
    g = engine.create_game("g1", "en", "alice", "Alice")
    engine.add_player(g, "bob", "Bob")
    engine.start_game(g)
    return g
