"""Tests for the session layer: locking, persistence, broadcast, timers."""

from __future__ import annotations

import asyncio

import pytest
from helpers import rig_rack, row_word

from wordgame import errors
from wordgame.managers.game import GameManager, player_room
from wordgame.managers.store import GameStore
from wordgame.managers.timer import seconds_left
from wordgame.schemas import GameOptions


class FakeSio:
    def __init__(self):
        self.emitted = []

    async def emit(self, event, data=None, room=None, to=None):
        self.emitted.append((event, data, room or to))

    def states_for(self, room):
        return [data for event, data, target in self.emitted if event == "game:state" and target == room]


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def sio() -> FakeSio:
    return FakeSio()


@pytest.fixture
def manager(sio, engine) -> GameManager:
    return GameManager(sio, engine)


async def _two_player_game(manager, options=None):
    await manager.create_game("g1", "en", "alice", "Alice", options)
    await manager.join_game("g1", "bob", "Bob")
    await manager.start_game("g1")
    return manager.get("g1")


def test_each_player_gets_their_own_view(manager, sio) -> None:
    run(_two_player_game(manager))
    alice_view = sio.states_for(player_room("g1", "alice"))[-1]
    bob_view = sio.states_for(player_room("g1", "bob"))[-1]

    assert alice_view["status"] == "playing"
    assert "tileBag" not in alice_view
    assert alice_view["players"][1]["tiles"][0] == {"hidden": True}
    assert bob_view["players"][0]["tiles"][0] == {"hidden": True}
    assert "letter" in bob_view["players"][1]["tiles"][0]


def test_mutations_are_persisted(manager) -> None:
    game = run(_two_player_game(manager))
    stored = manager.store.load("g1")
    assert stored == game
    assert stored is not game
    assert [s.id for s in manager.games_for_player("bob")] == ["g1"]
    assert manager.games_for_player("carol") == []


def test_games_are_reloaded_from_the_store(sio, engine) -> None:
    store = GameStore()
    first = GameManager(sio, engine, store)
    run(_two_player_game(first))

    second = GameManager(sio, engine, store)
    run(second.pass_turn("g1", "alice"))
    assert second.get("g1").current_player_index == 1


def test_rejected_operation_is_not_published(manager, sio) -> None:
    run(_two_player_game(manager))
    count = len(sio.emitted)
    with pytest.raises(errors.NotYourTurn):
        run(manager.pass_turn("g1", "bob"))
    assert len(sio.emitted) == count


def test_unknown_game(manager) -> None:
    with pytest.raises(errors.GameNotFound):
        run(manager.state_for("nope", "alice"))


def test_duplicate_game_id(manager) -> None:
    run(manager.create_game("g1", "en", "alice", "Alice"))
    with pytest.raises(errors.GameExists):
        run(manager.create_game("g1", "en", "bob", "Bob"))


def test_move_through_manager(manager) -> None:
    async def scenario():
        game = await _two_player_game(manager)
        rig_rack(game, "alice", "CATEROS")
        return await manager.make_move("g1", "alice", [t.model_dump() for t in row_word("CAT", 7, 7)])

    result = run(scenario())
    assert result.score == 10
    assert manager.store.load("g1").board[7][7] == "C"


def test_concurrent_operations_are_serialized(manager) -> None:
    async def scenario():
        await _two_player_game(manager)
        # Both claim alice's turn; exactly one can win it
        return await asyncio.gather(
            manager.pass_turn("g1", "alice"),
            manager.pass_turn("g1", "alice"),
            return_exceptions=True,
        )

    results = run(scenario())
    assert sum(isinstance(r, errors.NotYourTurn) for r in results) == 1
    assert manager.get("g1").pass_count == 1


class TestTurnTimer:
    def test_untimed_game_has_no_timer(self, manager) -> None:
        async def scenario():
            await _two_player_game(manager)
            return manager.timer.pending("g1")

        assert run(scenario()) is False

    def test_seconds_left(self, engine, clock) -> None:
        g = engine.create_game("g", "en", "alice", "Alice", GameOptions(time_limit=60))
        assert seconds_left(g, clock.now) is None
        engine.add_player(g, "bob", "Bob")
        engine.start_game(g)
        clock.advance(15)
        assert seconds_left(g, clock.now) == 45
        clock.advance(100)
        assert seconds_left(g, clock.now) == 0

    def test_expiry_passes_the_turn(self, manager, clock) -> None:
        async def scenario():
            game = await _two_player_game(manager, GameOptions(time_limit=30))
            assert manager.timer.pending("g1")
            clock.advance(30)
            manager.timer.schedule(game)
            await asyncio.sleep(0.05)
            return manager.get("g1")

        game = run(scenario())
        assert game.current_player_index == 1
        assert game.pass_count == 1
        assert game.move_history[-1].type == "pass"
        assert game.move_history[-1].player_id == "alice"

    def test_stale_expiry_is_ignored(self, manager, clock) -> None:
        async def scenario():
            game = await _two_player_game(manager, GameOptions(time_limit=30))
            started = game.turn_start_time
            clock.advance(10)
            await manager.pass_turn("g1", "alice")
            await manager.on_turn_timeout("g1", started)
            manager.timer.cancel_all()
            return manager.get("g1")

        game = run(scenario())
        assert game.current_player_index == 1
        assert game.pass_count == 1
