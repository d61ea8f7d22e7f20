from __future__ import annotations

import json

import pytest

from skyjosim.engine.driver import Phase, RoundDriver, run_round
from skyjosim.engine.player import Player
from skyjosim.engine.round import new_round
from skyjosim.engine.serialize import snapshot
from skyjosim.engine.strategy import BASIC_STRATEGY


def _round(seed: int):
    players = [Player(name="A", strategy=BASIC_STRATEGY), Player(name="B", strategy=BASIC_STRATEGY)]
    return new_round(players, seed=seed)


@pytest.mark.parametrize("seed", [1, 42, 424242])
def test_seeded_round_plays_to_a_winner(seed: int) -> None:
    rnd = _round(seed)
    driver = run_round(rnd)

    assert driver.phase is Phase.FINISHED
    assert rnd.finished
    assert all(c is None or c.revealed for p in rnd.players for c in p.cards)
    assert rnd.picked_card is None
    lowest = min(p.revealed_card_sum() for p in rnd.players)
    assert rnd.winner is not None
    assert rnd.winner.revealed_card_sum() == lowest
    assert rnd.winner is rnd.ranking[0]


def test_same_seed_same_round() -> None:
    first = _round(424242)
    second = _round(424242)
    d1 = RoundDriver(first)
    d2 = RoundDriver(second)
    while not d1.done:
        d1.tick()
        d2.tick()
        assert snapshot(first) == snapshot(second)
    assert d2.done
    assert first.event_log == second.event_log


def test_driver_phases() -> None:
    rnd = _round(9)
    driver = RoundDriver(rnd)
    assert driver.phase is Phase.UNSTARTED
    driver.tick()
    assert driver.phase is Phase.INITIALIZING
    assert rnd.deck == []
    while driver.phase is Phase.INITIALIZING:
        driver.tick()
    assert driver.phase is Phase.PLAYING
    assert len(rnd.discard_pile) == 1
    while not driver.done:
        driver.tick()
    assert driver.tick().done


def test_snapshot_is_json_serializable() -> None:
    rnd = _round(5)
    driver = RoundDriver(rnd)
    for _ in range(40):
        driver.tick()
    snap = snapshot(rnd)
    json.dumps(snap)
    assert snap["card_count"] == 150
    deck = snap["deck"]
    assert isinstance(deck, dict)
    assert len(deck["top"]) == 5
    players = snap["players"]
    assert isinstance(players, list)
    assert players[0]["name"] == "A"
    assert players[0]["strategy"] == "BASIC_STRATEGY"
