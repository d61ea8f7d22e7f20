from __future__ import annotations

import random

import pytest

from skyjosim.engine.player import Player
from skyjosim.engine.process import Process
from skyjosim.engine.round import Round
from skyjosim.engine.strategy import BASIC_STRATEGY, get_strategy
from skyjosim.engine.types import Card, InvariantViolation, PlacementError


def _cards(values: list[int], revealed: set[int]) -> list[Card | None]:
    return [Card(value=v, revealed=i in revealed) for i, v in enumerate(values)]


def _setup(deck: list[int], discard: list[int], grid: list[int], revealed: set[int]) -> tuple[Round, Player]:
    player = Player(name="A", strategy=BASIC_STRATEGY, cards=_cards(grid, revealed))
    rnd = Round(players=[player], seed=0, rng=random.Random(0))
    rnd.deck = [Card(value=v) for v in deck]
    rnd.discard_pile = [Card(value=v, revealed=True) for v in discard]
    return rnd, player


def _turn(rnd: Round, player: Player) -> Process:
    return Process("turn", player.play(rnd))


def test_low_discard_is_taken_and_deck_untouched() -> None:
    grid = [10, 1, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5]
    rnd, player = _setup(deck=[7, 8, 9], discard=[11, 2], grid=grid, revealed={0, 1})
    deck_before = list(rnd.deck)

    proc = _turn(rnd, player)
    first = proc.advance()
    assert first.label == "A takes discard"
    assert rnd.picked_card is not None and rnd.picked_card.value == 2

    proc.run_to_end()
    assert rnd.deck == deck_before
    assert not any(c.revealed for c in rnd.deck)
    # the revealed 10 is worth swapping out
    slot0 = player.cards[0]
    assert slot0 is not None and slot0.value == 2
    assert [c.value for c in rnd.discard_pile] == [11, 10]
    assert rnd.picked_card is None


def test_deck_path_keeps_small_card() -> None:
    grid = [1] * 12
    rnd, player = _setup(deck=[3, 4], discard=[8], grid=grid, revealed={0})

    proc = _turn(rnd, player)
    adv = proc.advance()
    assert adv.label == "A flips deck top"
    assert rnd.deck[-1].revealed
    assert rnd.picked_card is None

    adv = proc.advance()
    assert adv.label == "A takes deck top"
    assert rnd.picked_card is not None and rnd.picked_card.value == 4
    assert len(rnd.deck) == 1

    adv = proc.advance()
    assert adv.label == "A places card"
    assert adv.done
    # nothing revealed is above 3, so the first hidden slot is used
    placed = player.cards[1]
    assert placed is not None and placed.value == 4 and placed.revealed
    assert rnd.discard_pile[-1].value == 1
    assert rnd.discard_pile[-1].revealed


def test_deck_path_discards_big_card_and_reveals() -> None:
    grid = [6, 7, 8, 9, 1, 1, 1, 1, 1, 1, 1, 1]
    rnd, player = _setup(deck=[2, 9], discard=[6], grid=grid, revealed={0, 2})

    proc = _turn(rnd, player)
    labels = []
    while not proc.done:
        labels.append(proc.advance().label)
    assert labels == ["A flips deck top", "A takes deck top", "A discards drawn card", "A reveals a card"]
    assert rnd.discard_pile[-1].value == 9
    assert rnd.picked_card is None
    assert player.cards[1] is not None and player.cards[1].revealed
    assert player.hidden_slots() == list(range(3, 12))


def test_choose_slot_prefers_largest_revealed_above_threshold() -> None:
    grid = [5, 11, 8, 11, 0, 0, 0, 0, 0, 0, 0, 0]
    player = Player(name="A", strategy=BASIC_STRATEGY, cards=_cards(grid, {0, 1, 2, 3}))
    # ties keep slot order
    assert BASIC_STRATEGY.choose_slot(player, Card(value=4, revealed=True)) == 1


def test_big_held_card_goes_to_hidden_slot() -> None:
    grid = [2, 3, 1, 9, 9, 9, 9, 9, 9, 9, 9, 9]
    player = Player(name="A", strategy=BASIC_STRATEGY, cards=_cards(grid, {0, 1, 2}))
    assert BASIC_STRATEGY.choose_slot(player, Card(value=10, revealed=True)) == 3


def test_small_revealed_cards_are_not_swapped() -> None:
    grid = [3, 2, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7]
    player = Player(name="A", strategy=BASIC_STRATEGY, cards=_cards(grid, {0, 1}))
    assert BASIC_STRATEGY.choose_slot(player, Card(value=1, revealed=True)) == 2


def test_placement_without_hidden_slot_raises() -> None:
    grid = [1] * 12
    player = Player(name="A", strategy=BASIC_STRATEGY, cards=_cards(grid, set(range(12))))
    with pytest.raises(PlacementError):
        BASIC_STRATEGY.choose_slot(player, Card(value=5, revealed=True))


def test_reveal_without_hidden_slot_raises() -> None:
    grid = [1] * 12
    rnd, player = _setup(deck=[12], discard=[9], grid=grid, revealed=set(range(12)))
    with pytest.raises(PlacementError):
        _turn(rnd, player).run_to_end()


def test_flip_on_empty_deck_raises() -> None:
    rnd, player = _setup(deck=[], discard=[9], grid=[1] * 12, revealed=set())
    with pytest.raises(InvariantViolation):
        _turn(rnd, player).run_to_end()


def test_strategy_registry() -> None:
    assert get_strategy("BASIC_STRATEGY") is BASIC_STRATEGY
    with pytest.raises(ValueError):
        get_strategy("NOPE")
