from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

from ..logs import trace
from .process import Step
from .types import Card, InvariantViolation, PlacementError

if TYPE_CHECKING:
    from .player import Player
    from .round import Round

logger = logging.getLogger(__name__)


class Strategy(Protocol):
    name: str

    def take_turn(self, round_: "Round", player: "Player") -> Sequence[Step]: ...


@dataclass(frozen=True)
class BasicStrategy:
    """Greedy single-turn play.

    take_discard_max: take the discard top when it is at most this value.
    keep_drawn_max: a card drawn from the deck above this value is thrown away.
    replace_above: only swap out a revealed card worth more than this.
    """

    name: str = "BASIC_STRATEGY"
    take_discard_max: int = 3
    keep_drawn_max: int = 5
    replace_above: int = 3

    def take_turn(self, round_: "Round", player: "Player") -> Sequence[Step]:
        top = round_.peek_discard()
        if top is not None and top.value <= self.take_discard_max:
            return [Step(f"{player.name} takes discard", lambda: self._take_discard(round_, player))]
        return [Step(f"{player.name} flips deck top", lambda: self._flip_deck_top(round_, player))]

    def choose_slot(self, player: "Player", held: Card) -> int:
        """Slot the held card goes to: the biggest revealed card worth swapping, else the first hidden slot."""
        bigger = [
            (slot, c)
            for slot, c in enumerate(player.cards)
            if c is not None and c.revealed and c.value > held.value
        ]
        bigger.sort(key=lambda sc: sc[1].value, reverse=True)
        trace(logger, "Revealed cards above %d: %s", held.value, [c.value for _, c in bigger])
        if bigger and bigger[0][1].value > self.replace_above:
            return bigger[0][0]

        hidden = player.hidden_slots()
        if not hidden:
            raise PlacementError(f"Player {player.name} has no slot to place a {held.value}")
        return hidden[0]

    def _take_discard(self, round_: "Round", player: "Player") -> list[Step]:
        round_.pick_card(round_.draw_from_discard())
        assert round_.picked_card is not None
        trace(logger, "Card taken from discard pile: %d", round_.picked_card.value)
        round_.event_log.append(
            {"type": "CARD_PICKED", "player": player.name, "source": "discard", "value": round_.picked_card.value}
        )
        return [self._place_step(round_, player)]

    def _flip_deck_top(self, round_: "Round", player: "Player") -> list[Step]:
        top = round_.peek_deck()
        if top is None:
            raise InvariantViolation("Cannot flip the top of an empty deck")
        top.reveal()
        return [Step(f"{player.name} takes deck top", lambda: self._take_deck_top(round_, player))]

    def _take_deck_top(self, round_: "Round", player: "Player") -> list[Step]:
        round_.pick_card(round_.draw_from_deck())
        card = round_.picked_card
        assert card is not None
        round_.event_log.append({"type": "CARD_PICKED", "player": player.name, "source": "deck", "value": card.value})
        if card.value <= self.keep_drawn_max:
            trace(logger, "Card taken from deck: %d", card.value)
            return [self._place_step(round_, player)]

        trace(logger, "Card picked from deck is too big to be profitable, discarding it")
        return [
            Step(f"{player.name} discards drawn card", lambda: self._discard_picked(round_, player)),
            Step(f"{player.name} reveals a card", lambda: self._reveal_first_hidden(round_, player)),
        ]

    def _place_step(self, round_: "Round", player: "Player") -> Step:
        return Step(f"{player.name} places card", lambda: self._place_picked(round_, player))

    def _place_picked(self, round_: "Round", player: "Player") -> None:
        if round_.picked_card is None:
            raise InvariantViolation("Nothing to place: Round.picked_card is None")
        slot = self.choose_slot(player, round_.picked_card)
        displaced = player.cards[slot]
        if displaced is None:
            raise PlacementError(f"Slot {slot} of player {player.name} is empty")
        trace(logger, "Placing %d at slot %d over %d", round_.picked_card.value, slot, displaced.value)
        round_.discard(displaced)
        card = round_.take_picked_card()
        player.cards[slot] = card
        round_.event_log.append(
            {"type": "CARD_PLACED", "player": player.name, "slot": slot, "value": card.value, "replaced": displaced.value}
        )

    def _discard_picked(self, round_: "Round", player: "Player") -> None:
        card = round_.take_picked_card()
        round_.discard(card)
        round_.event_log.append({"type": "CARD_DISCARDED", "player": player.name, "value": card.value})

    def _reveal_first_hidden(self, round_: "Round", player: "Player") -> None:
        hidden = player.hidden_slots()
        if not hidden:
            raise PlacementError(f"Player {player.name} has no hidden card to reveal")
        slot = hidden[0]
        card = player.cards[slot]
        assert card is not None
        logger.info("Revealing player %s card with value %d", player.name, card.value)
        card.reveal()
        round_.event_log.append({"type": "CARD_REVEALED", "player": player.name, "slot": slot, "value": card.value})


BASIC_STRATEGY = BasicStrategy()

STRATEGIES: dict[str, Strategy] = {BASIC_STRATEGY.name: BASIC_STRATEGY}


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError as e:
        raise ValueError(f"Unknown strategy: {name}") from e
