from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from ..logs import trace
from .player import Player, column_slots
from .process import Process, Step
from .types import GRID_SIZE, INITIAL_REVEALS, Card, InvariantViolation, build_deck

logger = logging.getLogger(__name__)

Event = dict[str, object]


@dataclass(eq=False)
class Round:
    """One round of play: the piles, the seats and the held card.

    Piles keep their top card at the end of the list: peek with `pile[-1]`,
    take with `pile.pop()`, add with `pile.append()`.
    """

    players: list[Player]
    seed: int
    rng: random.Random
    deck: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    finished: bool = False
    picked_card: Card | None = None
    ranking: list[Player] = field(default_factory=list)
    winner: Player | None = None
    event_log: list[Event] = field(default_factory=list)

    # -- piles and held card -------------------------------------------------

    def peek_deck(self) -> Card | None:
        return self.deck[-1] if self.deck else None

    def peek_discard(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    def draw_from_deck(self) -> Card:
        if not self.deck:
            raise InvariantViolation("Cannot draw from an empty deck")
        return self.deck.pop()

    def draw_from_discard(self) -> Card:
        if not self.discard_pile:
            raise InvariantViolation("Cannot draw from an empty discard pile")
        return self.discard_pile.pop()

    def discard(self, card: Card) -> None:
        card.reveal()
        self.discard_pile.append(card)

    def pick_card(self, card: Card) -> None:
        if self.picked_card is not None:
            raise InvariantViolation("Round.picked_card is already holding a card")
        self.picked_card = card

    def take_picked_card(self) -> Card:
        if self.picked_card is None:
            raise InvariantViolation("Round.picked_card is None")
        card = self.picked_card
        self.picked_card = None
        return card

    def card_count(self) -> int:
        return (
            len(self.deck)
            + len(self.discard_pile)
            + (1 if self.picked_card is not None else 0)
            + sum(p.card_count() for p in self.players)
        )

    def scores(self) -> dict[str, int]:
        return {p.name: p.revealed_card_sum() for p in self.players}

    # -- initialization ------------------------------------------------------

    def initialize(self) -> Process:
        steps = [Step("build deck", self._build_deck)]
        for _ in range(GRID_SIZE):
            for player in self.players:
                steps.append(Step(f"deal {player.name}", lambda p=player: self._deal_one(p)))
        for player in self.players:
            for _ in range(INITIAL_REVEALS):
                steps.append(Step(f"reveal {player.name}", lambda p=player: self._reveal_random(p)))
        steps.append(Step("start discard pile", self._start_discard_pile))
        return Process("initialize", steps)

    def _build_deck(self) -> None:
        trace(logger, "Creating a brand new deck of cards")
        self.deck = build_deck()
        self.discard_pile = []
        self.picked_card = None
        self.finished = False
        self.ranking = []
        self.winner = None
        self.event_log = []

        trace(logger, "Shuffling deck")
        self.rng.shuffle(self.deck)

        trace(logger, "Dealing cards to the players")
        for player in self.players:
            player.cards = []
        self.event_log.append({"type": "DECK_BUILT", "size": len(self.deck)})

    def _deal_one(self, player: Player) -> None:
        player.cards.append(self.draw_from_deck())

    def _reveal_random(self, player: Player) -> None:
        hidden = player.hidden_slots()
        if not hidden:
            raise InvariantViolation(f"Player {player.name} has no hidden card to reveal")
        slot = self.rng.choice(hidden)
        card = player.cards[slot]
        assert card is not None
        card.reveal()
        trace(logger, "Player %s reveals slot %d (%d)", player.name, slot, card.value)
        self.event_log.append({"type": "CARD_REVEALED", "player": player.name, "slot": slot, "value": card.value})

    def _start_discard_pile(self) -> None:
        trace(logger, "One card is turned from the deck to the discard pile")
        card = self.draw_from_deck()
        self.discard(card)
        self.event_log.append({"type": "DISCARD_STARTED", "value": card.value})

    # -- play ----------------------------------------------------------------

    def play(self) -> Process:
        return Process("play", [self._turn_step(0)])

    def _turn_step(self, index: int) -> Step:
        return Step(f"turn {self.players[index].name}", lambda: self._begin_turn(index))

    def _begin_turn(self, index: int) -> list[Step]:
        player = self.players[index]
        if not self.deck:
            logger.error("Deck is empty")
            self.event_log.append({"type": "ROUND_STOPPED", "reason": "deck_empty"})
            return self._final_steps()
        if not player.has_cards():
            logger.error("No cards left for player %s", player.name)
            self.event_log.append({"type": "ROUND_STOPPED", "reason": "no_cards", "player": player.name})
            return self._final_steps()

        if self.picked_card is not None:
            raise InvariantViolation(f"Turn of {player.name} started while a card is held")
        self.event_log.append({"type": "TURN_STARTED", "player": player.name})
        return [*player.play(self), Step(f"end turn {player.name}", lambda: self._end_turn(index))]

    def _end_turn(self, index: int) -> list[Step]:
        if self.picked_card is not None:
            raise InvariantViolation(f"Turn of {self.players[index].name} ended while holding a card")
        player = self.players[index]
        result = player.check_full_column()
        if not result.has_full_column:
            return self._close_turn(index)

        col = result.full_column_index
        first = player.cards[column_slots(col)[0]]
        assert first is not None
        logger.info("Full column %d for player %s (value %d)", col, player.name, first.value)
        self.event_log.append({"type": "COLUMN_CLEARED", "player": player.name, "column": col, "value": first.value})
        steps = [
            Step(f"clear {player.name} slot {slot}", lambda s=slot: self._clear_slot(player, s))
            for slot in column_slots(col)
        ]
        steps.append(Step(f"close turn {player.name}", lambda: self._close_turn(index)))
        return steps

    def _clear_slot(self, player: Player, slot: int) -> None:
        card = player.cards[slot]
        if card is None:
            raise InvariantViolation(f"Slot {slot} of player {player.name} is already empty")
        trace(logger, "Clearing %s slot %d (%d)", player.name, slot, card.value)
        self.discard(card)
        player.cards[slot] = None

    def _close_turn(self, index: int) -> list[Step]:
        player = self.players[index]
        if player.has_revealed_all_cards() and not self.finished:
            logger.info("Player %s has revealed all of their cards, finishing the round", player.name)
            self.event_log.append({"type": "PLAYER_FINISHED", "player": player.name})
            self.finished = True

        if index + 1 < len(self.players):
            return [self._turn_step(index + 1)]
        if self.finished or not self.deck:
            return self._final_steps()
        return [self._turn_step(0)]

    def _final_steps(self) -> list[Step]:
        if not self.finished:
            return []
        remaining = [c for p in self.players for c in p.cards if c is not None and not c.revealed]
        logger.info("Revealing %d remaining cards", len(remaining))
        steps = [Step("reveal remaining", lambda c=card: self._reveal_remaining(c)) for card in remaining]
        steps.append(Step("rank players", self._rank_players))
        return steps

    def _reveal_remaining(self, card: Card) -> None:
        trace(logger, "Revealed %d", card.value)
        card.reveal()

    def _rank_players(self) -> None:
        # sorted() is stable: earlier seats win ties
        self.ranking = sorted(self.players, key=lambda p: p.revealed_card_sum())
        self.winner = self.ranking[0]
        logger.info("Game finished, player %s won", self.winner.name)
        self.event_log.append({"type": "ROUND_ENDED", "winner": self.winner.name, "scores": self.scores()})


def new_round(players: Sequence[Player], seed: int | None = None) -> Round:
    if not players:
        raise ValueError("A round needs at least one player.")
    if seed is None:
        seed = random.randrange(2**31)
    return Round(players=list(players), seed=seed, rng=random.Random(seed))
