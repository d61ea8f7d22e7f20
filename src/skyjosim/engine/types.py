from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

CardColor = Literal["purple", "cyan", "green", "yellow", "red"]

MIN_CARD_VALUE = -2
MAX_CARD_VALUE = 12

# Player grids are stored column by column, top to bottom:
# [col0row0, col0row1, col0row2, col1row0, ...]
GRID_COLUMNS = 4
GRID_ROWS = 3
GRID_SIZE = GRID_COLUMNS * GRID_ROWS

INITIAL_REVEALS = 2

# 10 copies of -1..12, plus 5 extra zeros and 5 extra -2.
DECK_SIZE = 14 * 10 + 5 + 5


class InvariantViolation(RuntimeError):
    pass


class PlacementError(InvariantViolation):
    pass


def card_color_for_value(value: int) -> CardColor:
    if -2 <= value <= -1:
        return "purple"
    if value == 0:
        return "cyan"
    if 1 <= value <= 4:
        return "green"
    if 5 <= value <= 8:
        return "yellow"
    if 9 <= value <= 12:
        return "red"
    raise ValueError(f"Card value out of range: {value}")


@dataclass(eq=False)
class Card:
    """A single card. Identity matters: two cards of equal value are distinct."""

    value: int
    revealed: bool = False
    color: CardColor = field(init=False)

    def __post_init__(self) -> None:
        self.color = card_color_for_value(self.value)

    def __setattr__(self, name: str, v: object) -> None:
        # value and color are set once; only `revealed` changes afterwards
        if name in ("value", "color") and name in self.__dict__:
            raise AttributeError(f"Card.{name} is read-only")
        super().__setattr__(name, v)

    def reveal(self) -> None:
        self.revealed = True

    @staticmethod
    def create_many(n: int, value: int) -> list["Card"]:
        return [Card(value=value) for _ in range(n)]


def build_deck() -> list[Card]:
    deck: list[Card] = []
    for value in range(-1, MAX_CARD_VALUE + 1):
        deck.extend(Card.create_many(n=10, value=value))
    deck.extend(Card.create_many(n=5, value=0))
    deck.extend(Card.create_many(n=5, value=-2))
    return deck
