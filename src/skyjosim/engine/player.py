from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .process import Step
from .types import GRID_COLUMNS, GRID_ROWS, Card

if TYPE_CHECKING:
    from .round import Round
    from .strategy import Strategy


@dataclass(frozen=True)
class ColumnCheck:
    has_full_column: bool = False
    full_column_index: int = -1


def column_slots(col: int) -> range:
    offset = col * GRID_ROWS
    return range(offset, offset + GRID_ROWS)


@dataclass(eq=False)
class Player:
    name: str
    strategy: "Strategy"
    cards: list[Card | None] = field(default_factory=list)

    def play(self, round_: "Round") -> list[Step]:
        return list(self.strategy.take_turn(round_, self))

    def has_cards(self) -> bool:
        return any(c is not None for c in self.cards)

    def card_count(self) -> int:
        return sum(1 for c in self.cards if c is not None)

    def revealed_card_sum(self) -> int:
        return sum(c.value for c in self.cards if c is not None and c.revealed)

    def has_revealed_all_cards(self) -> bool:
        return all(c.revealed for c in self.cards if c is not None)

    def hidden_slots(self) -> list[int]:
        return [i for i, c in enumerate(self.cards) if c is not None and not c.revealed]

    def check_full_column(self) -> ColumnCheck:
        """Find a column of three revealed cards of equal value.

        Empty and face-down slots read as unknown (None) and never complete a
        column. When several columns qualify, the last one wins.
        """
        result = ColumnCheck()
        for col in range(GRID_COLUMNS):
            values: list[int | None] = []
            for slot in column_slots(col):
                c = self.cards[slot] if slot < len(self.cards) else None
                values.append(c.value if c is not None and c.revealed else None)
            if values[0] is not None and all(v == values[0] for v in values):
                result = ColumnCheck(has_full_column=True, full_column_index=col)
        return result
