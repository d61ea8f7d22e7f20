from __future__ import annotations

from .player import Player
from .round import Round
from .types import Card

PILE_PREVIEW = 5


def card_to_dict(c: Card | None) -> dict[str, object] | None:
    if c is None:
        return None
    return {"value": c.value, "revealed": c.revealed, "color": c.color}


def _pile_to_dict(pile: list[Card]) -> dict[str, object]:
    return {"size": len(pile), "top": [card_to_dict(c) for c in pile[-PILE_PREVIEW:]]}


def _player_to_dict(p: Player) -> dict[str, object]:
    return {
        "name": p.name,
        "strategy": p.strategy.name,
        "cards": [card_to_dict(c) for c in p.cards],
        "revealed_card_sum": p.revealed_card_sum(),
    }


def snapshot(round_: Round) -> dict[str, object]:
    """Return a JSON-serializable view of everything a renderer needs."""
    return {
        "seed": round_.seed,
        "finished": round_.finished,
        "deck": _pile_to_dict(round_.deck),
        "discard_pile": _pile_to_dict(round_.discard_pile),
        "picked_card": card_to_dict(round_.picked_card),
        "players": [_player_to_dict(p) for p in round_.players],
        "winner": round_.winner.name if round_.winner is not None else None,
        "card_count": round_.card_count(),
    }
