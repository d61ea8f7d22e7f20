"""Headless, step-driven rules engine for skyjo-sim.

IMPORTANT: This package must never import pygame.
"""

from .driver import Phase, RoundDriver, run_round
from .player import ColumnCheck, Player
from .process import Advance, Process, Step
from .round import Round, new_round
from .strategy import BASIC_STRATEGY, BasicStrategy, Strategy, get_strategy
from .types import Card, InvariantViolation, PlacementError, build_deck, card_color_for_value

__all__ = [
    "Advance",
    "BASIC_STRATEGY",
    "BasicStrategy",
    "Card",
    "ColumnCheck",
    "InvariantViolation",
    "Phase",
    "PlacementError",
    "Player",
    "Process",
    "Round",
    "RoundDriver",
    "Step",
    "Strategy",
    "build_deck",
    "card_color_for_value",
    "get_strategy",
    "new_round",
    "run_round",
]
