from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from skyjosim.engine.driver import Phase, RoundDriver
from skyjosim.engine.player import Player
from skyjosim.engine.round import Round
from skyjosim.engine.types import GRID_COLUMNS, GRID_ROWS, Card

from ..app import GameContext, SceneTransition
from ..ui import CARD_HEIGHT, CARD_WIDTH, draw_card, draw_text

PILE_PREVIEW = 5
SEAT_WIDTH = GRID_COLUMNS * (CARD_WIDTH + 8) + 40
SEAT_HEIGHT = GRID_ROWS * (CARD_HEIGHT + 8) + 40


class TableScene:
    """Watches a round play itself, one engine step per frame.

    Click to force an extra step, Space to pause.
    """

    def __init__(self, ctx: GameContext, round_: Round) -> None:
        self.ctx = ctx
        self.round = round_
        self.driver = RoundDriver(round_)
        self.paused = False
        self._last_label: str | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._tick()
        if event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
            self.paused = not self.paused

    def _tick(self) -> None:
        if self.driver.done:
            return
        adv = self.driver.tick()
        if adv.label is not None:
            self._last_label = adv.label

    def update(self, dt: float) -> SceneTransition | None:
        if not self.paused:
            self._tick()
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((250, 250, 250))
        fonts = self.ctx.assets.fonts
        width = screen.get_width()

        self._draw_pile(screen, self.round.deck, (width // 2 - 50, 70))
        self._draw_pile(screen, self.round.discard_pile, (width // 2 + 50, 70))
        draw_card(screen, fonts.card, self.round.picked_card, (width // 2, 150))

        per_row = max(1, (width - 20) // SEAT_WIDTH)
        for i, player in enumerate(self.round.players):
            x = 20 + (i % per_row) * SEAT_WIDTH
            y = 200 + (i // per_row) * SEAT_HEIGHT
            self._draw_seat(screen, player, (x, y))

        status = self.driver.phase.value
        if self.paused:
            status += " (paused)"
        if self._last_label:
            status += f" - {self._last_label}"
        draw_text(screen, fonts.small, status, (10, 10), color=(90, 90, 90))
        draw_text(screen, fonts.small, f"seed {self.round.seed}", (10, 28), color=(90, 90, 90))

        if self.driver.phase is Phase.FINISHED:
            self._draw_outcome(screen)

    def _draw_pile(self, screen: pygame.Surface, pile: list[Card], center: tuple[int, int]) -> None:
        font = self.ctx.assets.fonts.card
        if not pile:
            draw_card(screen, font, None, center)
            return
        x, y = center
        for card in pile[-PILE_PREVIEW:]:
            y -= 3
            draw_card(screen, font, card, (x, y))

    def _draw_seat(self, screen: pygame.Surface, player: Player, origin: tuple[int, int]) -> None:
        fonts = self.ctx.assets.fonts
        x0, y0 = origin
        draw_text(screen, fonts.ui, f"{player.name}: {player.revealed_card_sum()}", (x0, y0))
        for col in range(GRID_COLUMNS):
            for row in range(GRID_ROWS):
                slot = col * GRID_ROWS + row
                card = player.cards[slot] if slot < len(player.cards) else None
                cx = x0 + CARD_WIDTH // 2 + col * (CARD_WIDTH + 8)
                cy = y0 + 30 + CARD_HEIGHT // 2 + row * (CARD_HEIGHT + 8)
                draw_card(screen, fonts.card, card, (cx, cy))

    def _draw_outcome(self, screen: pygame.Surface) -> None:
        font = self.ctx.assets.fonts.big
        width = screen.get_width()
        winner = self.round.winner
        if winner is None:
            text, color = "Round stopped without a winner", (200, 60, 60)
        else:
            text, color = f"Player {winner.name} won", (40, 140, 60)
        img = font.render(text, True, color)
        screen.blit(img, img.get_rect(midtop=(width // 2, 10)).topleft)
