from __future__ import annotations

import logging
import traceback

import pygame  # type: ignore[import-not-found]

from skyjosim.engine.round import new_round

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_text
from .table import TableScene

logger = logging.getLogger(__name__)


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            # A table passed in by main() was validated when it was loaded
            if self.ctx.table is None:
                self.ctx.table = self.ctx.settings.load_table()
            table = self.ctx.table
            seed = self.ctx.seed if self.ctx.seed is not None else table.seed
            round_ = new_round(table.build_players(), seed=seed)
            logger.info("Starting round with seed %d", round_.seed)
            return SceneTransition(TableScene(self.ctx, round_))
        except Exception as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            logger.error("Boot failed: %s", e)
            h = self.ctx.screen.get_height()
            self._quit_button = Button(
                rect=pygame.Rect(20, h - 60, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((250, 250, 250))
        font = self.ctx.assets.fonts.big
        draw_text(screen, font, "Skyjo", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Booting... validating settings, dealing seats.", (20, 80))
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=(200, 40, 40))
            y = 120
            for line in self._error.splitlines()[:16]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:100], (20, y))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
