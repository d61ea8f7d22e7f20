from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    card: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    def __init__(self) -> None:
        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            card=pygame.font.SysFont(None, 26, bold=True),
            big=pygame.font.SysFont(None, 34),
        )
