from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from skyjosim.engine.types import Card, CardColor

Color = tuple[int, int, int]

CARD_COLORS: dict[CardColor, Color] = {
    "purple": (128, 60, 160),
    "cyan": (40, 190, 210),
    "green": (70, 170, 80),
    "yellow": (225, 195, 50),
    "red": (210, 60, 60),
}
HIDDEN_COLOR: Color = (128, 128, 128)
EMPTY_OUTLINE: Color = (200, 200, 200)

CARD_WIDTH = 36
CARD_HEIGHT = 48


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (20, 20, 20),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_card(screen: pygame.Surface, font: pygame.font.Font, card: Card | None, center: tuple[int, int]) -> None:
    rect = pygame.Rect(0, 0, CARD_WIDTH, CARD_HEIGHT)
    rect.center = center
    if card is None:
        pygame.draw.rect(screen, EMPTY_OUTLINE, rect, width=1, border_radius=4)
        return
    fill = CARD_COLORS[card.color] if card.revealed else HIDDEN_COLOR
    pygame.draw.rect(screen, fill, rect, border_radius=4)
    pygame.draw.rect(screen, (0, 0, 0), rect, width=1, border_radius=4)
    if card.revealed:
        img = font.render(str(card.value), True, (255, 255, 255))
    else:
        img = font.render("S", True, (100, 100, 100))
    screen.blit(img, img.get_rect(center=rect.center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)
