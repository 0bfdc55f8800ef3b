"""Window geometry, skins and key bindings for the pygame front-end."""

from __future__ import annotations

import pygame

CELL: int = 28  # pixels per grid cell
HUD_HEIGHT: int = 84
FONT_NAME: str = "consolas"
FONT_SIZE: int = 20
TITLE_FONT_SIZE: int = 34

FPS: int = 60
DEFAULT_BET: int = 50
BET_STEP: int = 10

KEY_TO_DIRECTION: dict[int, tuple[int, int]] = {
    pygame.K_UP: (0, -1),
    pygame.K_w: (0, -1),
    pygame.K_DOWN: (0, 1),
    pygame.K_s: (0, 1),
    pygame.K_LEFT: (-1, 0),
    pygame.K_a: (-1, 0),
    pygame.K_RIGHT: (1, 0),
    pygame.K_d: (1, 0),
}
BET_UP_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
BET_DOWN_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)

SKINS: dict[str, dict[str, pygame.Color]] = {
    "emerald": {
        "bg": pygame.Color(3, 10, 24),
        "checker": pygame.Color(8, 16, 32),
        "grid": pygame.Color(14, 24, 40),
        "head": pygame.Color(57, 255, 133),
        "body": pygame.Color(34, 200, 72),
        "tail": pygame.Color(20, 110, 48),
        "text": pygame.Color(216, 239, 255),
        "hud": pygame.Color(6, 14, 30),
        "accent": pygame.Color(255, 215, 0),
        "danger": pygame.Color(255, 60, 90),
        "win": pygame.Color(57, 255, 133),
    },
    "ember": {
        "bg": pygame.Color(20, 6, 8),
        "checker": pygame.Color(30, 10, 12),
        "grid": pygame.Color(44, 16, 18),
        "head": pygame.Color(255, 140, 26),
        "body": pygame.Color(230, 96, 30),
        "tail": pygame.Color(130, 50, 20),
        "text": pygame.Color(255, 236, 214),
        "hud": pygame.Color(28, 8, 10),
        "accent": pygame.Color(255, 210, 63),
        "danger": pygame.Color(255, 60, 90),
        "win": pygame.Color(120, 255, 160),
    },
}


def palette_for(skin: str) -> dict[str, pygame.Color]:
    """Unknown skins fall back to the default emerald palette."""
    return SKINS.get(skin, SKINS["emerald"])
