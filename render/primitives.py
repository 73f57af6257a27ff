# render/primitives.py
"""Sidebar and toolbar drawing helpers for the viewer.

- draw_text: cached text blit (the sidebar redraws the same strings every frame)
- draw_panel: titled block of text rows
- draw_legend: color swatches naming what each field color means
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Sequence, Tuple

import pygame

from render.config import (
    LINE_HEIGHT,
    COLOR_TEXT_WHITE,
    COLOR_TEXT_HIGHLIGHT,
)

Color = Tuple[int, int, int]

PANEL_RULE_COLOR = (100, 100, 80)
SWATCH_SIZE = 12


@lru_cache(maxsize=512)
def _rendered(font, text: str, color: Color) -> pygame.Surface:
    return font.render(text, True, color)


def draw_text(surface, font, text: str, pos: Tuple[int, int], color: Color = COLOR_TEXT_WHITE) -> None:
    surface.blit(_rendered(font, text, color), pos)


def draw_panel(surface, font, title: str, rows: Iterable[str], pos: Tuple[int, int],
               width: int, color: Color = COLOR_TEXT_WHITE) -> int:
    """Title, underline, then one row per line. Returns the y below the panel."""
    x, y = pos
    draw_text(surface, font, title, (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT
    pygame.draw.line(surface, PANEL_RULE_COLOR, (x, y), (x + width, y), 1)
    y += 6
    for row in rows:
        draw_text(surface, font, row, (x, y), color=color)
        y += LINE_HEIGHT
    return y + 8


def draw_legend(surface, font, entries: Sequence[Tuple[Color, str]], pos: Tuple[int, int],
                width: int) -> int:
    """Swatch + label per entry under a "Legend" title. Returns the y below it."""
    x = pos[0]
    y = draw_panel(surface, font, "Legend", (), pos, width) - 8
    for color, label in entries:
        pygame.draw.rect(surface, color, (x, y + 3, SWATCH_SIZE, SWATCH_SIZE))
        draw_text(surface, font, label, (x + SWATCH_SIZE + 8, y))
        y += LINE_HEIGHT
    return y + 8
