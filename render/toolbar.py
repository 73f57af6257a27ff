# render/toolbar.py
"""Toolbar rendering."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import pygame

from render.primitives import draw_text
from render.config import (
    TOOLBAR_BG_COLOR,
    TOOLBAR_SELECTED_COLOR,
    TOOLBAR_TEXT_COLOR,
)

if TYPE_CHECKING:
    from tools import Tool, ToolController


def toolbar_slot_at(pos: Tuple[int, int], rect: pygame.Rect, tool_count: int) -> Optional[int]:
    """Index of the toolbar slot under a point, or None."""
    if tool_count == 0 or not rect.collidepoint(pos):
        return None
    return min(tool_count - 1, (pos[0] - rect.x) * tool_count // rect.width)


def render_toolbar(
    surface,
    font,
    tools: List["Tool"],
    controller: "ToolController",
    rect: pygame.Rect,
) -> None:
    """Render the toolbar with one slot per tool."""
    x, y = rect.topleft
    width, height = rect.size
    tool_count = len(tools)
    tool_width = width // tool_count

    # Draw toolbar background
    pygame.draw.rect(surface, TOOLBAR_BG_COLOR, rect)
    pygame.draw.line(surface, (60, 60, 60), (x, y), (x + width, y), 1)

    for i, tool in enumerate(tools):
        tx = x + (i * tool_width)

        # Highlight selected tool (brighter while held)
        if tool.kind is controller.tool_kind:
            color = (90, 80, 50) if controller.is_active else TOOLBAR_SELECTED_COLOR
            pygame.draw.rect(surface, color, (tx + 1, y + 1, tool_width - 2, height - 2))

        draw_text(surface, font, f"{i + 1}", (tx + 4, y + 8), color=(150, 150, 130))
        draw_text(surface, font, f"{tool.icon} {tool.name}", (tx + 20, y + 8), color=TOOLBAR_TEXT_COLOR)

        # Separator between tools
        if i < tool_count - 1:
            pygame.draw.line(surface, (50, 50, 50), (tx + tool_width - 1, y + 4),
                             (tx + tool_width - 1, y + height - 4), 1)
