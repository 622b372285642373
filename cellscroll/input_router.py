from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pygame

from cellscroll.events import (
    InputEvent, KeyPress, MouseDrag, MouseDragStart, MouseDragStop, MousePress, MouseWheel,
    WheelDirection,
)

_KEY_NAMES: Dict[int, str] = {
    pygame.K_UP: "Up",
    pygame.K_DOWN: "Down",
    pygame.K_LEFT: "Left",
    pygame.K_RIGHT: "Right",
    pygame.K_PAGEUP: "PageUp",
    pygame.K_PAGEDOWN: "PageDown",
    pygame.K_HOME: "Home",
    pygame.K_END: "End",
    pygame.K_ESCAPE: "Escape",
    pygame.K_RETURN: "Enter",
    pygame.K_TAB: "Tab",
}

# pygame 2 reports the wheel twice: MOUSEWHEEL and legacy buttons 4/5
_LEGACY_WHEEL_BUTTONS = (4, 5)


def key_name(key: int, mod: int = 0) -> Optional[str]:
    """ "C-Home"-style name for a pygame key + modifier mask, or None if unbound. """
    base = _KEY_NAMES.get(key)
    if base is None:
        return None
    prefix = ""
    if mod & pygame.KMOD_CTRL:
        prefix += "C-"
    if mod & pygame.KMOD_ALT:
        prefix += "M-"
    if mod & pygame.KMOD_SHIFT:
        prefix += "S-"
    return prefix + base


class InputRouter:
    """
    Converts pygame events (pixels, buttons, keycodes) into cell-space input
    events for the root widget.

    Rules:
      - Button down -> MousePress at that cell.
      - First motion with the button held onto another cell -> MouseDragStart
        at the press cell, then MouseDrag at the current cell.
      - Further held motion -> MouseDrag.
      - Button up after a drag, or another button pressed during one
        -> MouseDragStop.
      - Wheel -> MouseWheel at the last known pointer cell, one per notch.
      - Named keys -> KeyPress("C-Home" etc.); other keys are ignored.
    """
    def __init__(self, cell_w: int, cell_h: int) -> None:
        self.cell_w = max(1, int(cell_w))
        self.cell_h = max(1, int(cell_h))
        self._pressed: Optional[Tuple[int, int, int]] = None     # (button, line, col)
        self._dragging = False
        self._last_cell: Tuple[int, int] = (0, 0)

    # --- public API ---------------------------------------------------------
    def set_cell_size(self, cell_w: int, cell_h: int) -> None:
        self.cell_w = max(1, int(cell_w))
        self.cell_h = max(1, int(cell_h))

    def cell_at(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        x, y = pos
        return y // self.cell_h, x // self.cell_w

    def translate(self, e: pygame.event.Event) -> List[InputEvent]:
        if e.type == pygame.MOUSEBUTTONDOWN:
            return self._on_button_down(e)
        if e.type == pygame.MOUSEMOTION:
            return self._on_motion(e)
        if e.type == pygame.MOUSEBUTTONUP:
            return self._on_button_up(e)
        if e.type == pygame.MOUSEWHEEL:
            return self._on_wheel(e)
        if e.type == pygame.KEYDOWN:
            name = key_name(e.key, getattr(e, "mod", 0))
            return [KeyPress(name)] if name else []
        return []

    # --- helpers ------------------------------------------------------------
    def _on_button_down(self, e: pygame.event.Event) -> List[InputEvent]:
        if e.button in _LEGACY_WHEEL_BUTTONS:
            return []
        line, col = self._last_cell = self.cell_at(e.pos)
        out: List[InputEvent] = []
        if self._dragging and self._pressed is not None:
            # A second button ends the drag in progress.
            out.append(MouseDragStop(line, col, self._pressed[0]))
        self._pressed = (e.button, line, col)
        self._dragging = False
        out.append(MousePress(line, col, e.button))
        return out

    def _on_motion(self, e: pygame.event.Event) -> List[InputEvent]:
        line, col = self.cell_at(e.pos)
        moved = (line, col) != self._last_cell
        self._last_cell = (line, col)
        if self._pressed is None or not moved:
            return []

        button, p_line, p_col = self._pressed
        if self._dragging:
            return [MouseDrag(line, col, button)]
        self._dragging = True
        return [MouseDragStart(p_line, p_col, button), MouseDrag(line, col, button)]

    def _on_button_up(self, e: pygame.event.Event) -> List[InputEvent]:
        if e.button in _LEGACY_WHEEL_BUTTONS:
            return []
        line, col = self._last_cell = self.cell_at(e.pos)
        pressed, dragging = self._pressed, self._dragging
        self._pressed = None
        self._dragging = False
        if dragging and pressed is not None:
            return [MouseDragStop(line, col, pressed[0])]
        return []

    def _on_wheel(self, e: pygame.event.Event) -> List[InputEvent]:
        y = int(getattr(e, "y", 0))
        if y == 0:
            return []
        line, col = self._last_cell
        direction = WheelDirection.UP if y > 0 else WheelDirection.DOWN
        return [MouseWheel(line, col, direction) for _ in range(abs(y))]
