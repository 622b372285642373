from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Tuple, Union

from cellscroll.events import (
    MouseDrag, MouseDragStart, MouseDragStop, MouseEvent, MousePress, MouseWheel,
    WheelDirection,
)
from cellscroll.ui.extent import Axis, Extent
from cellscroll.ui.scrollbar import clamp_mark, track_span

logger = logging.getLogger(__name__)

WHEEL_STEP = 5


@dataclass(frozen=True)
class GutterGeometry:
    """ Where the bars are, as of the last layout pass (window-relative cells). """
    win_lines: int = 0
    win_cols: int = 0
    v_visible: bool = False
    h_visible: bool = False
    view_lines: int = 0
    view_cols: int = 0


class _ScrollTarget(Protocol):
    gutter: GutterGeometry
    vextent: Optional[Extent]
    hextent: Optional[Extent]


class Zone(Enum):
    ARROW_DEC = "arrow_dec"
    TRACK_BEFORE = "track_before"
    MARK = "mark"
    TRACK_AFTER = "track_after"
    ARROW_INC = "arrow_inc"
    CORNER = "corner"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    axis: Axis
    offset: int         # pointer cell minus mark start at drag start


DragState = Union[Idle, Dragging]


def _half(e: Extent) -> int:
    return e.viewport // 2


_ACTIONS: Dict[str, Tuple[Axis, Callable[[Extent], None]]] = {
    "up_1":         (Axis.VERTICAL,   lambda e: e.scroll(-1)),
    "down_1":       (Axis.VERTICAL,   lambda e: e.scroll(+1)),
    "up_half":      (Axis.VERTICAL,   lambda e: e.scroll(-_half(e))),
    "down_half":    (Axis.VERTICAL,   lambda e: e.scroll(+_half(e))),
    "to_top":       (Axis.VERTICAL,   lambda e: e.scroll_to(0)),
    "to_bottom":    (Axis.VERTICAL,   lambda e: e.scroll_to(e.limit)),
    "left_1":       (Axis.HORIZONTAL, lambda e: e.scroll(-1)),
    "right_1":      (Axis.HORIZONTAL, lambda e: e.scroll(+1)),
    "left_half":    (Axis.HORIZONTAL, lambda e: e.scroll(-_half(e))),
    "right_half":   (Axis.HORIZONTAL, lambda e: e.scroll(+_half(e))),
    "to_leftmost":  (Axis.HORIZONTAL, lambda e: e.scroll_to(0)),
    "to_rightmost": (Axis.HORIZONTAL, lambda e: e.scroll_to(e.limit)),
}

ACTION_NAMES = frozenset(_ACTIONS)


def hit_zone(pos: int, length: int, extent: Extent) -> Zone:
    """ Classify cell `pos` of a bar `length` cells long (arrow, track, arrow). """
    if pos <= 0:
        return Zone.ARROW_DEC
    if pos >= length - 1:
        return Zone.ARROW_INC

    origin, track_len = track_span(length)
    if extent.total <= 0:
        return Zone.MARK
    mark_start, mark_end = clamp_mark(extent.scrollbar_geometry(origin, track_len))
    if pos < mark_start:
        return Zone.TRACK_BEFORE
    if pos < mark_end:
        return Zone.MARK
    return Zone.TRACK_AFTER


class ScrollInput:
    """
    Turns mouse and key input into Extent calls for one ScrollBox.

    Rules:
      - Button-1 presses anywhere on a visible bar are consumed; arrows step
        by one, track clicks page by half a viewport, the mark is inert.
      - Dragging starts only on the mark and repositions absolutely.
      - The wheel scrolls the vertical extent from anywhere over the box.
    """
    def __init__(self, target: _ScrollTarget) -> None:
        self.target = target
        self.state: DragState = Idle()

    # --- public API ---------------------------------------------------------
    def handle_mouse(self, ev: MouseEvent) -> bool:
        if isinstance(ev, MousePress):
            return self._on_press(ev)
        if isinstance(ev, MouseDragStart):
            return self._on_drag_start(ev)
        if isinstance(ev, MouseDrag):
            return self._on_drag(ev)
        if isinstance(ev, MouseDragStop):
            self.state = Idle()
            return False
        if isinstance(ev, MouseWheel):
            return self._on_wheel(ev)
        return False

    def handle_action(self, action: str) -> bool:
        entry = _ACTIONS.get(action)
        if entry is None:
            return False
        axis, apply = entry
        extent = self._extent(axis)
        if extent is None:
            return False
        apply(extent)
        return True

    # --- hit testing --------------------------------------------------------
    def locate(self, line: int, col: int) -> Optional[Tuple[Optional[Axis], int, Zone]]:
        """ (axis, position along the bar, zone) for a gutter cell, else None. """
        g = self.target.gutter
        if g.v_visible and col == g.win_cols - 1 and 0 <= line < g.win_lines:
            if line >= g.view_lines:
                return None, line, Zone.CORNER
            return Axis.VERTICAL, line, hit_zone(line, g.view_lines, self.target.vextent)
        if g.h_visible and line == g.win_lines - 1 and 0 <= col < g.win_cols:
            if col >= g.view_cols:
                return None, col, Zone.CORNER
            return Axis.HORIZONTAL, col, hit_zone(col, g.view_cols, self.target.hextent)
        return None

    # --- handlers -----------------------------------------------------------
    def _on_press(self, ev: MousePress) -> bool:
        if ev.button != 1:
            return False
        hit = self.locate(ev.line, ev.col)
        if hit is None:
            return False

        axis, _, zone = hit
        extent = self._extent(axis) if axis is not None else None
        if extent is None:
            return True

        if zone is Zone.ARROW_DEC:
            extent.scroll(-1)
        elif zone is Zone.TRACK_BEFORE:
            extent.scroll(-_half(extent))
        elif zone is Zone.TRACK_AFTER:
            extent.scroll(+_half(extent))
        elif zone is Zone.ARROW_INC:
            extent.scroll(+1)
        # Zone.MARK: nothing yet
        return True

    def _on_drag_start(self, ev: MouseDragStart) -> bool:
        self.state = Idle()
        if ev.button != 1:
            return False
        hit = self.locate(ev.line, ev.col)
        if hit is None:
            return False
        axis, pos, zone = hit
        if axis is None or zone is not Zone.MARK:
            return False

        extent = self._extent(axis)
        length = self._bar_length(axis)
        origin, track_len = track_span(length)
        mark_start, _ = clamp_mark(extent.scrollbar_geometry(origin, track_len))
        self.state = Dragging(axis, pos - mark_start)
        logger.debug("mark drag started on %s bar at offset %d", axis.name.lower(), pos - mark_start)
        return True

    def _on_drag(self, ev: MouseDrag) -> bool:
        state = self.state
        if ev.button != 1 or not isinstance(state, Dragging):
            return False
        extent = self._extent(state.axis)
        if extent is None:
            self.state = Idle()
            return False

        pos = ev.line if state.axis is Axis.VERTICAL else ev.col
        origin, track_len = track_span(self._bar_length(state.axis))
        want_mark = pos - state.offset - origin
        extent.scroll_to(extent.offset_for_mark(want_mark, track_len))
        return True

    def _on_wheel(self, ev: MouseWheel) -> bool:
        extent = self.target.vextent
        if extent is None:
            return False
        if ev.direction is WheelDirection.UP:
            extent.scroll(-WHEEL_STEP)
        else:
            extent.scroll(+WHEEL_STEP)
        return True

    # --- helpers ------------------------------------------------------------
    def _extent(self, axis: Axis) -> Optional[Extent]:
        return self.target.vextent if axis is Axis.VERTICAL else self.target.hextent

    def _bar_length(self, axis: Axis) -> int:
        g = self.target.gutter
        return g.view_lines if axis is Axis.VERTICAL else g.view_cols
