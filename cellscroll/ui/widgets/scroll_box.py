from __future__ import annotations

import logging
from typing import Optional, Union

from cellscroll.events import InputEvent, KeyPress, translated
from cellscroll.ui.extent import Axis, Extent
from cellscroll.ui.scroll_input import GutterGeometry, ScrollInput
from cellscroll.ui.scroll_layout import (
    CellRect, ScrollMode, bar_visibility, child_rect, parse_scroll_mode, viewport_rect,
)
from cellscroll.ui.scrollbar import Scrollbar
from cellscroll.ui.style import ScrollBoxStyle
from cellscroll.ui.widget import SingleChildWidget, Widget
from cellscroll.ui.window import CellWindow

logger = logging.getLogger(__name__)

ModeOption = Union[bool, str, ScrollMode]


class ScrollBox(SingleChildWidget):
    """
    Shows a window onto a single, possibly larger, child widget and draws
    scrollbars beside/below it.

    Wires:
      - Extent        (per-axis scroll state)
      - layout        (bar visibility, viewport and child windows)
      - Scrollbar     (drawing)
      - ScrollInput   (mouse / key handling)

    `vertical` and `horizontal` take True ("enabled"), False ("disabled") or
    "on_demand". Children that report `supports_self_scrolling()` get the
    Extent objects and a plain viewport window instead of being shifted.
    """
    def __init__(
        self,
        child: Optional[Widget] = None,
        *,
        vertical: ModeOption = True,
        horizontal: ModeOption = False,
        style: Optional[ScrollBoxStyle] = None,
    ):
        self.v_mode = parse_scroll_mode(vertical, "vertical")
        self.h_mode = parse_scroll_mode(horizontal, "horizontal")
        self.style = style or ScrollBoxStyle()

        self._vextent: Optional[Extent] = Extent(self, Axis.VERTICAL) if self.v_mode.enabled else None
        self._hextent: Optional[Extent] = Extent(self, Axis.HORIZONTAL) if self.h_mode.enabled else None

        self._viewport_win: Optional[CellWindow] = None
        self._self_scrolling = False
        self.gutter = GutterGeometry(
            v_visible=self.v_mode is ScrollMode.ENABLED,
            h_visible=self.h_mode is ScrollMode.ENABLED,
        )
        self._input = ScrollInput(self)

        super().__init__(child)

    # ---------- accessors ----------
    @property
    def vextent(self) -> Optional[Extent]:
        return self._vextent

    @property
    def hextent(self) -> Optional[Extent]:
        return self._hextent

    @property
    def viewport_window(self) -> Optional[CellWindow]:
        return self._viewport_win

    @property
    def self_scrolling(self) -> bool:
        return self._self_scrolling

    @property
    def drag_state(self):
        return self._input.state

    def declared_lines(self) -> int:
        child = self.child
        base = child.declared_lines() if child is not None else 0
        return base + (1 if self.gutter.h_visible else 0)

    def declared_cols(self) -> int:
        child = self.child
        base = child.declared_cols() if child is not None else 0
        return base + (1 if self.gutter.v_visible else 0)

    # ---------- public scrolling API ----------
    def scroll(self, down: Optional[int] = None, right: Optional[int] = None) -> None:
        """ Scroll by a number of lines down and/or columns right (negative is up/left). """
        if self.window is None or self.child is None:
            return
        if down is not None and self._vextent is not None:
            self._vextent.scroll(down)
        if right is not None and self._hextent is not None:
            self._hextent.scroll(right)

    def scroll_to(self, top: Optional[int] = None, left: Optional[int] = None) -> None:
        """ Make the given content line/column the first visible one. """
        if self.window is None or self.child is None:
            return
        if top is not None and self._vextent is not None:
            self._vextent.scroll_to(top)
        if left is not None and self._hextent is not None:
            self._hextent.scroll_to(left)

    # ---------- child attachment ----------
    def child_attached(self, child: Widget) -> None:
        # Decided once per attachment.
        self._self_scrolling = bool(child.supports_self_scrolling())
        if self._self_scrolling:
            child.receive_extents(self._vextent, self._hextent)

    def child_detached(self, child: Widget) -> None:
        if self._self_scrolling:
            child.receive_extents(None, None)
        self._self_scrolling = False
        self._reset_extents()

    # ---------- layout ----------
    def reshape(self) -> None:
        window = self.window
        child = self.child
        if window is None or child is None:
            return

        vext, hext = self._vextent, self._hextent
        smart = self._self_scrolling

        child_lines = child.declared_lines()
        child_cols = child.declared_cols()
        content_lines = vext.real_total if (smart and vext is not None) else child_lines
        content_cols = hext.real_total if (smart and hext is not None) else child_cols

        v_visible, h_visible = bar_visibility(
            window.lines, window.cols, content_lines, content_cols, self.v_mode, self.h_mode,
        )
        view = viewport_rect(window.lines, window.cols, v_visible, h_visible)

        if self._viewport_win is not None:
            self._viewport_win.change_geometry(*view.as_tuple())
        else:
            self._viewport_win = window.make_sub(*view.as_tuple())

        if vext is not None:
            vext.set_viewport(view.lines, None if smart else child_lines)
        if hext is not None:
            hext.set_viewport(view.cols, None if smart else child_cols)

        self.gutter = GutterGeometry(
            win_lines=window.lines,
            win_cols=window.cols,
            v_visible=v_visible,
            h_visible=h_visible,
            view_lines=view.lines,
            view_cols=view.cols,
        )

        geom = child_rect(view, child_lines, child_cols, vext, hext, smart)
        logger.debug("reshape: window %dx%d, bars v=%s h=%s, child at %s",
                     window.lines, window.cols, v_visible, h_visible, geom)
        self._place_child(child, geom)

    def _place_child(self, child: Widget, geom: CellRect) -> None:
        childwin = child.window
        if childwin is not None and not childwin.closed:
            childwin.change_geometry(*geom.as_tuple())
        else:
            child.assign_window(self._viewport_win.make_sub(*geom.as_tuple()))

    def window_lost(self, window: CellWindow) -> None:
        child = self.child
        if child is not None and child.window is not None:
            childwin = child.window
            child.assign_window(None)
            childwin.close()
        if self._viewport_win is not None:
            self._viewport_win.close()
        self._viewport_win = None
        self._reset_extents()

    def _reset_extents(self) -> None:
        # Without a region nothing is visible, so nothing can scroll.
        # Self-scrolling children keep their declared totals.
        for extent in (self._vextent, self._hextent):
            if extent is not None:
                extent.set_viewport(0, None if self._self_scrolling else 0)

    # ---------- Extent callbacks ----------
    def extent_scrolled(self, axis: Axis, delta: int, start: int) -> None:
        child = self.child
        if child is not None and self._self_scrolling:
            child.notify_scrolled(delta, start, axis)
        elif child is not None and child.window is not None:
            top = -self._vextent.start if self._vextent is not None else 0
            left = -self._hextent.start if self._hextent is not None else 0
            child.window.reposition(top, left)
        self.redraw()

    def extent_resized(self, axis: Axis) -> None:
        self.reshape()
        self.redraw()

    # ---------- drawing ----------
    def render_to_window(self, window: CellWindow) -> None:
        g = self.gutter
        if self.child is None or g.win_lines != window.lines or g.win_cols != window.cols:
            return

        if g.v_visible and self._vextent is not None:
            Scrollbar.draw_vertical(window, window.cols - 1, g.view_lines, self._vextent, self.style)
        if g.h_visible and self._hextent is not None:
            Scrollbar.draw_horizontal(window, window.lines - 1, g.view_cols, self._hextent, self.style)
        if g.v_visible and g.h_visible:
            Scrollbar.draw_corner(window, window.lines - 1, window.cols - 1, self.style)

    # ---------- input ----------
    def handle_event(self, ev: InputEvent) -> bool:
        child = self.child
        if isinstance(ev, KeyPress):
            if child is not None and child.handle_event(ev):
                return True
            if self.window is None or child is None:
                return False
            action = self.style.action_for(ev.key)
            return action is not None and self._input.handle_action(action)

        if self.window is None or child is None:
            return False
        if self._input.handle_mouse(ev):
            return True

        childwin = child.window if child is not None else None
        if childwin is None:
            return False
        g = self.gutter
        if not (0 <= ev.line < g.view_lines and 0 <= ev.col < g.view_cols):
            return False
        return child.handle_event(translated(ev, childwin.top, childwin.left))
