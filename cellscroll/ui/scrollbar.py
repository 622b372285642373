from __future__ import annotations

from typing import Callable, Tuple

from cellscroll.ui.extent import Extent, ScrollbarGeometry
from cellscroll.ui.style import Pen, ScrollBoxStyle
from cellscroll.ui.window import CellWindow


def track_span(length: int) -> Tuple[int, int]:
    """
    (origin, length) of the track between the two arrow cells of a bar that is
    `length` cells long. Drawing and hit-testing both go through here.
    """
    return 1, max(0, length - 2)


def clamp_mark(g: ScrollbarGeometry) -> Tuple[int, int]:
    """ Mark ends clipped to the track; rounding may push them one cell out. """
    mark_start = min(max(g.mark_start, g.track_start), g.track_end)
    mark_end = min(max(g.mark_end, mark_start), g.track_end)
    return mark_start, mark_end


class Scrollbar:
    """
    Stateless drawer for ScrollBox scrollbars: arrow cell, track, mark, track,
    arrow cell. Reads Extent state, never changes it.
    """
    @staticmethod
    def draw_vertical(win: CellWindow, col: int, length: int,
                      extent: Extent, style: ScrollBoxStyle) -> None:
        if length <= 0:
            return

        def paint(pos: int, count: int, pen: Pen) -> None:
            win.draw_line(pos, col, count, pen, vertical=True)

        win.draw_text(0, col, style.arrow_up if extent.start > 0 else " ", style.arrow)
        Scrollbar._draw_track(paint, length, extent, style)
        if length > 1:
            at_end = extent.start >= extent.limit
            win.draw_text(length - 1, col, " " if at_end else style.arrow_down, style.arrow)

    @staticmethod
    def draw_horizontal(win: CellWindow, line: int, length: int,
                        extent: Extent, style: ScrollBoxStyle) -> None:
        if length <= 0:
            return

        def paint(pos: int, count: int, pen: Pen) -> None:
            win.fill_cells(line, pos, count, pen)

        win.draw_text(line, 0, style.arrow_left if extent.start > 0 else " ", style.arrow)
        Scrollbar._draw_track(paint, length, extent, style)
        if length > 1:
            at_end = extent.start >= extent.limit
            win.draw_text(line, length - 1, " " if at_end else style.arrow_right, style.arrow)

    @staticmethod
    def draw_corner(win: CellWindow, line: int, col: int, style: ScrollBoxStyle) -> None:
        win.fill_cells(line, col, 1, style.scrollbar)

    @staticmethod
    def _draw_track(paint: Callable[[int, int, Pen], None], length: int,
                    extent: Extent, style: ScrollBoxStyle) -> None:
        origin, track_len = track_span(length)
        if track_len <= 0:
            return
        if extent.total <= 0:
            paint(origin, track_len, style.scrollbar)
            return

        g = extent.scrollbar_geometry(origin, track_len)
        mark_start, mark_end = clamp_mark(g)
        paint(g.track_start, mark_start - g.track_start, style.scrollbar)
        paint(mark_start, mark_end - mark_start, style.scrollmark)
        paint(mark_end, g.track_end - mark_end, style.scrollbar)
