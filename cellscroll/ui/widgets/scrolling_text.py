from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Optional

from cellscroll.ui.extent import Axis, Extent
from cellscroll.ui.style import TextStyle
from cellscroll.ui.widget import SelfScrollingChild
from cellscroll.ui.window import CellWindow

logger = logging.getLogger(__name__)


class ScrollingText(SelfScrollingChild):
    """
    Text log that scrolls itself. Inside a ScrollBox it is handed the box's
    extents, reports its line count / widest line through them and paints only
    the visible slice, offset by the extents' start.

    `max_lines` bounds the backlog (oldest lines fall off).
    """
    def __init__(self, lines: Iterable[str] = (), *, max_lines: Optional[int] = None,
                 style: Optional[TextStyle] = None):
        super().__init__()
        self.style = style or TextStyle()
        self._lines: Deque[str] = deque(lines, maxlen=max_lines)

    # ----- content -----
    def append_line(self, line: str) -> None:
        self._lines.append(line)
        self._declare_totals()
        self.redraw()

    def clear(self) -> None:
        self._lines.clear()
        self._declare_totals()
        self.redraw()

    def __len__(self) -> int:
        return len(self._lines)

    def declared_lines(self) -> int:
        return len(self._lines)

    def declared_cols(self) -> int:
        return max((len(s) for s in self._lines), default=0)

    # ----- delegate protocol -----
    def receive_extents(self, vextent: Optional[Extent], hextent: Optional[Extent]) -> None:
        super().receive_extents(vextent, hextent)
        self._declare_totals()

    def notify_scrolled(self, delta: int, start: int, axis: Axis) -> None:
        logger.debug("scrolled %s by %d to %d", axis.name.lower(), delta, start)
        super().notify_scrolled(delta, start, axis)

    def _declare_totals(self) -> None:
        if self.vextent is not None:
            self.vextent.set_total(self.declared_lines())
        if self.hextent is not None:
            self.hextent.set_total(self.declared_cols())
        if self.vextent is None and self.hextent is None:
            self.resized()

    # ----- drawing -----
    def render_to_window(self, window: CellWindow) -> None:
        top = self.vextent.start if self.vextent is not None else 0
        left = self.hextent.start if self.hextent is not None else 0
        pen = self.style.pen

        for row in range(window.lines):
            window.fill_cells(row, 0, window.cols, pen)
            idx = top + row
            if idx < len(self._lines):
                window.draw_text(row, 0, self._lines[idx][left:left + window.cols], pen)
