from __future__ import annotations

from typing import List, Optional

from cellscroll.ui.style import TextStyle
from cellscroll.ui.widget import Widget
from cellscroll.ui.window import CellWindow


class Static(Widget):
    """ Plain multi-line text. Its declared size is the size of the text. """
    def __init__(self, text: str = "", style: Optional[TextStyle] = None):
        super().__init__()
        self.style = style or TextStyle()
        self._lines: List[str] = []
        self._set_lines(text)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def set_text(self, text: str) -> None:
        self._set_lines(text)
        self.resized()
        self.redraw()

    def _set_lines(self, text: str) -> None:
        self._lines = (text or "").split("\n")

    def declared_lines(self) -> int:
        return len(self._lines)

    def declared_cols(self) -> int:
        return max((len(s) for s in self._lines), default=0)

    def render_to_window(self, window: CellWindow) -> None:
        pen = self.style.pen
        for i, s in enumerate(self._lines):
            if i >= window.lines:
                break
            window.fill_cells(i, 0, window.cols, pen)
            window.draw_text(i, 0, s, pen)
