from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from cellscroll.ui.style import Pen

_BLANK = Pen()


@dataclass(frozen=True)
class Cell:
    char: str = " "
    pen: Pen = _BLANK


class CellBuffer:
    """
    Grid of character cells shared by every window of one root.
    The app paints it; tests read it back with `line_text()`.
    """
    def __init__(self, lines: int, cols: int):
        self.lines = max(0, lines)
        self.cols = max(0, cols)
        self._rows: List[List[Cell]] = []
        self.clear()

    def resize(self, lines: int, cols: int) -> None:
        self.lines = max(0, lines)
        self.cols = max(0, cols)
        self.clear()

    def clear(self, pen: Pen = _BLANK) -> None:
        blank = Cell(" ", pen)
        self._rows = [[blank] * self.cols for _ in range(self.lines)]

    def put(self, line: int, col: int, char: str, pen: Pen) -> None:
        if 0 <= line < self.lines and 0 <= col < self.cols:
            self._rows[line][col] = Cell(char, pen)

    def cell(self, line: int, col: int) -> Cell:
        return self._rows[line][col]

    def line_text(self, line: int) -> str:
        return "".join(c.char for c in self._rows[line])

    def rows(self) -> List[List[Cell]]:
        return self._rows


class CellWindow:
    """
    Rectangular region of a CellBuffer.

    Sub-windows are positioned relative to their parent and may start at a
    negative offset or extend past it (that is how scrolled content is framed);
    all drawing is clipped to the window and every ancestor.
    """
    def __init__(self, buffer: CellBuffer, parent: Optional["CellWindow"],
                 top: int, left: int, lines: int, cols: int):
        self._buffer = buffer
        self.parent = parent
        self.top = top
        self.left = left
        self.lines = max(0, lines)
        self.cols = max(0, cols)
        self.closed = False
        self._subs: List[CellWindow] = []
        self._on_geom_changed: Optional[Callable[[], None]] = None
        self._exposed = True

    @classmethod
    def root(cls, lines: int, cols: int) -> "CellWindow":
        return cls(CellBuffer(lines, cols), None, 0, 0, lines, cols)

    @property
    def buffer(self) -> CellBuffer:
        return self._buffer

    # ----- tree -----
    def make_sub(self, top: int, left: int, lines: int, cols: int) -> "CellWindow":
        sub = CellWindow(self._buffer, self, top, left, lines, cols)
        self._subs.append(sub)
        return sub

    def subwindows(self) -> Tuple["CellWindow", ...]:
        return tuple(self._subs)

    def close(self) -> None:
        if self.closed:
            return
        for sub in list(self._subs):
            sub.close()
        self.closed = True
        self._on_geom_changed = None
        if self.parent is not None and self in self.parent._subs:
            self.parent._subs.remove(self)
            self.parent.expose()

    # ----- geometry -----
    def set_on_geom_changed(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_geom_changed = callback

    def change_geometry(self, top: int, left: int, lines: int, cols: int) -> None:
        lines, cols = max(0, lines), max(0, cols)
        if (top, left, lines, cols) == (self.top, self.left, self.lines, self.cols):
            return
        resized = (lines, cols) != (self.lines, self.cols)
        self.top, self.left, self.lines, self.cols = top, left, lines, cols
        if resized and self._on_geom_changed is not None:
            self._on_geom_changed()
        self.expose()

    def reposition(self, top: int, left: int) -> None:
        if (top, left) == (self.top, self.left):
            return
        self.top, self.left = top, left
        self.expose()

    def resize(self, lines: int, cols: int) -> None:
        """ Root-only: the host terminal changed size. """
        assert self.parent is None, "only the root window is resized directly"
        self._buffer.resize(lines, cols)
        self.change_geometry(0, 0, lines, cols)

    def abs_origin(self) -> Tuple[int, int]:
        top, left = self.top, self.left
        p = self.parent
        while p is not None:
            top += p.top
            left += p.left
            p = p.parent
        return top, left

    def clip_rect(self) -> Tuple[int, int, int, int]:
        """ Visible area in buffer coordinates as (top, left, bottom, right), exclusive. """
        top, left = self.abs_origin()
        bottom, right = top + self.lines, left + self.cols
        if self.parent is not None:
            pt, pl, pb, pr = self.parent.clip_rect()
            top, left = max(top, pt), max(left, pl)
            bottom, right = min(bottom, pb), min(right, pr)
        return top, left, max(top, bottom), max(left, right)

    # ----- drawing -----
    def draw_text(self, line: int, col: int, text: str, pen: Pen) -> None:
        if self.closed:
            return
        top, left = self.abs_origin()
        ct, cl, cb, cr = self.clip_rect()
        y = top + line
        if not (ct <= y < cb):
            return
        for i, ch in enumerate(text):
            x = left + col + i
            if cl <= x < cr:
                self._buffer.put(y, x, ch, pen)

    def fill_cells(self, line: int, col: int, count: int, pen: Pen) -> None:
        self.draw_text(line, col, " " * max(0, count), pen)

    def draw_line(self, line: int, col: int, length: int, pen: Pen, *,
                  vertical: bool = False, char: str = " ") -> None:
        if vertical:
            for i in range(max(0, length)):
                self.draw_text(line + i, col, char, pen)
        else:
            self.draw_text(line, col, char * max(0, length), pen)

    # ----- redraw requests -----
    def expose(self) -> None:
        root = self
        while root.parent is not None:
            root = root.parent
        root._exposed = True

    def take_exposed(self) -> bool:
        """ Root-only: return and reset the pending redraw flag. """
        exposed = self._exposed
        self._exposed = False
        return exposed
