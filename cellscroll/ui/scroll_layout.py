"""
Geometry for a ScrollBox.

Works in window-relative cells. Given the box's window size and the child's
content size it decides which bars are shown, how large the viewport is and
where the child's window goes. Nothing here touches windows or widgets; the
ScrollBox applies the results.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from cellscroll.ui.extent import Extent


class ScrollMode(Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"
    ON_DEMAND = "on_demand"

    @property
    def enabled(self) -> bool:
        return self is not ScrollMode.DISABLED


_MODE_VALUES = frozenset(m.value for m in ScrollMode)


def parse_scroll_mode(value: Union[bool, str, ScrollMode], option: str) -> ScrollMode:
    """ Accepts True/False, "enabled"/"disabled"/"on_demand" or a ScrollMode. """
    if isinstance(value, ScrollMode):
        return value
    if value is True:
        return ScrollMode.ENABLED
    if value is False or value is None:
        return ScrollMode.DISABLED
    if isinstance(value, str) and value in _MODE_VALUES:
        return ScrollMode(value)
    raise ValueError(f"Unrecognised value for '{option}': {value!r} "
                     f"(expected enabled, disabled or on_demand)")


@dataclass(frozen=True)
class CellRect:
    top: int
    left: int
    lines: int
    cols: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.top, self.left, self.lines, self.cols)


def bar_visibility(win_lines: int, win_cols: int,
                   content_lines: int, content_cols: int,
                   vertical: ScrollMode, horizontal: ScrollMode) -> Tuple[bool, bool]:
    """
    Decide (vertical_visible, horizontal_visible).

    An on-demand bar shows only when content overflows. A bar on one axis eats
    a cell of the other, so an exactly-fitting axis counts as overflowing when
    the other bar is going to show. Both corrections use the uncorrected values.

    "Going to show" means enabled, or on-demand with content to spare. A
    positive spare alone is not enough: a disabled axis never takes a cell,
    and counting it would add a bar over content that fits.
    """
    v_spare = content_lines - win_lines
    h_spare = content_cols - win_cols

    v_takes_col = vertical is ScrollMode.ENABLED or (vertical is ScrollMode.ON_DEMAND and v_spare > 0)
    h_takes_line = horizontal is ScrollMode.ENABLED or (horizontal is ScrollMode.ON_DEMAND and h_spare > 0)

    v_adj = v_spare + 1 if (v_spare == 0 and h_takes_line) else v_spare
    h_adj = h_spare + 1 if (h_spare == 0 and v_takes_col) else h_spare

    v_visible = vertical.enabled and (vertical is not ScrollMode.ON_DEMAND or v_adj > 0)
    h_visible = horizontal.enabled and (horizontal is not ScrollMode.ON_DEMAND or h_adj > 0)
    return v_visible, h_visible


def viewport_rect(win_lines: int, win_cols: int, v_visible: bool, h_visible: bool) -> CellRect:
    return CellRect(
        0, 0,
        max(0, win_lines - (1 if h_visible else 0)),
        max(0, win_cols - (1 if v_visible else 0)),
    )


def _axis_span(extent: Optional[Extent], content: int, viewport: int) -> Tuple[int, int]:
    if extent is None:
        return 0, max(content, viewport)
    return -extent.start, extent.total


def child_rect(viewport: CellRect, content_lines: int, content_cols: int,
               vextent: Optional[Extent], hextent: Optional[Extent],
               self_scrolling: bool) -> CellRect:
    """
    Where the child window sits inside the viewport window.

    Framed children get a window as large as their content, shifted up/left by
    the scroll offset. Self-scrolling children get exactly the viewport.
    """
    if self_scrolling:
        return CellRect(0, 0, viewport.lines, viewport.cols)

    top, lines = _axis_span(vextent, content_lines, viewport.lines)
    left, cols = _axis_span(hextent, content_cols, viewport.cols)
    return CellRect(top, left, lines, cols)
