from __future__ import annotations

import logging
import weakref
from enum import Enum
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class Axis(Enum):
    VERTICAL = "v"
    HORIZONTAL = "h"


class ScrollbarGeometry(NamedTuple):
    track_start: int
    mark_start: int
    mark_end: int
    track_end: int


def _round_half_up(num: int, den: int) -> int:
    """ round(num / den) with halves going up, in exact integer arithmetic. """
    return (2 * num + den) // (2 * den)


class Extent:
    """
    Scroll state for one axis of a ScrollBox.

    Holds:
      - viewport: visible size along the axis
      - total:    content size, never smaller than viewport
      - start:    first visible unit, always within [0, limit]

    Extents are created by their ScrollBox and only hold a weak reference
    back to it. Scroll changes call `owner.extent_scrolled(axis, delta, start)`
    synchronously; layout-driven clamping never notifies.
    """
    __slots__ = ("axis", "_owner", "_viewport", "_total", "_real_total", "_start")

    def __init__(self, owner, axis: Axis):
        self.axis = axis
        self._owner = weakref.ref(owner)
        self._viewport = 0
        self._total = 0
        self._real_total = 0
        self._start = 0

    # ---------- accessors ----------
    @property
    def viewport(self) -> int:
        return self._viewport

    @property
    def total(self) -> int:
        return self._total

    @property
    def real_total(self) -> int:
        """ Content size as last declared, before clamping up to the viewport. """
        return self._real_total

    @property
    def start(self) -> int:
        return self._start

    @property
    def limit(self) -> int:
        return self._total - self._viewport

    def __repr__(self) -> str:
        return (f"Extent({self.axis.name.lower()}, viewport={self._viewport}, "
                f"total={self._total}, start={self._start})")

    # ---------- layout side ----------
    def set_viewport(self, viewport: int, total: Optional[int] = None) -> None:
        """
        Store new viewport/total sizes. Omitting `total` keeps the last declared
        content size. A start beyond the new limit is pulled back silently.
        """
        self._viewport = max(0, int(viewport))
        if total is not None:
            self._real_total = max(0, int(total))
        self._apply_sizes()

    def set_total(self, total: int) -> None:
        """
        Declare the content size; used by children that scroll themselves.
        The owner re-runs layout since bar visibility may change.
        """
        total = max(0, int(total))
        if total == self._real_total:
            return
        self._real_total = total
        self._apply_sizes()
        owner = self._owner()
        if owner is not None:
            owner.extent_resized(self.axis)

    def _apply_sizes(self) -> None:
        self._total = max(self._real_total, self._viewport)
        limit = self._total - self._viewport
        if self._start > limit:
            self._start = limit

    # ---------- scrolling ----------
    def scroll(self, delta: int) -> None:
        self.scroll_to(self._start + int(delta))

    def scroll_to(self, start: int) -> None:
        start = max(0, min(int(start), self.limit))
        if start == self._start:
            return

        delta = start - self._start
        self._start = start
        logger.debug("%s extent scrolled by %d to %d", self.axis.name.lower(), delta, start)

        owner = self._owner()
        if owner is not None:
            owner.extent_scrolled(self.axis, delta, start)

    # ---------- scrollbar ----------
    def scrollbar_geometry(self, track_origin: int, track_length: int) -> ScrollbarGeometry:
        """
        Place the scroll mark within a track of `track_length` cells that starts
        at `track_origin`. The mark is always at least one cell long; its ends may
        land one cell off near the extremes because of rounding.
        """
        total = self._total
        assert total > 0, "scrollbar geometry needs a non-empty extent"

        mark_len = max(1, _round_half_up(self._viewport * track_length, total))
        mark_start = track_origin + _round_half_up(self._start * track_length, total)

        return ScrollbarGeometry(
            track_origin,
            mark_start,
            mark_start + mark_len,
            track_origin + track_length,
        )

    def offset_for_mark(self, mark_pos: int, track_length: int) -> int:
        """ Inverse of the mark placement: content start for a mark cell offset. """
        if track_length <= 0:
            return 0
        return _round_half_up(mark_pos * self._total, track_length)
