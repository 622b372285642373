from __future__ import annotations

from typing import Optional, Tuple

from cellscroll.events import InputEvent
from cellscroll.ui.extent import Axis, Extent
from cellscroll.ui.window import CellWindow


class Widget:
    """
    Base widget: owns at most one window, reports a desired size and renders
    into its window on demand.

    Children that are framed by a ScrollBox need nothing beyond this class.
    """
    def __init__(self) -> None:
        self.window: Optional[CellWindow] = None
        self.parent: Optional["SingleChildWidget"] = None

    # ----- size -----
    def declared_lines(self) -> int:
        return 1

    def declared_cols(self) -> int:
        return 1

    def supports_self_scrolling(self) -> bool:
        return False

    # ----- window lifecycle -----
    def assign_window(self, window: Optional[CellWindow]) -> None:
        if window is self.window:
            return
        old = self.window
        if old is not None:
            old.set_on_geom_changed(None)
            self.window = None
            self.window_lost(old)
        self.window = window
        if window is not None:
            window.set_on_geom_changed(self._window_geom_changed)
            self.window_gained(window)

    def window_gained(self, window: CellWindow) -> None:
        self.reshape()
        self.redraw()

    def window_lost(self, window: CellWindow) -> None:
        pass

    def _window_geom_changed(self) -> None:
        self.reshape()

    def reshape(self) -> None:
        """ Called when the window is assigned or changes size. """

    # ----- drawing -----
    def redraw(self) -> None:
        if self.window is not None:
            self.window.expose()

    def resized(self) -> None:
        """ Tell the parent our declared size changed. """
        if self.parent is not None:
            self.parent.child_resized(self)
        else:
            self.redraw()

    def render(self) -> None:
        win = self.window
        if win is None or win.closed:
            return
        self.render_to_window(win)
        for child in self.children():
            child.render()

    def render_to_window(self, window: CellWindow) -> None:
        pass

    def children(self) -> Tuple["Widget", ...]:
        return ()

    # ----- input -----
    def handle_event(self, ev: InputEvent) -> bool:
        return False


class SingleChildWidget(Widget):
    """ A widget that hosts exactly one (optional) child. """
    def __init__(self, child: Optional[Widget] = None) -> None:
        super().__init__()
        self._child: Optional[Widget] = None
        if child is not None:
            self.set_child(child)

    @property
    def child(self) -> Optional[Widget]:
        return self._child

    def set_child(self, child: Optional[Widget]) -> None:
        old = self._child
        if old is child:
            return
        if old is not None:
            old.parent = None
            self.child_detached(old)
            win = old.window
            old.assign_window(None)
            if win is not None:
                win.close()
        self._child = child
        if child is not None:
            child.parent = self
            self.child_attached(child)
        self.children_changed()

    def child_attached(self, child: Widget) -> None:
        pass

    def child_detached(self, child: Widget) -> None:
        pass

    def children(self) -> Tuple[Widget, ...]:
        return (self._child,) if self._child is not None else ()

    def children_changed(self) -> None:
        self.reshape()
        self.redraw()

    def child_resized(self, child: Widget) -> None:
        self.reshape()
        self.redraw()


class SelfScrollingChild(Widget):
    """
    A child that positions its own content instead of being moved around by
    the ScrollBox. It receives the box's Extent objects (shared, not copied),
    declares its content size with `Extent.set_total()` and repaints itself
    when told the offset changed.
    """
    def __init__(self) -> None:
        super().__init__()
        self.vextent: Optional[Extent] = None
        self.hextent: Optional[Extent] = None

    def supports_self_scrolling(self) -> bool:
        return True

    def receive_extents(self, vextent: Optional[Extent], hextent: Optional[Extent]) -> None:
        """ Called on attach with the box's extents, and with (None, None) on detach. """
        self.vextent = vextent
        self.hextent = hextent

    def notify_scrolled(self, delta: int, start: int, axis: Axis) -> None:
        self.redraw()
