import unittest

from cellscroll.events import (
    KeyPress, MouseDrag, MouseDragStart, MouseDragStop, MousePress, MouseWheel, WheelDirection,
)
from cellscroll.ui.extent import Axis
from cellscroll.ui.scroll_input import Dragging, Idle
from cellscroll.ui.widgets.scroll_box import ScrollBox
from cellscroll.ui.widgets.static import Static
from cellscroll.ui.window import CellWindow


def numbered(n: int) -> str:
    return "\n".join(f"line {i}" for i in range(1, n + 1))


def make_box(text=None, lines=25, cols=80, **kwargs):
    child = Static(numbered(100) if text is None else text)
    box = ScrollBox(child, **kwargs)
    root = CellWindow.root(lines, cols)
    box.assign_window(root)
    return box, child, root


def rendered(box, root):
    root.buffer.clear()
    box.render()
    return root.buffer


class RecordingStatic(Static):
    def __init__(self, text, consume=False):
        super().__init__(text)
        self.events = []
        self.consume = consume

    def handle_event(self, ev):
        self.events.append(ev)
        return self.consume


class TestScrollBoxLayout(unittest.TestCase):
    def test_default_vertical_bar_and_child_window(self):
        box, child, root = make_box()
        self.assertIsNotNone(box.vextent)
        self.assertIsNone(box.hextent)
        self.assertTrue(box.gutter.v_visible)
        self.assertFalse(box.gutter.h_visible)

        vp = box.viewport_window
        self.assertEqual((vp.top, vp.left, vp.lines, vp.cols), (0, 0, 25, 79))
        self.assertEqual((box.vextent.viewport, box.vextent.total), (25, 100))

        cw = child.window
        self.assertEqual((cw.top, cw.left, cw.lines, cw.cols), (0, 0, 100, 79))
        self.assertIs(cw.parent, vp)

    def test_on_demand_bar_hidden_when_content_fits(self):
        box, child, _ = make_box(numbered(10), vertical="on_demand")
        self.assertFalse(box.gutter.v_visible)
        self.assertEqual(box.viewport_window.cols, 80)
        self.assertEqual(child.window.cols, 80)
        self.assertEqual(box.declared_cols(), 7)

    def test_on_demand_bar_shown_for_tall_content(self):
        box, _, _ = make_box(vertical="on_demand", horizontal=False)
        self.assertTrue(box.gutter.v_visible)
        self.assertFalse(box.gutter.h_visible)
        self.assertEqual(box.declared_cols(), 8 + 1)

    def test_both_on_demand_bars_interact(self):
        text = "\n".join(["w" * 100] + [f"line {i}" for i in range(2, 26)])
        box, child, _ = make_box(text, vertical="on_demand", horizontal="on_demand")
        self.assertTrue(box.gutter.v_visible)
        self.assertTrue(box.gutter.h_visible)
        self.assertEqual((box.viewport_window.lines, box.viewport_window.cols), (24, 79))
        self.assertEqual(box.vextent.limit, 1)
        self.assertEqual((box.hextent.viewport, box.hextent.total), (79, 100))

        box.scroll(right=5)
        self.assertEqual(child.window.left, -5)

    def test_resize_clamps_start_without_losing_position(self):
        box, child, root = make_box()
        box.scroll_to(top=75)
        root.resize(50, 80)
        self.assertEqual(box.vextent.viewport, 50)
        self.assertEqual(box.vextent.start, 50)
        self.assertEqual(child.window.top, -50)

    def test_child_size_change_relayouts(self):
        box, child, _ = make_box(vertical="on_demand")
        self.assertTrue(box.gutter.v_visible)
        child.set_text(numbered(10))
        self.assertFalse(box.gutter.v_visible)
        self.assertEqual(box.vextent.total, 25)

    def test_invalid_option_fails_construction(self):
        with self.assertRaises(ValueError):
            ScrollBox(Static("x"), vertical="sideways")
        with self.assertRaises(ValueError):
            ScrollBox(Static("x"), horizontal=7)

    def test_no_window_or_child_is_a_noop(self):
        box = ScrollBox(Static(numbered(100)))
        box.scroll(down=3)
        self.assertEqual(box.vextent.start, 0)
        self.assertFalse(box.handle_event(MousePress(0, 0)))

        empty = ScrollBox()
        root = CellWindow.root(25, 80)
        empty.assign_window(root)
        self.assertIsNone(empty.viewport_window)
        rendered(empty, root)
        self.assertFalse(empty.handle_event(MousePress(3, 79)))

    def test_losing_window_closes_child_and_viewport(self):
        box, child, _ = make_box()
        vp, cw = box.viewport_window, child.window
        box.assign_window(None)
        self.assertIsNone(child.window)
        self.assertIsNone(box.viewport_window)
        self.assertTrue(vp.closed)
        self.assertTrue(cw.closed)

    def test_scrolling_after_window_lost_is_a_noop(self):
        box, child, _ = make_box()
        box.scroll(down=20)
        box.assign_window(None)
        self.assertEqual((box.vextent.viewport, box.vextent.total, box.vextent.start), (0, 0, 0))

        box.scroll(down=10)
        box.scroll_to(top=40)
        self.assertEqual(box.vextent.start, 0)
        self.assertFalse(box.handle_event(KeyPress("PageDown")))
        self.assertFalse(box.handle_event(MouseWheel(3, 3, WheelDirection.DOWN)))
        self.assertEqual(box.vextent.start, 0)

        root = CellWindow.root(25, 80)
        box.assign_window(root)
        box.scroll(down=10)
        self.assertEqual(box.vextent.start, 10)
        self.assertEqual(child.window.top, -10)

    def test_scrolling_after_child_removed_is_a_noop(self):
        box, _, _ = make_box()
        box.scroll(down=20)
        box.set_child(None)
        self.assertEqual(box.vextent.start, 0)

        box.scroll(down=10)
        box.scroll_to(top=40)
        self.assertEqual(box.vextent.start, 0)
        self.assertFalse(box.handle_event(KeyPress("Down")))
        self.assertFalse(box.handle_event(MousePress(24, 79)))
        self.assertFalse(box.handle_event(MouseWheel(3, 3, WheelDirection.DOWN)))
        self.assertEqual(box.vextent.start, 0)

    def test_replacing_child_closes_old_window(self):
        box, old, _ = make_box()
        old_win = old.window
        new = Static("hello")
        box.set_child(new)
        self.assertTrue(old_win.closed)
        self.assertIsNone(old.window)
        self.assertIsNone(old.parent)
        self.assertIs(new.parent, box)
        self.assertEqual(new.window.lines, 25)


class TestScrollBoxScrolling(unittest.TestCase):
    def test_scroll_repositions_child_and_redraws(self):
        box, child, root = make_box()
        root.take_exposed()
        box.scroll(down=10)
        self.assertEqual(child.window.top, -10)
        self.assertTrue(root.take_exposed())

        buf = rendered(box, root)
        self.assertTrue(buf.line_text(0).startswith("line 11 "))
        self.assertTrue(buf.line_text(24).startswith("line 35 "))

    def test_scroll_to_and_disabled_axis(self):
        box, child, _ = make_box()
        box.scroll_to(top=30, left=12)
        self.assertEqual(box.vextent.start, 30)
        self.assertEqual(child.window.left, 0)
        box.scroll(down=-100)
        self.assertEqual(child.window.top, 0)

    def test_scrollbar_rendering(self):
        box, _, root = make_box()
        st = box.style
        buf = rendered(box, root)
        self.assertEqual(buf.cell(0, 79).char, " ")        # at top: no up arrow
        self.assertEqual(buf.cell(0, 79).pen, st.arrow)
        self.assertEqual(buf.cell(24, 79).char, "▾")
        for line in range(1, 7):
            self.assertEqual(buf.cell(line, 79).pen, st.scrollmark, line)
        for line in range(7, 24):
            self.assertEqual(buf.cell(line, 79).pen, st.scrollbar, line)

        box.scroll(down=10)
        buf = rendered(box, root)
        self.assertEqual(buf.cell(0, 79).char, "▴")
        self.assertEqual(buf.cell(2, 79).pen, st.scrollbar)
        self.assertEqual(buf.cell(3, 79).pen, st.scrollmark)
        self.assertEqual(buf.cell(8, 79).pen, st.scrollmark)
        self.assertEqual(buf.cell(9, 79).pen, st.scrollbar)

        box.scroll_to(top=75)
        buf = rendered(box, root)
        self.assertEqual(buf.cell(24, 79).char, " ")       # at bottom: no down arrow

    def test_corner_and_horizontal_bar(self):
        text = "\n".join(["w" * 100] + [f"line {i}" for i in range(2, 26)])
        box, _, root = make_box(text, vertical="on_demand", horizontal="on_demand")
        buf = rendered(box, root)
        self.assertEqual(buf.cell(24, 79).pen, box.style.scrollbar)
        self.assertEqual(buf.cell(24, 78).char, "▸")
        self.assertEqual(buf.cell(24, 0).char, " ")

        self.assertTrue(box.handle_event(MousePress(24, 79)))
        self.assertEqual((box.vextent.start, box.hextent.start), (0, 0))

        self.assertTrue(box.handle_event(MousePress(24, 78)))
        self.assertEqual(box.hextent.start, 1)
        buf = rendered(box, root)
        self.assertEqual(buf.cell(24, 0).char, "◂")


class TestScrollBoxMouse(unittest.TestCase):
    def test_press_zones_on_vertical_bar(self):
        box, _, _ = make_box()
        v = box.vextent

        self.assertTrue(box.handle_event(MousePress(24, 79)))   # down arrow
        self.assertEqual(v.start, 1)
        self.assertTrue(box.handle_event(MousePress(20, 79)))   # below mark
        self.assertEqual(v.start, 13)
        self.assertTrue(box.handle_event(MousePress(2, 79)))    # above mark
        self.assertEqual(v.start, 1)
        self.assertTrue(box.handle_event(MousePress(0, 79)))    # up arrow
        self.assertEqual(v.start, 0)
        self.assertTrue(box.handle_event(MousePress(0, 79)))    # still consumed at the top
        self.assertEqual(v.start, 0)
        self.assertTrue(box.handle_event(MousePress(3, 79)))    # on the mark: inert
        self.assertEqual(v.start, 0)

    def test_other_buttons_and_content_presses_pass_through(self):
        box, _, _ = make_box()
        self.assertFalse(box.handle_event(MousePress(20, 79, button=3)))
        self.assertFalse(box.handle_event(MousePress(5, 5)))
        self.assertEqual(box.vextent.start, 0)

    def test_dragging_the_mark(self):
        box, _, _ = make_box()
        self.assertIsInstance(box.drag_state, Idle)

        self.assertTrue(box.handle_event(MouseDragStart(3, 79)))
        self.assertEqual(box.drag_state, Dragging(Axis.VERTICAL, 2))

        self.assertTrue(box.handle_event(MouseDrag(13, 79)))
        self.assertEqual(box.vextent.start, 43)

        self.assertTrue(box.handle_event(MouseDrag(0, 79)))
        self.assertEqual(box.vextent.start, 0)

        box.handle_event(MouseDragStop(0, 79))
        self.assertIsInstance(box.drag_state, Idle)

        box.handle_event(MouseDrag(20, 79))
        self.assertEqual(box.vextent.start, 0)

    def test_drag_keeps_following_pointer_off_the_bar(self):
        box, _, _ = make_box()
        box.handle_event(MouseDragStart(1, 79))
        self.assertTrue(box.handle_event(MouseDrag(12, 40)))
        self.assertEqual(box.vextent.start, box.vextent.offset_for_mark(11, 23))

    def test_drag_start_off_the_mark_is_not_consumed(self):
        box, _, _ = make_box()
        self.assertFalse(box.handle_event(MouseDragStart(20, 79)))
        self.assertIsInstance(box.drag_state, Idle)

    def test_drag_start_off_the_mark_ends_earlier_drag(self):
        box, _, _ = make_box()
        box.handle_event(MouseDragStart(3, 79))
        self.assertIsInstance(box.drag_state, Dragging)

        self.assertFalse(box.handle_event(MouseDragStart(5, 5)))
        self.assertIsInstance(box.drag_state, Idle)
        box.handle_event(MouseDrag(20, 79))
        self.assertEqual(box.vextent.start, 0)

    def test_wheel_scrolls_vertically_from_anywhere(self):
        box, _, _ = make_box()
        self.assertTrue(box.handle_event(MouseWheel(3, 3, WheelDirection.DOWN)))
        self.assertEqual(box.vextent.start, 5)

        box.scroll_to(top=73)
        box.handle_event(MouseWheel(10, 79, WheelDirection.DOWN))
        self.assertEqual(box.vextent.start, 75)
        box.handle_event(MouseWheel(0, 0, WheelDirection.UP))
        self.assertEqual(box.vextent.start, 70)

    def test_wheel_ignored_without_vertical_axis(self):
        box, _, _ = make_box(vertical=False, horizontal=True)
        self.assertFalse(box.handle_event(MouseWheel(3, 3, WheelDirection.DOWN)))

    def test_unhandled_mouse_reaches_child_in_its_coordinates(self):
        child = RecordingStatic(numbered(100))
        box = ScrollBox(child)
        box.assign_window(CellWindow.root(25, 80))
        box.scroll(down=10)

        box.handle_event(MousePress(5, 5))
        self.assertEqual(child.events, [MousePress(15, 5)])


class TestScrollBoxKeys(unittest.TestCase):
    def test_vertical_actions(self):
        box, _, _ = make_box()
        v = box.vextent
        steps = [
            ("PageDown", 12), ("Down", 13), ("C-End", 75), ("PageUp", 63),
            ("Up", 62), ("C-Home", 0),
        ]
        for key, expected in steps:
            self.assertTrue(box.handle_event(KeyPress(key)), key)
            self.assertEqual(v.start, expected, key)

    def test_horizontal_actions(self):
        box, child, _ = make_box("x" * 200, horizontal=True, vertical=False)
        h = box.hextent
        self.assertEqual(h.viewport, 80)
        steps = [
            ("Right", 1), ("C-Right", 41), ("End", 120), ("C-Left", 80),
            ("Left", 79), ("Home", 0),
        ]
        for key, expected in steps:
            self.assertTrue(box.handle_event(KeyPress(key)), key)
            self.assertEqual(h.start, expected, key)

    def test_keys_for_missing_axis_or_unbound(self):
        box, _, _ = make_box()
        self.assertFalse(box.handle_event(KeyPress("Right")))
        self.assertFalse(box.handle_event(KeyPress("F5")))

    def test_child_gets_keys_first(self):
        child = RecordingStatic(numbered(100), consume=True)
        box = ScrollBox(child)
        box.assign_window(CellWindow.root(25, 80))
        self.assertTrue(box.handle_event(KeyPress("Down")))
        self.assertEqual(box.vextent.start, 0)
        self.assertEqual(child.events, [KeyPress("Down")])

    def test_custom_bindings(self):
        box, _, _ = make_box()
        box.style = box.style.derive(keys={"j": "down_1", "k": "up_1"})
        self.assertTrue(box.handle_event(KeyPress("j")))
        self.assertEqual(box.vextent.start, 1)
        self.assertFalse(box.handle_event(KeyPress("Down")))


if __name__ == "__main__":
    unittest.main()
