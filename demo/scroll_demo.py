from __future__ import annotations

from typing import Any, Dict, List

from cellscroll.settings import AppCfg, build_style_from_defaults, build_text_style_from_defaults
from cellscroll.ui.widgets.scroll_box import ScrollBox
from cellscroll.ui.widgets.scrolling_text import ScrollingText
from cellscroll.ui.widgets.static import Static


def demo_lines(count: int, repeat: int) -> List[str]:
    return [f"The content for line {n} " * repeat for n in range(1, count + 1)]


def build_demo(cfg: AppCfg, defaults: Dict[str, Any]) -> ScrollBox:
    """ A ScrollBox around 'The content for line N' text, framed or self-scrolling. """
    lines = demo_lines(cfg.demo.line_count, cfg.demo.repeat)
    text_style = build_text_style_from_defaults(defaults)

    if cfg.demo.self_scrolling:
        child = ScrollingText(lines, style=text_style)
    else:
        child = Static("\n".join(lines), style=text_style)

    return ScrollBox(
        child,
        vertical=cfg.scrollbox.vertical,
        horizontal=cfg.scrollbox.horizontal,
        style=build_style_from_defaults(defaults),
    )
