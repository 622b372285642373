from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cellscroll.ui.style import Pen, ScrollBoxStyle, TextStyle, default_key_bindings
from cellscroll.ui.scroll_input import ACTION_NAMES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "demo/config/defaults.yaml"


@dataclass
class WindowCfg:
    cols: int = 80
    lines: int = 25
    title: str = "cellscroll"
    font_path: Optional[str] = None
    font_size: int = 18
    fg_rgb: tuple[int, int, int] = (220, 220, 220)
    bg_rgb: tuple[int, int, int] = (14, 15, 18)


@dataclass
class ScrollBoxCfg:
    vertical: Any = "on_demand"         # True / False / "enabled" / "disabled" / "on_demand"
    horizontal: Any = "on_demand"


@dataclass
class DemoCfg:
    line_count: int = 50
    repeat: int = 3
    self_scrolling: bool = False


@dataclass
class AppCfg:
    fps: int = 30
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    scrollbox: ScrollBoxCfg = field(default_factory=ScrollBoxCfg)
    demo: DemoCfg = field(default_factory=DemoCfg)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_ui_defaults(path: str = DEFAULT_CONFIG) -> Dict[str, Any]:
    """ Raw YAML mapping; empty if the file does not exist. """
    p = Path(path)
    if not p.exists():
        logger.warning("Config file '%s' not found, using built-in defaults", path)
        return {}
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str = DEFAULT_CONFIG, data: Optional[Dict[str, Any]] = None) -> AppCfg:
    if data is None:
        data = load_ui_defaults(path)

    return AppCfg(
        fps=int(_get(data, "fps", 30)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            cols=int(_get(data, "window.cols", 80)),
            lines=int(_get(data, "window.lines", 25)),
            title=str(_get(data, "window.title", "cellscroll")),
            font_path=_get(data, "window.font_path", None),
            font_size=int(_get(data, "window.font_size", 18)),
            fg_rgb=tuple(_get(data, "window.fg_rgb", (220, 220, 220))),
            bg_rgb=tuple(_get(data, "window.bg_rgb", (14, 15, 18))),
        ),
        scrollbox=ScrollBoxCfg(
            vertical=_get(data, "scrollbox.vertical", "on_demand"),
            horizontal=_get(data, "scrollbox.horizontal", "on_demand"),
        ),
        demo=DemoCfg(
            line_count=int(_get(data, "demo.line_count", 50)),
            repeat=int(_get(data, "demo.repeat", 3)),
            self_scrolling=bool(_get(data, "demo.self_scrolling", False)),
        ),
    )


def _pen_from(d: Dict[str, Any], base: Pen) -> Pen:
    def _rgb(v):
        return tuple(v) if v is not None else None

    return Pen(
        fg=_rgb(d["fg"]) if "fg" in d else base.fg,
        bg=_rgb(d["bg"]) if "bg" in d else base.bg,
        rv=bool(d.get("rv", base.rv)),
        bold=bool(d.get("bold", base.bold)),
    )


def build_style_from_defaults(defaults: Dict[str, Any]) -> ScrollBoxStyle:
    """ Overlay `theme.scrollbox` and `keys` from YAML onto ScrollBoxStyle defaults. """
    st = ScrollBoxStyle()
    sb = _get(defaults, "theme.scrollbox", {}) or {}

    st.scrollbar   = _pen_from(sb.get("scrollbar", {}) or {}, st.scrollbar)
    st.scrollmark  = _pen_from(sb.get("scrollmark", {}) or {}, st.scrollmark)
    st.arrow       = _pen_from(sb.get("arrow", {}) or {}, st.arrow)
    st.arrow_up    = str(sb.get("arrow_up", st.arrow_up))
    st.arrow_down  = str(sb.get("arrow_down", st.arrow_down))
    st.arrow_left  = str(sb.get("arrow_left", st.arrow_left))
    st.arrow_right = str(sb.get("arrow_right", st.arrow_right))

    st.keys = load_key_bindings(defaults)
    return st


def build_text_style_from_defaults(defaults: Dict[str, Any]) -> TextStyle:
    tx = _get(defaults, "theme.text", {}) or {}
    return TextStyle(pen=_pen_from(tx, Pen()))


def load_key_bindings(defaults: Dict[str, Any]) -> Dict[str, str]:
    """
    Default bindings, overridden by the YAML `keys` mapping (key name -> action).
    A null action unbinds the key; unknown action names are dropped.
    """
    keys = default_key_bindings()
    for key, action in (defaults.get("keys", {}) or {}).items():
        if action is None:
            keys.pop(str(key), None)
        elif action in ACTION_NAMES:
            keys[str(key)] = str(action)
        else:
            logger.warning("Ignoring binding %s -> %r: unknown scroll action", key, action)
    return keys
