from dataclasses import dataclass, replace, field
from typing import Dict, Optional

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Pen:
    """ Visual attributes for a cell. `None` colours fall back to the host defaults. """
    fg: Optional[RGB] = None
    bg: Optional[RGB] = None
    rv: bool = False
    bold: bool = False

    def derive(self, **overrides) -> "Pen":
        return replace(self, **overrides)


def default_key_bindings() -> Dict[str, str]:
    return {
        "Up":       "up_1",
        "Down":     "down_1",
        "PageUp":   "up_half",
        "PageDown": "down_half",
        "C-Home":   "to_top",
        "C-End":    "to_bottom",
        "Left":     "left_1",
        "Right":    "right_1",
        "C-Left":   "left_half",
        "C-Right":  "right_half",
        "Home":     "to_leftmost",
        "End":      "to_rightmost",
    }


@dataclass
class ScrollBoxStyle:
    scrollbar: Pen = field(default_factory=lambda: Pen(bg=(0, 0, 170)))     # gutter / track
    scrollmark: Pen = field(default_factory=lambda: Pen(bg=(0, 170, 0)))    # thumb
    arrow: Pen = field(default_factory=lambda: Pen(rv=True))
    arrow_up: str = "▴"
    arrow_down: str = "▾"
    arrow_left: str = "◂"
    arrow_right: str = "▸"
    keys: Dict[str, str] = field(default_factory=default_key_bindings)  # key name -> action name

    def derive(self, **overrides) -> "ScrollBoxStyle":
        """ Create a variant style without mutating the base. """
        return replace(self, **overrides)

    def action_for(self, key: str) -> Optional[str]:
        return self.keys.get(key)


@dataclass
class TextStyle:
    pen: Pen = field(default_factory=Pen)

    def derive(self, **overrides) -> "TextStyle":
        return replace(self, **overrides)
