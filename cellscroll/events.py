from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class WheelDirection(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class MousePress:
    line: int
    col: int
    button: int = 1


@dataclass(frozen=True)
class MouseDragStart:
    line: int
    col: int
    button: int = 1


@dataclass(frozen=True)
class MouseDrag:
    line: int
    col: int
    button: int = 1


@dataclass(frozen=True)
class MouseDragStop:
    line: int
    col: int
    button: int = 1


@dataclass(frozen=True)
class MouseWheel:
    line: int
    col: int
    direction: WheelDirection


@dataclass(frozen=True)
class KeyPress:
    key: str        # e.g. "Up", "PageDown", "C-Home"


MouseEvent = Union[MousePress, MouseDragStart, MouseDrag, MouseDragStop, MouseWheel]
InputEvent = Union[MousePress, MouseDragStart, MouseDrag, MouseDragStop, MouseWheel, KeyPress]


def translated(ev: MouseEvent, dline: int, dcol: int) -> MouseEvent:
    """ Same event, with its position moved by (-dline, -dcol). """
    if isinstance(ev, MouseWheel):
        return MouseWheel(ev.line - dline, ev.col - dcol, ev.direction)
    return type(ev)(ev.line - dline, ev.col - dcol, ev.button)
