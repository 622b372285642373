from __future__ import annotations
from dataclasses import dataclass
from collections import OrderedDict
from typing import Tuple, Optional
import pygame

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class FontKey:
    path: Optional[str]
    size: int
    bold: bool = False


@dataclass(frozen=True)
class GlyphKey:
    font: FontKey
    char: str
    color: RGB


class GlyphCache:
    """
    LRU caches for the cell painter:
      - fonts, keyed by FontKey
      - rendered single-character surfaces, keyed by GlyphKey
    """

    def __init__(self, max_glyphs: int = 2048, max_fonts: int = 8) -> None:
        self._fonts: "OrderedDict[FontKey, pygame.font.Font]" = OrderedDict()
        self._glyphs: "OrderedDict[GlyphKey, pygame.Surface]" = OrderedDict()
        self._max_fonts = max(1, int(max_fonts))
        self._max_glyphs = max(1, int(max_glyphs))

    # ---------- Public ----------
    def key(self, path: Optional[str], size: int, *, bold: bool = False) -> FontKey:
        return FontKey(path, int(size), bool(bold))

    def font(self, k: FontKey) -> pygame.font.Font:
        f = self._fonts.get(k)
        if f is not None:
            self._fonts.move_to_end(k)
            return f

        if k.path is None:
            f = pygame.font.SysFont("monospace", k.size, bold=k.bold)
        else:
            f = pygame.font.Font(k.path, k.size)
            if k.bold:
                f.set_bold(True)

        self._fonts[k] = f
        while len(self._fonts) > self._max_fonts:
            self._fonts.popitem(last=False)
        return f

    def cell_size(self, k: FontKey) -> Tuple[int, int]:
        """ (width, height) of one character cell for this font. """
        f = self.font(k)
        w, _ = f.size("M")
        return max(1, w), max(1, f.get_linesize())

    def glyph(self, k: FontKey, char: str, color: RGB) -> pygame.Surface:
        gk = GlyphKey(k, char, tuple(color))
        surf = self._glyphs.get(gk)
        if surf is not None:
            self._glyphs.move_to_end(gk)
            return surf

        surf = self.font(k).render(char, True, color)
        self._glyphs[gk] = surf
        while len(self._glyphs) > self._max_glyphs:
            self._glyphs.popitem(last=False)
        return surf

    def clear(self) -> None:
        self._fonts.clear()
        self._glyphs.clear()
