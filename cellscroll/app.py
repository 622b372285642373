from __future__ import annotations

import logging

import pygame

from cellscroll.settings import AppCfg
from cellscroll.input_router import InputRouter
from cellscroll.ui.fonts import GlyphCache
from cellscroll.ui.style import Pen
from cellscroll.ui.widget import Widget
from cellscroll.ui.window import CellWindow

logger = logging.getLogger(__name__)


class TerminalApp:
    """
    Minimal app shell: a pygame window painted as a grid of character cells.
    Owns the root CellWindow, feeds translated input to the root widget and
    repaints whenever a widget has asked for a redraw.
    """

    def __init__(self, cfg: AppCfg, root: Widget):
        self.cfg = cfg
        self.root = root
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        # Cell metrics
        self.glyphs = GlyphCache()
        self._font = self.glyphs.key(cfg.window.font_path, cfg.window.font_size)
        self._font_bold = self.glyphs.key(cfg.window.font_path, cfg.window.font_size, bold=True)
        self.cell_w, self.cell_h = self.glyphs.cell_size(self._font)

        # Window/display
        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (cfg.window.cols * self.cell_w, cfg.window.lines * self.cell_h),
            flags=self._flags,
        )

        self.router = InputRouter(self.cell_w, self.cell_h)
        self.root_window = CellWindow.root(cfg.window.lines, cfg.window.cols)
        self.root.assign_window(self.root_window)

        # Core loop
        self.clock = pygame.time.Clock()
        self.running = True
        logger.info("Started %dx%d cell terminal (cell %dx%d px)",
                    cfg.window.cols, cfg.window.lines, self.cell_w, self.cell_h)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running:
            self.clock.tick(self.cfg.fps)

            # ---- event pump -------------------------------------------------
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    self.running = False
                    break

                if e.type == pygame.VIDEORESIZE:
                    self._resize_to(e.w, e.h)
                    continue

                consumed = False
                for ev in self.router.translate(e):
                    consumed = self.root.handle_event(ev) or consumed
                if consumed:
                    continue

                # Global hotkeys
                if e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_ESCAPE:
                        self.running = False
                        continue
                    if (e.key == pygame.K_q) and (pygame.key.get_mods() & pygame.KMOD_CTRL):
                        self.running = False
                        continue

            # ---- draw (only when something asked for it) -------------------
            if self.root_window.take_exposed():
                self.paint()
                pygame.display.flip()

        pygame.quit()

    def paint(self) -> None:
        """ Re-render the widget tree into the cell buffer and blit it. """
        buf = self.root_window.buffer
        buf.clear()
        self.root.render()

        default_fg = self.cfg.window.fg_rgb
        default_bg = self.cfg.window.bg_rgb
        self.screen.fill(default_bg)
        for line, row in enumerate(buf.rows()):
            y = line * self.cell_h
            for col, cell in enumerate(row):
                fg, bg = self._colours(cell.pen, default_fg, default_bg)
                x = col * self.cell_w
                if bg != default_bg:
                    self.screen.fill(bg, pygame.Rect(x, y, self.cell_w, self.cell_h))
                if cell.char != " ":
                    font = self._font_bold if cell.pen.bold else self._font
                    self.screen.blit(self.glyphs.glyph(font, cell.char, fg), (x, y))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _colours(pen: Pen, default_fg, default_bg):
        fg = pen.fg or default_fg
        bg = pen.bg or default_bg
        if pen.rv:
            fg, bg = bg, fg
        return fg, bg

    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface and resize the root cell window to fit."""
        w = max(self.cell_w, int(w))
        h = max(self.cell_h, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        lines, cols = h // self.cell_h, w // self.cell_w
        logger.debug("Resized to %dx%d cells", cols, lines)
        self.root_window.resize(lines, cols)
        self.root_window.expose()
