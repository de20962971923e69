# ubrowse/ui/CursesSurface.py
"""ubrowse.ui.CursesSurface
==========================

The display surface the renderer draws on, implemented over a curses window.

Renderer code only speaks the small `CursesSurface` vocabulary (clear,
write text, write a glyph, styles, cursor, flush, bell), which keeps drawing logic
testable with a fake surface that records calls instead of painting.
"""

import curses
import logging
from typing import Any, Optional, Union


logger = logging.getLogger("ubrowse.surface")

STYLE_NORMAL = "normal"
STYLE_HIGHLIGHT = "highlight"
STYLE_DIM = "dim"


class CursesSurface:
    """Draws onto a curses window (normally ``stdscr``)."""

    def __init__(self, window: Any) -> None:
        self.window = window
        self._styles = {
            STYLE_NORMAL: curses.A_NORMAL,
            STYLE_HIGHLIGHT: curses.A_STANDOUT,
            STYLE_DIM: curses.A_DIM,
        }

    def size(self) -> tuple[int, int]:
        """Current `(height, width)` of the window."""
        return self.window.getmaxyx()

    def clear(self) -> None:
        self.window.erase()

    def _attr(self, style: Union[str, tuple[str, ...]]) -> int:
        """Curses attribute for one style name or a combination of them."""
        if isinstance(style, str):
            return self._styles.get(style, curses.A_NORMAL)
        attr = curses.A_NORMAL
        for name in style:
            attr |= self._styles.get(name, curses.A_NORMAL)
        return attr

    def write(self, y: int, x: int, text: str, style: Union[str, tuple[str, ...]] = STYLE_NORMAL) -> None:
        """Write `text` at `(y, x)`, clipped to the window edge.

        `style` is a style name or a tuple of names applied together.
        """
        height, width = self.window.getmaxyx()
        if y < 0 or y >= height or x < 0 or x >= width or not text:
            return
        try:
            self.window.addnstr(y, x, text, width - x, self._attr(style))
        except curses.error as e:
            # Writing the bottom-right cell moves the cursor off-screen.
            logger.debug("addnstr(%d, %d) failed: %s", y, x, e)

    def write_glyph(self, y: int, x: int, glyph: str, glyph_width: int = 1) -> None:
        """Write a glyph cluster (a base character plus an optional mark)
        that occupies `glyph_width` cells; glyphs that would cross the right
        edge are skipped.
        """
        height, width = self.window.getmaxyx()
        if y < 0 or y >= height or x < 0 or x + max(glyph_width, 1) > width:
            return
        try:
            self.window.addstr(y, x, glyph)
        except curses.error as e:
            logger.debug("addstr(%d, %d, %r) failed: %s", y, x, glyph, e)

    def set_cursor(self, position: Optional[tuple[int, int]]) -> None:
        """Show the cursor at `(y, x)`, or hide it when `position` is None."""
        try:
            if position is None:
                curses.curs_set(0)
                return
            curses.curs_set(1)
            height, width = self.window.getmaxyx()
            y, x = position
            self.window.move(min(max(y, 0), height - 1), min(max(x, 0), width - 1))
        except curses.error as e:
            logger.debug("Cursor update to %s failed: %s", position, e)

    def refresh(self, force: bool = False) -> None:
        if force:
            self.window.clearok(True)
        self.window.refresh()

    def beep(self) -> None:
        try:
            curses.beep()
        except curses.error as e:
            logger.debug("beep failed: %s", e)
