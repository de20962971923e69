# ubrowse/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders one frame of the browser from the current `BrowserSession`.

It is responsible for:
- the multi-column character table and its `[XXXX - YYYY]` range status line,
- the block list, centered on the selection, with empty blocks dimmed,
- the one-line text prompt drawn over the status line,
- the help and version overlays drawn on top of the view they were opened from.

All output goes through a display surface (`CursesSurface` in the program,
a recording fake in tests); this class never calls curses directly.
"""

import logging
from typing import TYPE_CHECKING, Any

from ubrowse.core.Commands import Mode, OverlayContext
from ubrowse.ui.CursesSurface import STYLE_DIM, STYLE_HIGHLIGHT, STYLE_NORMAL
from ubrowse.ui.LayoutEngine import format_cell, text_width

if TYPE_CHECKING:
    from ubrowse.core.ViewState import BrowserSession


logger = logging.getLogger("ubrowse.draw")

MAIN_HELP_TEXT = (
    "Spc    Move forward one screenful   Bkspc  Move back one screenful",
    "Right  Move forward one column      Left   Move back one column",
    "Down   Move forward one row         Up     Move back one row",
    "}      Move forward by U+1000       {      Move back by U+1000",
    "[      Add another column           ]      Reduce number of columns",
    "U or S Go to a specific codepoint   J or B Jump to a selected block",
    "/      Search forward for a codepoint name containing a substring",
    "N      Repeat the last search       P      To previous search result",
    "V      Display Unicode version      ?      Display this help text",
    "^L     Redraw the screen            Q      Exit the program",
)

BLOCK_HELP_TEXT = (
    "Spc    Move forward one screenful   Bkspc  Move back one screenful",
    "Down   Move forward one row         Up     Move back one row",
    "}      Move to end of list          {      Move to top of list",
    "Enter  View the characters at the selected block",
    "V      Display Unicode version      ?      Display this help text",
    "^L     Redraw the screen            Q      Cancel and return",
)

CONTINUE_MESSAGE = "[Press any key to continue]"
BLOCK_LIST_TITLE = "Character Blocks"


## ================= DrawScreen Class ==============================
class DrawScreen:
    """Renders a `BrowserSession` onto a display surface.

    Attributes:
        session (BrowserSession): State being displayed.
        surface: Display surface receiving the drawing calls.
    """

    def __init__(self, session: "BrowserSession", surface: Any) -> None:
        self.session = session
        self.surface = surface
        self._force_redraw = False

    def request_full_redraw(self) -> None:
        """Repaint every cell on the next frame (after ^L or a resize)."""
        self._force_redraw = True

    def draw(self) -> None:
        """Draw the frame for the session's current mode."""
        session = self.session
        self.surface.clear()

        cursor = None
        mode = session.mode
        if mode is Mode.HELP_OVERLAY:
            mode = session.overlay_return

        if mode is Mode.BLOCK_SELECT:
            self.draw_block_list()
        else:
            self.draw_table()
            if mode is Mode.TEXT_PROMPT and session.prompt is not None:
                cursor = self.draw_prompt()

        if session.mode is Mode.HELP_OVERLAY:
            self.draw_overlay()
            cursor = None

        self.surface.set_cursor(cursor)
        self.surface.refresh(force=self._force_redraw)
        self._force_redraw = False

    # ------------------------------------------------------------------
    # Character table
    # ------------------------------------------------------------------
    def draw_table(self) -> tuple[int, int]:
        """Draw the table column-major from the leading entry.

        Returns:
            The first and last displayed codepoints.
        """
        session = self.session
        index = session.index
        dataset = index.dataset
        layout = session.layout
        cell_width = layout.column_width - 1

        first = session.leading_index
        current = first
        last = first
        for column in range(layout.column_count):
            x = column * layout.column_width
            for y in range(layout.visible_rows):
                if current >= len(index):
                    break
                entry = index.entry(current)
                self._draw_entry(y, x, cell_width, entry, dataset.name_of(current))
                last = current
                current += 1

        first_cp = index.codepoint(first)
        last_cp = index.codepoint(last)
        self.surface.write(layout.visible_rows, 0, f"[{first_cp:04X} - {last_cp:04X}]")
        return first_cp, last_cp

    def _draw_entry(self, y: int, x: int, cell_width: int, entry, name: str) -> None:
        cell = format_cell(
            entry.codepoint,
            name,
            entry.is_combining,
            cell_width,
            show_combining=self.session.show_combining,
            accent=self.session.accent,
        )
        if cell is None:
            return
        self.surface.write(y, x, cell.text)
        if cell.glyph is not None:
            self.surface.write_glyph(y, x + cell.glyph_offset, cell.glyph, cell.glyph_width)

    # ------------------------------------------------------------------
    # Block list
    # ------------------------------------------------------------------
    def block_list_top(self) -> int:
        """First block shown so that the selection sits near mid-screen."""
        session = self.session
        rows = session.layout.visible_rows
        height, _ = session.dimensions()
        top = session.block_cursor - height // 2
        top = min(top, len(session.blocks) - rows)
        return max(top, 0)

    def draw_block_list(self) -> None:
        session = self.session
        blocks = session.blocks
        layout = session.layout
        name_size = max(layout.width - 32, 0)

        top = self.block_list_top()
        for row, position in enumerate(range(top, min(len(blocks), top + layout.visible_rows))):
            block = blocks[position]
            empty = blocks.is_empty(position)
            if position == session.block_cursor:
                style = (STYLE_HIGHLIGHT, STYLE_DIM) if empty else STYLE_HIGHLIGHT
            elif empty:
                style = STYLE_DIM
            else:
                style = STYLE_NORMAL
            line = "%6s ..%6s  %-*s" % (
                f"{block.first:04X}",
                f"{block.last:04X}",
                name_size,
                block.name,
            )
            self.surface.write(row, 4, line, style)
            if empty:
                self.surface.write(row, 4 + len(line), " [empty]")

        self.surface.write(layout.visible_rows, 0, BLOCK_LIST_TITLE)

    # ------------------------------------------------------------------
    # Prompt and overlays
    # ------------------------------------------------------------------
    def draw_prompt(self) -> tuple[int, int]:
        """Draw the prompt line and return where the cursor belongs."""
        prompt = self.session.prompt
        row = self.session.layout.visible_rows
        line = prompt.label + prompt.text
        self.surface.write(row, 0, " " * self.session.layout.width)
        self.surface.write(row, 0, line)
        return row, text_width(line)

    def draw_overlay(self) -> None:
        session = self.session
        row = session.layout.visible_rows
        if session.overlay is OverlayContext.VERSION:
            self.surface.write(row, 0, " " * session.layout.width)
            self.surface.write(row, 0, f"Unicode version {session.index.dataset.version}")
            return

        lines = BLOCK_HELP_TEXT if session.overlay is OverlayContext.BLOCK_HELP else MAIN_HELP_TEXT
        blank = " " * session.layout.width
        for y, text in enumerate(lines):
            self.surface.write(y, 0, blank)
            self.surface.write(y, 0, "   " + text)
        self.surface.write(len(lines), 0, blank)
        self.surface.write(row, 0, blank)
        self.surface.write(row, 0, CONTINUE_MESSAGE)
