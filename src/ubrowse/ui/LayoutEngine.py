# ubrowse/ui/LayoutEngine.py
"""ubrowse.ui.LayoutEngine
=========================

How a single catalog entry is squeezed into its table cell: the hex label,
the (possibly elided) name and the right-aligned glyph.

Nothing here touches curses. Column geometry lives in
`ubrowse.core.TableGeometry`.

Cell anatomy (``cell`` = column width minus the one-cell gutter)::

    " 0041 LATIN CAPITAL LETTER A     A"
     label  name (maybe elided)   glyph
"""

from dataclasses import dataclass
from typing import Optional

from wcwidth import wcswidth, wcwidth

from ubrowse.core.TableGeometry import MIN_COLUMN_WIDTH


ELLIPSIS = "…"
LABEL_WIDTH = 5


## ===================== Cells ==============================
def glyph_width(char: str, is_combining: bool, show_combining: bool) -> int:
    """Terminal cells the glyph of `char` occupies as drawn in a cell."""
    width = wcwidth(char)
    if width < 0:
        width = 0
    if width == 0 and is_combining and show_combining:
        width = 1
    return width


def text_width(text: str) -> int:
    """Terminal cells a line of typed text occupies."""
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def hex_label(codepoint: int) -> str:
    label = f"{codepoint:04X}"
    return label.rjust(max(LABEL_WIDTH, len(label)))


def elide_name(name: str, budget: int) -> str:
    """Fit `name` into `budget` cells, eliding its middle or head with an ellipsis."""
    if budget >= len(name):
        return name
    if budget > 6:
        head = budget // 2
        tail = budget - head - 1
        return name[:head] + ELLIPSIS + name[len(name) - tail :]
    if budget > 1:
        return ELLIPSIS + name[len(name) - (budget - 1) :]
    return ELLIPSIS


@dataclass(frozen=True)
class CellText:
    """What to draw for one entry: left-hand text and an optional right-aligned glyph.

    Attributes:
        text: Label plus the (possibly elided) name, drawn at the cell origin.
        glyph: String to draw at `glyph_offset`, or None when the glyph is
            zero-width and not being accented.
        glyph_width: Cells the glyph occupies.
        glyph_offset: Column of the glyph relative to the cell origin.
    """

    text: str
    glyph: Optional[str]
    glyph_width: int
    glyph_offset: int


def format_cell(
    codepoint: int,
    name: str,
    is_combining: bool,
    cell_width: int,
    show_combining: bool = True,
    accent: int = 0x00B7,
) -> Optional[CellText]:
    """Lay out a single entry in a cell `cell_width` cells wide.

    Returns None when the cell is narrower than `MIN_COLUMN_WIDTH`.
    """
    if cell_width < MIN_COLUMN_WIDTH:
        return None

    char = chr(codepoint)
    width = glyph_width(char, is_combining, show_combining)
    label = hex_label(codepoint)
    text = label
    if len(label) + 3 < cell_width:
        text += " " + elide_name(name, cell_width - 7 - width)

    if width == 0:
        return CellText(text, None, 0, cell_width)
    if is_combining and show_combining:
        glyph = chr(accent) + char
    else:
        glyph = char
    return CellText(text, glyph, width, cell_width - width)
