# ubrowse/core/TableGeometry.py
"""ubrowse.core.TableGeometry
============================

How the character table fits a terminal: how many columns, how wide each
one is, how many entries one screen shows and how far the leading entry
may scroll.

The functions take terminal dimensions and return plain values; both the
session state machine and the renderer read the same `Layout`.
"""

from dataclasses import dataclass


MIN_COLUMN_WIDTH = 8


@dataclass(frozen=True)
class Layout:
    """Geometry derived from the terminal size, column request and catalog size."""

    width: int
    height: int
    column_count: int
    column_width: int
    visible_rows: int
    table_size: int
    max_leading: int

    def clamp(self, index: int) -> int:
        """Clamp a leading index into `[0, max_leading]`."""
        return min(max(index, 0), self.max_leading)


def max_columns(width: int) -> int:
    """The most columns a terminal `width` cells wide can hold."""
    return max(1, (width - 1) // (MIN_COLUMN_WIDTH + 1))


def clamp_columns(columns: int, width: int) -> int:
    return min(max(columns, 1), max_columns(width))


def compute_layout(width: int, height: int, columns: int, total: int) -> Layout:
    """Compute the table geometry for a `width` x `height` terminal.

    The last terminal row is reserved for the status line or prompt, so
    at least one table row is always reported even on degenerate sizes.
    """
    column_count = clamp_columns(columns, width)
    column_width = max(width, 0) // column_count
    visible_rows = max(1, height - 1)
    table_size = visible_rows * column_count
    return Layout(
        width=width,
        height=height,
        column_count=column_count,
        column_width=column_width,
        visible_rows=visible_rows,
        table_size=table_size,
        max_leading=max(0, total - table_size),
    )
