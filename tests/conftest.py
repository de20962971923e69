# tests/conftest.py
"""Pytest configuration with shared fixtures for the ubrowse tests.

Provides small in-memory catalogs (so no test needs the full Unicode table),
a recording display surface, a mock stdscr and a mutable terminal size.
"""

from __future__ import annotations

from typing import Any, Generator, Optional
from unittest.mock import MagicMock, patch

import pytest

from ubrowse.core import (
    BlockCatalog,
    BlockRange,
    BrowserSession,
    CharacterIndex,
    Dataset,
    NameSearch,
)


# --- curses functions that need an initialized screen ---
@pytest.fixture(autouse=True)
def mock_curses_functions() -> Generator[MagicMock, None, None]:
    """Patch the curses calls that fail without `initscr()`.

    Yields:
        MagicMock: The mock standing in for `curses.beep`.
    """
    with patch("curses.beep") as beep, patch("curses.curs_set"):
        yield beep


# --- Catalog fixtures ---
SMALL_RECORDS = [
    (0x0041, "LATIN CAPITAL LETTER A", False),
    (0x0042, "LATIN CAPITAL LETTER B", False),
    (0x0043, "LATIN CAPITAL LETTER C", False),
    (0x0045, "LATIN CAPITAL LETTER E", False),
    (0x0300, "COMBINING GRAVE ACCENT", True),
    (0x1F600, "GRINNING FACE", False),
]

SMALL_BLOCKS = [
    BlockRange(0x0000, 0x007F, "Basic Latin"),
    BlockRange(0x0080, 0x00FF, "Latin-1 Supplement"),
    BlockRange(0x0300, 0x036F, "Combining Diacritical Marks"),
    BlockRange(0x2000, 0x206F, "General Punctuation"),
    BlockRange(0x1F600, 0x1F64F, "Emoticons"),
]

WIDE_FIRST = 0x0100
WIDE_COUNT = 200

WIDE_BLOCKS = [
    BlockRange(0x0000, 0x00FF, "Low"),
    BlockRange(0x0100, 0x017F, "Middle"),
    BlockRange(0x0180, 0x01FF, "High"),
    BlockRange(0x2000, 0x20FF, "Far"),
]


@pytest.fixture
def small_dataset() -> Dataset:
    """Six entries: A, B, C, E, a combining mark and an emoji."""
    return Dataset.from_records(SMALL_RECORDS, SMALL_BLOCKS, "15.1.0")


@pytest.fixture
def wide_dataset() -> Dataset:
    """200 consecutive entries from U+0100, named ``TEST CHARACTER XXXX``."""
    records = [
        (cp, f"TEST CHARACTER {cp:04X}", False)
        for cp in range(WIDE_FIRST, WIDE_FIRST + WIDE_COUNT)
    ]
    return Dataset.from_records(records, WIDE_BLOCKS, "15.1.0")


# --- Terminal fixtures ---
class TerminalSize:
    """Mutable `(height, width)` standing in for the translator's cached size."""

    def __init__(self, height: int = 11, width: int = 40) -> None:
        self.height = height
        self.width = width

    def __call__(self) -> tuple[int, int]:
        return self.height, self.width


class FakeSurface:
    """Display surface that records drawing calls instead of painting."""

    def __init__(self, size: TerminalSize) -> None:
        self._size = size
        self.writes: list[tuple[int, int, str, Any]] = []
        self.glyphs: list[tuple[int, int, str, int]] = []
        self.cursor: Optional[tuple[int, int]] = None
        self.clears = 0
        self.refreshes: list[bool] = []
        self.beeps = 0

    def size(self) -> tuple[int, int]:
        return self._size()

    def clear(self) -> None:
        self.clears += 1
        self.writes.clear()
        self.glyphs.clear()

    def write(self, y: int, x: int, text: str, style: Any = "normal") -> None:
        self.writes.append((y, x, text, style))

    def write_glyph(self, y: int, x: int, glyph: str, glyph_width: int = 1) -> None:
        self.glyphs.append((y, x, glyph, glyph_width))

    def set_cursor(self, position: Optional[tuple[int, int]]) -> None:
        self.cursor = position

    def refresh(self, force: bool = False) -> None:
        self.refreshes.append(force)

    def beep(self) -> None:
        self.beeps += 1

    def text_at(self, y: int) -> list[str]:
        return [text for row, _, text, _ in self.writes if row == y]


@pytest.fixture
def terminal_size() -> TerminalSize:
    return TerminalSize()


@pytest.fixture
def fake_surface(terminal_size: TerminalSize) -> FakeSurface:
    return FakeSurface(terminal_size)


@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


def make_session(dataset: Dataset, size: TerminalSize, **kwargs: Any) -> BrowserSession:
    """Build a session over `dataset` whose alerts are counted on `session.alerts`."""
    index = CharacterIndex(dataset)
    alerts = MagicMock()
    session = BrowserSession(
        index=index,
        search=NameSearch(dataset),
        blocks=BlockCatalog(index),
        dimensions=size,
        alert=alerts,
        **kwargs,
    )
    session.alerts = alerts  # type: ignore[attr-defined]
    return session


@pytest.fixture
def wide_session(wide_dataset: Dataset, terminal_size: TerminalSize) -> BrowserSession:
    """Session over the 200-entry catalog on an 11x40 terminal (10 rows, 2 columns)."""
    return make_session(wide_dataset, terminal_size)


@pytest.fixture
def small_session(small_dataset: Dataset) -> BrowserSession:
    """Session over the six-entry catalog on a 7x80 terminal."""
    return make_session(small_dataset, TerminalSize(7, 80))


@pytest.fixture
def session_factory():
    """Return `make_session` so tests can build sessions with custom settings."""
    return make_session


@pytest.fixture
def size_factory():
    return TerminalSize
