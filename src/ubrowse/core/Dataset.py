# ubrowse/core/Dataset.py
"""ubrowse.core.Dataset
=======================

Builds the immutable Unicode catalog the browser navigates.

The catalog has three parts:

- a flat tuple of `CodepointEntry` records, strictly increasing by codepoint;
- a single `bytes` name store that holds every character name back to back,
  each entry pointing into it with an (offset, length) pair;
- the list of `BlockRange` records parsed from the bundled `Blocks.txt`.

The data is produced once at startup from the interpreter's `unicodedata`
tables and never mutated afterwards.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from importlib import resources
from typing import Iterable, NamedTuple, Optional


logger = logging.getLogger("ubrowse.dataset")

LAST_CODEPOINT = 0x10FFFF
BLOCKS_RESOURCE = "Blocks.txt"
# Unicode version the bundled Blocks.txt was taken from.
BLOCKS_UNICODE_VERSION = "15.1.0"

_BLOCK_LINE = re.compile(r"^([0-9A-Fa-f]+)\.\.([0-9A-Fa-f]+);\s*(.+?)\s*$")
_COMBINING_CATEGORIES = frozenset({"Mn", "Me"})


class DatasetError(RuntimeError):
    """Raised when the character catalog cannot be built."""


class CodepointEntry(NamedTuple):
    codepoint: int
    name_offset: int
    name_length: int
    is_combining: bool


class BlockRange(NamedTuple):
    first: int
    last: int
    name: str


@dataclass(frozen=True)
class Dataset:
    """The static catalog: entries, their name store, blocks and version label."""

    entries: tuple[CodepointEntry, ...]
    names: bytes
    blocks: tuple[BlockRange, ...]
    version: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    def name_of(self, index: int) -> str:
        """Return the official name of the entry at `index`."""
        entry = self.entries[index]
        raw = self.names[entry.name_offset : entry.name_offset + entry.name_length]
        return raw.decode("ascii", errors="replace")

    @classmethod
    def from_records(
        cls,
        records: Iterable[tuple[int, str, bool]],
        blocks: Iterable[BlockRange] = (),
        version: str = "",
    ) -> "Dataset":
        """Build a dataset from `(codepoint, name, is_combining)` records.

        Records may arrive in any order; they are sorted by codepoint and
        duplicates keep the first name seen.

        Raises:
            DatasetError: If no records are supplied or a codepoint is out of range.
        """
        by_codepoint: dict[int, tuple[str, bool]] = {}
        for codepoint, name, is_combining in records:
            if not 0 <= codepoint <= LAST_CODEPOINT:
                raise DatasetError(f"Codepoint out of range: {codepoint:#x}")
            by_codepoint.setdefault(codepoint, (name, bool(is_combining)))

        if not by_codepoint:
            raise DatasetError("The character catalog is empty.")

        entries: list[CodepointEntry] = []
        chunks: list[bytes] = []
        offset = 0
        for codepoint in sorted(by_codepoint):
            name, is_combining = by_codepoint[codepoint]
            encoded = name.encode("ascii", errors="replace")
            entries.append(CodepointEntry(codepoint, offset, len(encoded), is_combining))
            chunks.append(encoded)
            offset += len(encoded)

        ordered_blocks = tuple(sorted(blocks, key=lambda block: block.first))
        return cls(tuple(entries), b"".join(chunks), ordered_blocks, version)


def is_combining_char(char: str) -> bool:
    """True for marks meant to render merged onto a preceding base character."""
    return (
        unicodedata.category(char) in _COMBINING_CATEGORIES
        or unicodedata.combining(char) != 0
    )


def iter_unicode_records() -> Iterable[tuple[int, str, bool]]:
    """Yield a record for every codepoint `unicodedata` knows a name for."""
    for codepoint in range(LAST_CODEPOINT + 1):
        char = chr(codepoint)
        name = unicodedata.name(char, None)
        if name is None:
            continue
        yield codepoint, name, is_combining_char(char)


def parse_blocks(text: str) -> list[BlockRange]:
    """Parse the `XXXX..YYYY; Name` lines of a Unicode `Blocks.txt` file."""
    blocks: list[BlockRange] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        match = _BLOCK_LINE.match(line)
        if not match:
            logger.warning("Skipping malformed block line: %r", line)
            continue
        first, last = int(match.group(1), 16), int(match.group(2), 16)
        if first > last:
            logger.warning("Skipping inverted block range: %r", line)
            continue
        blocks.append(BlockRange(first, last, match.group(3)))
    return blocks


def load_blocks() -> list[BlockRange]:
    """Read the block list bundled with the package."""
    try:
        text = (
            resources.files("ubrowse.data")
            .joinpath(BLOCKS_RESOURCE)
            .read_text(encoding="utf-8")
        )
    except (FileNotFoundError, ModuleNotFoundError) as e:
        raise DatasetError(f"Could not read the bundled block list: {e}") from e
    return parse_blocks(text)


def load_dataset(version: Optional[str] = None) -> Dataset:
    """Build the full catalog from `unicodedata` and the bundled block list."""
    label = unicodedata.unidata_version if version is None else version
    dataset = Dataset.from_records(iter_unicode_records(), load_blocks(), label)
    logger.info(
        "Loaded %d characters and %d blocks (Unicode %s).",
        len(dataset.entries),
        len(dataset.blocks),
        dataset.version or "unknown",
    )
    if dataset.version != BLOCKS_UNICODE_VERSION:
        logger.warning(
            "Character data is Unicode %s but the block list is Unicode %s; "
            "blocks from other versions may show as empty.",
            dataset.version or "unknown",
            BLOCKS_UNICODE_VERSION,
        )
    return dataset
