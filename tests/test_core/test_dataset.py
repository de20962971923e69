# tests/test_core/test_dataset.py
"""Dataset Tests
================

Unit tests for building the character catalog:

1. `Dataset.from_records` sorts, deduplicates and packs names into one store.
2. Invalid record sets raise `DatasetError`.
3. `parse_blocks` reads `Blocks.txt` lines and skips comments and junk.
4. The bundled block list and the `unicodedata` catalog load.
"""

import unicodedata

import pytest

from ubrowse.core.Dataset import (
    BLOCKS_UNICODE_VERSION,
    BlockRange,
    Dataset,
    DatasetError,
    is_combining_char,
    load_blocks,
    load_dataset,
    parse_blocks,
)


def test_from_records_sorts_and_deduplicates():
    ds = Dataset.from_records(
        [
            (0x43, "LATIN CAPITAL LETTER C", False),
            (0x41, "LATIN CAPITAL LETTER A", False),
            (0x43, "SHOULD BE DROPPED", False),
        ]
    )
    assert [e.codepoint for e in ds.entries] == [0x41, 0x43]
    assert ds.name_of(1) == "LATIN CAPITAL LETTER C"
    assert len(ds) == 2


def test_names_are_contiguous(small_dataset):
    """Each entry's (offset, length) addresses its name in the shared store."""
    offset = 0
    for i, entry in enumerate(small_dataset.entries):
        assert entry.name_offset == offset
        assert small_dataset.names[offset : offset + entry.name_length].decode() == small_dataset.name_of(i)
        offset += entry.name_length
    assert offset == len(small_dataset.names)


def test_empty_records_raise():
    with pytest.raises(DatasetError):
        Dataset.from_records([])


def test_out_of_range_codepoint_raises():
    with pytest.raises(DatasetError):
        Dataset.from_records([(0x110000, "TOO HIGH", False)])


def test_blocks_are_ordered():
    ds = Dataset.from_records(
        [(0x41, "A", False)],
        [BlockRange(0x80, 0xFF, "Second"), BlockRange(0, 0x7F, "First")],
    )
    assert [b.name for b in ds.blocks] == ["First", "Second"]


class TestParseBlocks:
    def test_reads_ranges_and_skips_comments(self):
        text = (
            "# Blocks-15.1.0.txt\n"
            "\n"
            "0000..007F; Basic Latin\n"
            "0080..00FF; Latin-1 Supplement  # trailing comment\n"
        )
        assert parse_blocks(text) == [
            BlockRange(0x0000, 0x007F, "Basic Latin"),
            BlockRange(0x0080, 0x00FF, "Latin-1 Supplement"),
        ]

    def test_skips_malformed_and_inverted_lines(self, caplog):
        text = "nonsense\n00FF..0080; Backwards\n0100..017F; Latin Extended-A\n"
        assert parse_blocks(text) == [BlockRange(0x0100, 0x017F, "Latin Extended-A")]
        assert "malformed" in caplog.text
        assert "inverted" in caplog.text


def test_is_combining_char():
    assert is_combining_char("\u0301")
    assert is_combining_char("\u20dd")  # enclosing circle, category Me
    assert not is_combining_char("a")


def test_bundled_blocks_load():
    blocks = load_blocks()
    assert blocks[0] == BlockRange(0x0000, 0x007F, "Basic Latin")
    assert all(b.first <= b.last for b in blocks)
    assert any(b.name == "Emoticons" for b in blocks)


def test_load_dataset_uses_unicodedata():
    ds = load_dataset()
    assert ds.version == unicodedata.unidata_version
    codepoints = [e.codepoint for e in ds.entries]
    assert codepoints == sorted(set(codepoints))
    i = codepoints.index(0x41)
    assert ds.name_of(i) == "LATIN CAPITAL LETTER A"
    # Unnamed control characters are not part of the catalog.
    assert codepoints[0] == 0x20


def test_block_list_version_mismatch_is_logged(caplog):
    load_dataset("14.0.0")
    assert "block list is Unicode %s" % BLOCKS_UNICODE_VERSION in caplog.text


def test_matching_block_list_version_is_quiet(caplog):
    load_dataset(BLOCKS_UNICODE_VERSION)
    assert "block list is Unicode" not in caplog.text
