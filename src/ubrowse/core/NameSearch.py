# ubrowse/core/NameSearch.py
"""ubrowse.core.NameSearch
=========================

Substring search over the official character names.

The search walks the catalog circularly, starting one entry past the
current position in the requested direction and wrapping at either end, so
the starting entry itself is examined last. Instead of decoding each name,
the scan runs `bytes.find`/`bytes.rfind` over the contiguous name store and
maps hits back to entries through the sorted name offsets; a hit that
straddles two adjacent names is discarded.

The last accepted query is remembered so it can be repeated in either
direction.
"""

import logging
from bisect import bisect_right
from typing import Optional

from ubrowse.core.Dataset import Dataset


logger = logging.getLogger("ubrowse.search")

MAX_QUERY_BYTES = 255


## ================= NameSearch Class ==============================
class NameSearch:
    """Circular name search with a single slot of search memory.

    Attributes:
        dataset (Dataset): Catalog whose names are searched.
        last_query (bytes): The normalized last explicit query; empty until
            the first accepted search.
    """

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self.names = dataset.names
        self.offsets: list[int] = [entry.name_offset for entry in dataset.entries]
        self.ends: list[int] = [
            entry.name_offset + entry.name_length for entry in dataset.entries
        ]
        self.last_query: bytes = b""

    @staticmethod
    def normalize(query: str) -> bytes:
        """Case-normalize a user query to the form official names use."""
        return query.upper().encode("utf-8")

    @property
    def has_memory(self) -> bool:
        return bool(self.last_query)

    def find(
        self,
        substring: Optional[str] = None,
        from_index: int = 0,
        direction: int = 1,
    ) -> Optional[int]:
        """Return the next entry whose name contains `substring`, or None.

        An omitted or empty `substring` repeats the remembered query. Queries
        longer than `MAX_QUERY_BYTES` are treated as not found.
        """
        count = len(self.offsets)
        if not count:
            return None
        step = 1 if direction >= 0 else -1

        if substring:
            needle = self.normalize(substring)
            if len(needle) > MAX_QUERY_BYTES:
                logger.debug("Rejected %d-byte search query.", len(needle))
                return None
            remember = True
        elif self.last_query:
            needle = self.last_query
            remember = False
        else:
            logger.debug("Repeat search requested with no previous query.")
            return None

        from_index = min(max(from_index, 0), count - 1)
        if step > 0:
            found = self._scan_forward(needle, from_index + 1, count)
            if found is None:
                found = self._scan_forward(needle, 0, from_index + 1)
        else:
            found = self._scan_backward(needle, 0, from_index)
            if found is None:
                found = self._scan_backward(needle, from_index, count)

        if remember and found is not None:
            self.last_query = needle
        logger.debug(
            "Search %r from %d (dir %+d) -> %s", needle, from_index, step, found
        )
        return found

    def _span(self, first: int, stop: int) -> tuple[int, int]:
        """Byte range of the names of entries `[first, stop)`."""
        return self.offsets[first], self.ends[stop - 1]

    def _owner(self, position: int) -> int:
        return bisect_right(self.offsets, position) - 1

    def _scan_forward(self, needle: bytes, first: int, stop: int) -> Optional[int]:
        if first >= stop:
            return None
        lo, hi = self._span(first, stop)
        while True:
            hit = self.names.find(needle, lo, hi)
            if hit < 0:
                return None
            index = self._owner(hit)
            if hit + len(needle) <= self.ends[index]:
                return index
            lo = hit + 1

    def _scan_backward(self, needle: bytes, first: int, stop: int) -> Optional[int]:
        if first >= stop:
            return None
        lo, hi = self._span(first, stop)
        while True:
            hit = self.names.rfind(needle, lo, hi)
            if hit < 0:
                return None
            index = self._owner(hit)
            if hit + len(needle) <= self.ends[index]:
                return index
            hi = hit + len(needle) - 1
