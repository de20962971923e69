# ubrowse/core/CharacterIndex.py
"""ubrowse.core.CharacterIndex
==============================

Nearest-match lookups over the sorted entry sequence of a `Dataset`.

Every lookup resolves to a valid index: a codepoint that is not assigned
snaps to whichever neighbour is numerically closer, preferring the larger
codepoint on a tie, and values outside the catalog clamp to its first or
last entry.
"""

from bisect import bisect_left

from ubrowse.core.Dataset import CodepointEntry, Dataset, DatasetError


## ================= CharacterIndex Class ==============================
class CharacterIndex:
    """Binary-searchable view of the catalog's codepoints.

    Attributes:
        dataset (Dataset): The catalog this index was built over.
        codepoints (list[int]): Codepoint of each entry, in entry order.
    """

    def __init__(self, dataset: Dataset) -> None:
        if not dataset.entries:
            raise DatasetError("Cannot index an empty character catalog.")
        self.dataset = dataset
        self.codepoints: list[int] = [entry.codepoint for entry in dataset.entries]

    def __len__(self) -> int:
        return len(self.codepoints)

    def entry(self, index: int) -> CodepointEntry:
        return self.dataset.entries[index]

    def codepoint(self, index: int) -> int:
        return self.codepoints[index]

    def lookup_nearest(self, value: int) -> int:
        """Return the index of `value`, or of the closest assigned codepoint.

        Ties between the two straddling entries go to the larger codepoint.
        """
        codepoints = self.codepoints
        pos = bisect_left(codepoints, value)
        if pos < len(codepoints) and codepoints[pos] == value:
            return pos
        if pos == 0:
            return 0
        if pos == len(codepoints):
            return len(codepoints) - 1
        below, above = pos - 1, pos
        if value - codepoints[below] < codepoints[above] - value:
            return below
        return above

    def offset_by_delta(self, index: int, delta: int) -> int:
        """Move `delta` codepoints away from entry `index`, snapping to the nearest entry."""
        return self.lookup_nearest(self.codepoints[index] + delta)
