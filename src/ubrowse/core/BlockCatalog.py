# ubrowse/core/BlockCatalog.py
"""ubrowse.core.BlockCatalog
===========================

The ordered list of named Unicode blocks, with a per-block flag telling
whether any catalog entry falls inside the block's range.
"""

from functools import cached_property

from ubrowse.core.CharacterIndex import CharacterIndex
from ubrowse.core.Dataset import BlockRange


class BlockCatalog:
    """Blocks of the catalog, ordered by their first codepoint."""

    def __init__(self, index: CharacterIndex) -> None:
        self.index = index
        self.blocks: tuple[BlockRange, ...] = index.dataset.blocks

    def __len__(self) -> int:
        return len(self.blocks)

    def __getitem__(self, position: int) -> BlockRange:
        return self.blocks[position]

    @cached_property
    def empty_mask(self) -> tuple[bool, ...]:
        """`True` at each position whose block contains no catalog entry."""
        return tuple(not self._has_entries(block) for block in self.blocks)

    def _has_entries(self, block: BlockRange) -> bool:
        # The nearest entry to `first` is either inside the block or just
        # below it, in which case its successor is the only candidate left.
        index = self.index
        nearest = index.lookup_nearest(block.first)
        for candidate in (nearest, nearest + 1):
            if candidate < len(index) and block.first <= index.codepoint(candidate) <= block.last:
                return True
        return False

    def is_empty(self, position: int) -> bool:
        return self.empty_mask[position]

    def initial_selection(self, codepoint: int) -> int:
        """Position of the first block ending at or after `codepoint`.

        Falls back to the last block when `codepoint` lies past every block.
        """
        for position, block in enumerate(self.blocks):
            if block.last >= codepoint:
                return position
        return max(len(self.blocks) - 1, 0)
