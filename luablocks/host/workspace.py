"""
Workspace holding the blocks of one program.
"""

import itertools
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from .block import Block

if TYPE_CHECKING:
    from ..factory.registry import BlockRegistry

logger = logging.getLogger(__name__)


class Workspace:
    """Creates blocks from registered types and tracks them until disposed"""

    def __init__(self, registry: 'BlockRegistry'):
        self.registry = registry
        self._blocks: Dict[str, Block] = {}
        self._ids = itertools.count(1)

    def new_block(self, block_type: str, block_id: Optional[str] = None) -> Block:
        """
        Create and initialize a block of a registered type.

        Raises:
            KeyError: If the block type is not registered
        """
        entry = self.registry.get(block_type)
        if block_id is None:
            block_id = f"{block_type}_{next(self._ids)}"
        if block_id in self._blocks:
            raise ValueError(f"Duplicate block id: {block_id}")
        block = Block(self, block_type, block_id, entry.schema)
        self._blocks[block_id] = block
        entry.init(block)
        logger.debug("Created block %s", block)
        return block

    def get_block_by_id(self, block_id: str) -> Optional[Block]:
        return self._blocks.get(block_id)

    def remove_block(self, block: Block) -> None:
        self._blocks.pop(block.id, None)

    def all_blocks(self) -> List[Block]:
        return list(self._blocks.values())

    def top_blocks(self) -> List[Block]:
        """Blocks without a parent, in creation order"""
        return [block for block in self._blocks.values() if block.parent is None]

    def clear(self) -> None:
        for block in self.all_blocks():
            block.dispose()
