"""
Block Registry

Maps canonical block names to their schema, initializer and Lua generator.
Entries are only ever added; registering a name twice is an authoring error.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from ..blocks.base import init_block
from ..codegen.lua import GeneratorFunc, generate_lua, number_to_code, text_to_code
from ..common.errors import SchemaError
from ..common.patterns import NUMBER_BLOCK, TEXT_BLOCK
from ..common.schema import CHILD_BLOCK_TYPES, AddChildPolicy, BlockSchema
from ..host.block import Block
from ..host.literals import init_number, init_text

logger = logging.getLogger(__name__)


@dataclass
class BlockType:
    """Everything the host needs to place and generate one kind of block"""
    name: str
    init: Callable[[Block], None]
    generator: Optional[GeneratorFunc]
    schema: Optional[BlockSchema] = None  # None for built-in literal blocks


class BlockRegistry:
    """
    Registry of all available block types.

    Built-in literal blocks ('text' and 'math_number') are registered up
    front unless builtins is False.
    """

    def __init__(self, builtins: bool = True):
        self._types: Dict[str, BlockType] = {}
        if builtins:
            self.register_type(BlockType(TEXT_BLOCK, init_text, text_to_code))
            self.register_type(BlockType(NUMBER_BLOCK, init_number, number_to_code))

    def register(self, schema: BlockSchema) -> BlockType:
        """Register a schema built by one of the factories"""
        dep = schema.dependent
        if dep is not None and dep.add_child != AddChildPolicy.NONE:
            child_type = CHILD_BLOCK_TYPES[dep.check]
            if child_type not in self._types:
                raise SchemaError(
                    f"Block '{schema.block_name}' attaches '{child_type}' blocks, "
                    f"which are not registered")
        generator = None if schema.suppress_lua else generate_lua
        return self.register_type(BlockType(schema.block_name, init_block, generator, schema))

    def register_type(self, block_type: BlockType) -> BlockType:
        """
        Add a block type.

        Raises:
            SchemaError: If the name is already registered
        """
        if block_type.name in self._types:
            raise SchemaError(f"Block '{block_type.name}' is already registered")
        self._types[block_type.name] = block_type
        logger.debug("Registered block type %s", block_type.name)
        return block_type

    def get(self, name: str) -> BlockType:
        """
        Raises:
            KeyError: If block type not found
        """
        if name not in self._types:
            raise KeyError(f"Unknown block type: {name}")
        return self._types[name]

    def get_schema(self, name: str) -> Optional[BlockSchema]:
        return self.get(name).schema

    def list_blocks(self) -> List[str]:
        """Names of all registered block types, in registration order"""
        return list(self._types.keys())

    def schemas(self) -> List[BlockSchema]:
        """Schemas of the blocks built by the factories"""
        return [t.schema for t in self._types.values() if t.schema is not None]

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[BlockType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
