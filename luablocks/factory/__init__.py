"""Block factories and the block registry"""

from .builders import (
    build_block,
    build_block_with_dependent_input,
    build_block_with_side,
    build_exp_stmt_block,
    build_value_block,
    set_dependence_info,
)
from .registry import BlockRegistry, BlockType

__all__ = [
    'BlockRegistry', 'BlockType',
    'build_block', 'build_exp_stmt_block', 'build_value_block',
    'build_block_with_dependent_input', 'build_block_with_side',
    'set_dependence_info',
]
