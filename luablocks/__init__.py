"""
luablocks - block definitions and Lua code generation for ComputerCraft APIs
"""

from .catalog import build_catalog, load_catalog, load_default_catalog
from .codegen import LuaGenerator, Order
from .common import BlockSchema, Diagnostic, GenerationError, SchemaError, resolve_block_name
from .factory import (
    BlockRegistry,
    build_block,
    build_block_with_dependent_input,
    build_block_with_side,
    build_exp_stmt_block,
    build_value_block,
)
from .host import Workspace

__version__ = "0.1.0"

__all__ = [
    'BlockRegistry', 'BlockSchema', 'Workspace', 'LuaGenerator', 'Order',
    'build_block', 'build_exp_stmt_block', 'build_value_block',
    'build_block_with_dependent_input', 'build_block_with_side',
    'build_catalog', 'load_catalog', 'load_default_catalog',
    'resolve_block_name', 'Diagnostic', 'SchemaError', 'GenerationError',
]
