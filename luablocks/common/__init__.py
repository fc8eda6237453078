"""Common definitions for luablocks"""

from .diagnostics import Diagnostic
from .errors import BlockStructureError, GenerationError, SchemaError
from .naming import resolve_block_name
from .schema import (
    AddChildPolicy,
    ArgSpec,
    BlockSchema,
    Connections,
    DependentInput,
    HelpUrlType,
    InputKind,
)

__all__ = [
    'Diagnostic',
    'SchemaError', 'GenerationError', 'BlockStructureError',
    'resolve_block_name',
    'BlockSchema', 'ArgSpec', 'DependentInput',
    'Connections', 'InputKind', 'AddChildPolicy', 'HelpUrlType',
]
