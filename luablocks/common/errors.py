"""Exceptions raised by luablocks."""


class SchemaError(ValueError):
    """Raised when a block definition is malformed."""


class GenerationError(Exception):
    """Raised when Lua cannot be generated for a block."""


class BlockStructureError(RuntimeError):
    """Raised when a live block is edited in a way its schema forbids."""
