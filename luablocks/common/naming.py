"""
Block name resolution.
"""

from typing import Optional

from .errors import SchemaError


def resolve_block_name(prefix: str, func_name: Optional[str] = None,
                       block_name: Optional[str] = None) -> str:
    """
    Generate a block name, such as 'peripheral_get_names'.

    The name is the prefix, an underscore, and either block_name, if
    provided, or func_name with one underscore placed before every run of
    capital letters and everything lower-cased. For example, 'isPresent'
    becomes 'is_present' and 'getID' becomes 'get_id'.

    Args:
        prefix: API prefix, such as 'os'
        func_name: Lua function name the block calls
        block_name: Explicit name, overriding func_name

    Returns:
        Underscore-separated block name

    Raises:
        SchemaError: If neither name is given
    """
    if block_name:
        return f"{prefix}_{block_name}"
    if not func_name:
        raise SchemaError(f"Block in '{prefix}' needs either block_name or func_name")

    name = ''
    in_capital = False
    for c in func_name:
        if 'A' <= c <= 'Z':
            # Only one underscore for adjacent capitals
            if not in_capital:
                in_capital = True
                name += '_'
        else:
            in_capital = False
        name += c.lower()
    return f"{prefix}_{name}"
