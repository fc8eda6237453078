"""Lua code generation"""

from .lua import LuaGenerator, Order, RenderedCode, adjust_code, generate_call, generate_lua, quote

__all__ = [
    'LuaGenerator', 'Order', 'RenderedCode',
    'generate_call', 'generate_lua', 'adjust_code', 'quote',
]
