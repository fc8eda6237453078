"""
Lua code generation for blocks.

Generator functions take the LuaGenerator and a block and return either a
statement (a string ending in a newline) or an expression as a
(code, Order) tuple.
"""

import logging
import math
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, List, Tuple, Union

from ..common.diagnostics import Diagnostic
from ..common.errors import GenerationError
from ..common.patterns import NUMBER_FIELD, TEXT_FIELD
from ..common.schema import InputKind

if TYPE_CHECKING:
    from ..factory.registry import BlockRegistry
    from ..host.block import Block, Input
    from ..host.workspace import Workspace

logger = logging.getLogger(__name__)


class Order(IntEnum):
    """Lua operator precedence, tightest first"""
    ATOMIC = 0          # literals, names
    HIGH = 1            # function calls, tables[]
    EXPONENTIATION = 2  # ^
    UNARY = 3           # not # - ~
    MULTIPLICATIVE = 4  # * / %
    ADDITIVE = 5        # + -
    CONCATENATION = 6   # ..
    RELATIONAL = 7      # < > <= >= ~= ==
    AND = 8
    OR = 9
    NONE = 99


RenderedCode = Union[str, Tuple[str, Order]]
GeneratorFunc = Callable[['LuaGenerator', 'Block'], RenderedCode]


ESCAPES = {
    '\\': '\\\\',
    "'": "\\'",
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def quote(text: str) -> str:
    """Lua string literal"""
    parts = []
    for c in text:
        if c in ESCAPES:
            parts.append(ESCAPES[c])
        elif ord(c) < 0x20 or ord(c) == 0x7f:
            # Three digits so a following digit is not read as part of the escape
            parts.append(f"\\{ord(c):03d}")
        else:
            parts.append(c)
    return f"'{''.join(parts)}'"


def naked_value(code: str) -> str:
    """Statement for a value nobody uses; a bare expression is not valid Lua"""
    if not code:
        return ''
    return f"local _ = {code}\n"


class LuaGenerator:
    """Generates Lua for blocks and workspaces, collecting diagnostics"""

    def __init__(self, registry: 'BlockRegistry'):
        self.registry = registry
        self.diagnostics: List[Diagnostic] = []

    def block_to_code(self, block: 'Block') -> RenderedCode:
        """
        Generate code for one block, without the blocks chained after it.

        A failure is reported on the block and an empty string returned, so
        that other blocks are still generated.
        """
        try:
            generator = self.registry.get(block.type).generator
            if generator is None:
                raise GenerationError(f"No Lua generator for block type '{block.type}'")
            code = generator(self, block)
        except GenerationError as e:
            self._report(block, e)
            return ''
        block.set_warning_text(None)
        return code

    def value_to_code(self, block: 'Block', name: str, outer_order: Order = Order.NONE) -> str:
        """Code of the expression attached to input name, or '' if empty"""
        inp = block.get_input(name)
        if inp is None or inp.child is None:
            return ''
        code = self.block_to_code(inp.child)
        if code == '':
            return ''
        if not isinstance(code, tuple):
            raise GenerationError(
                f"Block '{inp.child.type}' attached to '{name}' does not produce a value")
        text, inner_order = code
        if text and outer_order <= inner_order:
            if not (outer_order == inner_order and outer_order in (Order.ATOMIC, Order.NONE)):
                text = f"({text})"
        return text

    def statements_to_code(self, block: 'Block') -> str:
        """Code of a block and every statement chained after it"""
        parts = []
        while block is not None:
            code = self.block_to_code(block)
            if isinstance(code, tuple):
                code = naked_value(code[0])
            parts.append(code)
            block = block.next_block
        return ''.join(parts)

    def workspace_to_code(self, workspace: 'Workspace') -> str:
        """Code for every top-level stack, in creation order"""
        self.diagnostics = []
        return ''.join(self.statements_to_code(block) for block in workspace.top_blocks())

    def _report(self, block: 'Block', error: GenerationError) -> None:
        message = f"Error generating code for {block}: {error}"
        logger.error(message)
        block.set_warning_text(message)
        self.diagnostics.append(Diagnostic(
            type='generation_error',
            message=str(error),
            source=block.type,
            block_id=block.id,
        ))


def _is_argument(block: 'Block', inp: 'Input') -> bool:
    schema = block.schema
    kind = inp.kind
    if kind == InputKind.VALUE:
        return True
    if kind != InputKind.DROPDOWN:
        return False
    # The callee-naming dropdown is not also passed as an argument
    if schema.dropdown_func_name and any(f.name == schema.dropdown_func_name for f in inp.dropdowns):
        return False
    dep = schema.dependent
    if dep is not None and inp.name == dep.controller and not block.dependent_input_shown:
        return False
    return True


def _argument_code(generator: LuaGenerator, block: 'Block', inp: 'Input') -> str:
    if inp.kind == InputKind.VALUE:
        return generator.value_to_code(block, inp.name, Order.NONE)
    dropdowns = inp.dropdowns
    if len(dropdowns) != 1:
        raise GenerationError(
            f"Input '{inp.name}' has {len(dropdowns)} dropdown menus, expected exactly one")
    value = dropdowns[0].get_value()
    if block.schema.quote_dropdown_values:
        return f"'{value}'"
    return value


def generate_call(generator: LuaGenerator, block: 'Block') -> str:
    """Build 'prefix.callee(args)' without deciding statement or expression"""
    schema = block.schema
    if schema.dropdown_func_name:
        callee = block.get_field_value(schema.dropdown_func_name)
    else:
        callee = schema.func_name

    if schema.parameter_order is not None:
        # A hidden dependent input is simply absent
        inputs = [block.get_input(name) for name in schema.parameter_order]
        inputs = [inp for inp in inputs if inp is not None]
    else:
        inputs = [inp for inp in block.input_list if _is_argument(block, inp)]

    args = [_argument_code(generator, block, inp) for inp in inputs]
    return f"{schema.prefix}.{callee}({', '.join(args)})"


def generate_lua(generator: LuaGenerator, block: 'Block') -> RenderedCode:
    """Generator registered for every block built by the factories"""
    code = generate_call(generator, block)
    if block.schema.exp_stmt:
        return adjust_code(block, code)
    if block.has_output:
        return code, Order.HIGH
    return code + '\n'


def adjust_code(block: 'Block', code: str) -> RenderedCode:
    """Wrap a dual block's call according to its current mode"""
    if block.is_statement:
        return code + '\n'
    return code, Order.HIGH


def text_to_code(generator: LuaGenerator, block: 'Block') -> RenderedCode:
    return quote(block.get_field_value(TEXT_FIELD) or ''), Order.ATOMIC


def number_to_code(generator: LuaGenerator, block: 'Block') -> RenderedCode:
    raw = str(block.get_field_value(NUMBER_FIELD)).strip()
    try:
        number = float(raw)
    except ValueError as e:
        raise GenerationError(f"'{raw}' is not a number") from e
    if not math.isfinite(number):
        raise GenerationError(f"'{raw}' is not a finite number")
    if number.is_integer():
        code = str(int(number))
    else:
        code = repr(number)
    return code, Order.UNARY if number < 0 else Order.ATOMIC
