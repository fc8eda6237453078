"""
Initialization of a live block from its schema.
"""

import re
from typing import List

from ..common.patterns import DIRECTIONS_INPUT, DIRECTION_FIELD, PLACEHOLDER
from ..common.schema import Connections, HelpUrlType, InputKind
from ..host.block import Block
from ..host.fields import DropdownField, LabelField
from .dependent import init_dependent_input
from .modes import init_exp_stmt


def init_block(block: Block) -> None:
    """Build the inputs and connectors of a block described by a schema"""
    schema = block.schema
    init_base(block)
    if schema.directions:
        block.append_dummy_input(DIRECTIONS_INPUT).append_field(
            DropdownField(schema.directions), DIRECTION_FIELD)
    if schema.text:
        interpolate(block)
    if schema.dependent is not None:
        init_dependent_input(block)
    if schema.exp_stmt:
        init_exp_stmt(block)


def init_base(block: Block) -> None:
    """Colour, tooltip, help reference and connectors"""
    schema = block.schema
    block.set_colour(schema.colour)
    block.set_inputs_inline(True)
    if schema.tooltip:
        block.set_tooltip(schema.tooltip)

    if schema.help_url_type == HelpUrlType.PREFIX_DIR and not schema.help_url:
        block.set_help_url(lambda: schema.help_reference(block.get_field_value(DIRECTION_FIELD)))
    else:
        block.set_help_url(schema.help_reference())

    if schema.stmt_conns:
        block.set_previous_statement(bool(schema.stmt_conns & Connections.PREVIOUS_ONLY))
        block.set_next_statement(bool(schema.stmt_conns & Connections.NEXT_ONLY))
    if schema.has_output:
        block.set_output(True, schema.output)


def interpolate(block: Block) -> None:
    """
    Turn the message template into inputs.

    Text before each %n placeholder becomes a label at the start of the
    input for argument n. %0 ends the current row without adding an input.
    Text after the last placeholder becomes a row of its own.

    The label preceding the dependent input gets its own row, so that it
    stays visible while the dependent input is hidden.
    """
    schema = block.schema
    dep_name = schema.dependent.name if schema.dependent else None
    pending: List[str] = []
    pos = 0

    for match in re.finditer(PLACEHOLDER, schema.text):
        pending.append(schema.text[pos:match.start()])
        pos = match.end()
        n = int(match.group(1))
        if n == 0:
            _flush_label(block, pending)
            continue

        arg = schema.args[n - 1]
        if arg.name == dep_name:
            _flush_label(block, pending)
            inp = block.append_value_input(arg.name, arg.check)
            if schema.dependent.title:
                inp.append_field(LabelField(schema.dependent.title))
        elif arg.kind == InputKind.VALUE:
            inp = block.append_value_input(arg.name, arg.check)
            _prepend_label(inp, pending)
        else:
            inp = block.append_dummy_input(arg.name)
            _prepend_label(inp, pending)
            inp.append_field(DropdownField(arg.choices), arg.name)

    pending.append(schema.text[pos:])
    _flush_label(block, pending)


def _label_text(pending: List[str]) -> str:
    text = ''.join(pending).strip()
    pending.clear()
    return text


def _prepend_label(inp, pending: List[str]) -> None:
    text = _label_text(pending)
    if text:
        inp.append_field(LabelField(text))


def _flush_label(block: Block, pending: List[str]) -> None:
    text = _label_text(pending)
    if text:
        block.append_dummy_input().append_field(LabelField(text))
