"""
Expression/statement duality.

A dual block is either a statement (previous and next connectors, no
output) or an expression (output only). It starts as a statement; the
context menu toggles it, and loading a mutation restores it.
"""

import logging
from typing import List

from ..common.errors import BlockStructureError
from ..common.patterns import ADD_OUTPUT_TEXT, REMOVE_OUTPUT_TEXT
from ..host.block import Block, MenuOption

logger = logging.getLogger(__name__)


def init_exp_stmt(block: Block) -> None:
    _apply_mode(block, True)
    block.add_context_menu_builder(customize_context_menu)


def change_modes(block: Block, should_be_statement: bool) -> None:
    """
    Switch a dual block between statement and expression.

    The block is unplugged first; whatever was connected to it stays
    disconnected.
    """
    if block.schema is None or not block.schema.exp_stmt:
        raise BlockStructureError(f"{block} cannot switch between expression and statement")
    block.unplug()
    _apply_mode(block, should_be_statement)
    logger.debug("%s is now a %s", block, 'statement' if should_be_statement else 'expression')


def _apply_mode(block: Block, should_be_statement: bool) -> None:
    if should_be_statement:
        block.set_output(False)
        block.set_previous_statement(True)
        block.set_next_statement(True)
    else:
        block.set_previous_statement(False)
        block.set_next_statement(False)
        block.set_output(True, block.schema.output)
    block.is_statement = should_be_statement


def customize_context_menu(block: Block, options: List[MenuOption]) -> None:
    text = ADD_OUTPUT_TEXT if block.is_statement else REMOVE_OUTPUT_TEXT
    options.append(MenuOption(
        text=text,
        callback=lambda: change_modes(block, not block.is_statement),
    ))
