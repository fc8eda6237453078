"""
Dependent inputs: a value input that is only present while a controlling
dropdown holds its enabling value.

The slot of the dependent input is recorded when the block is initialized.
Inputs after it may come and go, inputs before it may not be removed, so it
always comes back in the same place.
"""

import logging

from ..common.errors import BlockStructureError
from ..common.schema import AddChildPolicy, CHILD_BLOCK_TYPES
from ..host.block import Block
from ..host.fields import DropdownField, LabelField

logger = logging.getLogger(__name__)


def init_dependent_input(block: Block) -> None:
    dep = block.schema.dependent
    block.add_child = dep.add_child
    block.dependent_position = block.input_index(dep.name)

    controller = block.get_field(dep.controller)
    if not isinstance(controller, DropdownField):
        raise BlockStructureError(f"{block} has no dropdown named '{dep.controller}'")
    controller.set_change_handler(lambda value: on_controller_change(block, value))

    if controller.get_value() == dep.enabling_value:
        block.dependent_input_shown = True
    else:
        remove_dependent_input(block)


def on_controller_change(block: Block, value: str) -> None:
    if value == block.schema.dependent.enabling_value:
        if not block.dependent_input_shown:
            show_dependent_input(block, permit_child=True)
    elif block.dependent_input_shown:
        remove_dependent_input(block)


def show_dependent_input(block: Block, permit_child: bool) -> None:
    """
    Put the dependent input back at its recorded position.

    permit_child decides whether the block's add-child policy is consulted.
    It is False when restoring a saved block, whose child is restored
    separately.
    """
    dep = block.schema.dependent
    dep_input = block.append_value_input(dep.name, dep.check)
    if dep.title:
        dep_input.append_field(LabelField(dep.title))
    last = len(block.input_list) - 1
    if block.dependent_position != last:
        block.move_input(last, block.dependent_position)

    if permit_child and block.add_child != AddChildPolicy.NONE:
        child = block.workspace.new_block(CHILD_BLOCK_TYPES[dep.check])
        dep_input.connect(child)
        if block.add_child == AddChildPolicy.FIRST:
            block.add_child = AddChildPolicy.NONE

    block.dependent_input_shown = True
    logger.debug("Showed %s on %s", dep.name, block)


def remove_dependent_input(block: Block) -> None:
    """Remove the dependent input; an attached child is detached"""
    block.remove_input(block.schema.dependent.name)
    block.dependent_input_shown = False
