"""
Saving and restoring per-block state.

The saved form is a flat attribute bag, the same attributes a <mutation>
element carries in a saved program.
"""

from typing import Dict, Mapping, Optional
from xml.etree import ElementTree as ET

from ..common.errors import BlockStructureError
from ..common.patterns import (
    ADD_CHILD_ATTR,
    DEPENDENT_INPUT_ATTR,
    IS_STATEMENT_ATTR,
    LEGACY_DEPENDENT_INPUT_ATTR,
)
from ..common.schema import AddChildPolicy
from ..host.block import Block
from .dependent import remove_dependent_input, show_dependent_input
from .modes import change_modes


def _bool_attr(value: bool) -> str:
    return 'true' if value else 'false'


def mutation_to_dict(block: Block) -> Dict[str, str]:
    """Attributes describing the mode and dependent input of a block"""
    attrs: Dict[str, str] = {}
    schema = block.schema
    if schema is None:
        return attrs
    if schema.exp_stmt:
        attrs[IS_STATEMENT_ATTR] = _bool_attr(block.is_statement)
    if schema.dependent is not None:
        attrs[DEPENDENT_INPUT_ATTR] = _bool_attr(block.dependent_input_shown)
        attrs[ADD_CHILD_ATTR] = str(int(block.add_child))
    return attrs


def dict_to_mutation(block: Block, attrs: Mapping[str, str]) -> None:
    """Restore state saved by mutation_to_dict"""
    schema = block.schema
    if schema is None:
        return
    add_child = None
    if schema.dependent is not None:
        add_child = _parse_add_child(block, attrs.get(ADD_CHILD_ATTR))
    if schema.exp_stmt:
        change_modes(block, attrs.get(IS_STATEMENT_ATTR) == 'true')
    if schema.dependent is not None:
        # Older saves used a different attribute name.
        value = attrs.get(DEPENDENT_INPUT_ATTR) or attrs.get(LEGACY_DEPENDENT_INPUT_ATTR)
        if value == 'true' and not block.dependent_input_shown:
            show_dependent_input(block, permit_child=False)
        elif value == 'false' and block.dependent_input_shown:
            remove_dependent_input(block)
        if add_child is not None:
            block.add_child = add_child


def _parse_add_child(block: Block, value: Optional[str]) -> Optional[AddChildPolicy]:
    if not value:
        return None
    try:
        return AddChildPolicy(int(value))
    except ValueError:
        raise BlockStructureError(
            f"Bad '{ADD_CHILD_ATTR}' value {value!r} in mutation of {block}") from None


def mutation_to_xml(block: Block) -> ET.Element:
    return ET.Element('mutation', mutation_to_dict(block))


def xml_to_mutation(block: Block, element: ET.Element) -> None:
    dict_to_mutation(block, element.attrib)
