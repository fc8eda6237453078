"""
Live blocks placed in a workspace.

This is the editor capability set the block features are written against:
inputs and fields, value and statement connections, connectors, hue,
tooltip, help reference and context menu entries.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Union

from ..common.errors import BlockStructureError
from ..common.schema import AddChildPolicy, BlockSchema, Check, InputKind
from .fields import DropdownField, Field

if TYPE_CHECKING:
    from .workspace import Workspace


@dataclass
class MenuOption:
    """Context menu entry"""
    text: str
    callback: Callable[[], None]
    enabled: bool = True


class Input:
    """A row of a block: a value socket or a dummy row of fields"""

    def __init__(self, block: 'Block', name: str, is_value: bool, check: Optional[Check] = None):
        self.block = block
        self.name = name
        self.is_value = is_value
        self.check = check
        self.fields: List[Field] = []
        self.child: Optional['Block'] = None

    @property
    def kind(self) -> InputKind:
        if self.is_value:
            return InputKind.VALUE
        if self.dropdowns:
            return InputKind.DROPDOWN
        return InputKind.LABEL

    @property
    def dropdowns(self) -> List[DropdownField]:
        return [f for f in self.fields if isinstance(f, DropdownField)]

    def append_field(self, field: Field, name: Optional[str] = None) -> 'Input':
        """Add a field to the end of this row; returns self for chaining"""
        field.name = name
        self.fields.append(field)
        return self

    def connect(self, child: 'Block') -> None:
        """Attach a child expression block to this value input"""
        if not self.is_value:
            raise BlockStructureError(f"Input '{self.name}' of {self.block} is not a value input")
        if not child.has_output:
            raise BlockStructureError(f"{child} has no output connection")
        if child is self.block:
            raise BlockStructureError(f"{child} cannot be connected to itself")
        if self.child is not None:
            self.disconnect()
        child.unplug()
        self.child = child
        child.parent = self.block
        child.parent_input = self

    def disconnect(self) -> Optional['Block']:
        """Detach the attached child, which becomes a top-level block"""
        child = self.child
        if child is not None:
            self.child = None
            child.parent = None
            child.parent_input = None
        return child

    def __repr__(self) -> str:
        return f"<Input {self.name!r} {self.kind.value}>"


class Block:
    """
    One block placed in a workspace.

    The schema is shared by every block of the same type and never changes.
    Everything else here is per-instance state.
    """

    def __init__(self, workspace: 'Workspace', block_type: str, block_id: str,
                 schema: Optional[BlockSchema] = None):
        self.workspace = workspace
        self.type = block_type
        self.id = block_id
        self.schema = schema
        self.input_list: List[Input] = []
        self.inputs_inline = False

        # Connections
        self.parent: Optional['Block'] = None
        self.parent_input: Optional[Input] = None  # None while chained as a statement
        self.next_block: Optional['Block'] = None
        self.has_output = False
        self.output_check: Optional[Check] = None
        self.has_previous = False
        self.has_next = False

        # Presentation
        self.colour = 0
        self.tooltip: Optional[str] = None
        self.help_url: Union[str, Callable[[], Optional[str]], None] = None
        self.warning_text: Optional[str] = None
        self._menu_builders: List[Callable[['Block', List[MenuOption]], None]] = []

        # Dual expression/statement state
        self.is_statement = False

        # Dependent input state
        self.dependent_input_shown = False
        self.dependent_position: Optional[int] = None
        self.add_child = AddChildPolicy.NONE

        self.disposed = False

    # Inputs

    def append_value_input(self, name: str, check: Optional[Check] = None) -> Input:
        return self._append_input(Input(self, name, True, check))

    def append_dummy_input(self, name: str = '') -> Input:
        return self._append_input(Input(self, name, False))

    def _append_input(self, new_input: Input) -> Input:
        if new_input.name and self.get_input(new_input.name) is not None:
            raise BlockStructureError(f"{self} already has an input named '{new_input.name}'")
        self.input_list.append(new_input)
        return new_input

    def get_input(self, name: str) -> Optional[Input]:
        for inp in self.input_list:
            if inp.name == name:
                return inp
        return None

    def input_index(self, name: str) -> int:
        for i, inp in enumerate(self.input_list):
            if inp.name == name:
                return i
        raise BlockStructureError(f"{self} has no input named '{name}'")

    def move_input(self, index: int, new_index: int) -> None:
        """Move the input at index so that it ends up at new_index"""
        if not (0 <= index < len(self.input_list) and 0 <= new_index < len(self.input_list)):
            raise BlockStructureError(f"Cannot move input {index} to {new_index} on {self}")
        self.input_list.insert(new_index, self.input_list.pop(index))

    def remove_input(self, name: str) -> None:
        """Remove an input, detaching whatever is connected to it"""
        index = self.input_index(name)
        # Inputs before the dependent slot hold its position in place
        if self.dependent_position is not None and index < self.dependent_position:
            raise BlockStructureError(
                f"Cannot remove input '{name}' of {self}: it precedes the dependent input")
        self.input_list[index].disconnect()
        del self.input_list[index]

    # Fields

    def iter_fields(self) -> Iterator[Field]:
        for inp in self.input_list:
            yield from inp.fields

    def get_field(self, name: str) -> Optional[Field]:
        for field in self.iter_fields():
            if field.name == name:
                return field
        return None

    def get_field_value(self, name: str) -> Optional[str]:
        field = self.get_field(name)
        return field.get_value() if field else None

    def set_field_value(self, name: str, value) -> None:
        field = self.get_field(name)
        if field is None or not hasattr(field, 'set_value'):
            raise BlockStructureError(f"{self} has no editable field named '{name}'")
        field.set_value(value)

    # Connectors

    def set_output(self, enabled: bool, check: Optional[Check] = None) -> None:
        if not enabled and self.parent_input is not None:
            raise BlockStructureError(f"Unplug {self} before removing its output")
        self.has_output = enabled
        self.output_check = check if enabled else None

    def set_previous_statement(self, enabled: bool) -> None:
        if not enabled and self.parent is not None and self.parent_input is None:
            raise BlockStructureError(f"Unplug {self} before removing its previous connection")
        self.has_previous = enabled

    def set_next_statement(self, enabled: bool) -> None:
        if not enabled and self.next_block is not None:
            raise BlockStructureError(f"Detach the block after {self} first")
        self.has_next = enabled

    def connect_next(self, block: 'Block') -> None:
        """Chain block as the statement following this one"""
        if not self.has_next or not block.has_previous:
            raise BlockStructureError(f"{block} cannot follow {self}")
        block.unplug()
        if self.next_block is not None:
            self.next_block.parent = None
        self.next_block = block
        block.parent = self

    def unplug(self) -> None:
        """
        Detach this block from its parent and from the block after it.

        Neither neighbour is reconnected; both end up as top-level blocks.
        """
        if self.parent is not None:
            if self.parent_input is not None:
                self.parent_input.disconnect()
            else:
                self.parent.next_block = None
                self.parent = None
        if self.next_block is not None:
            self.next_block.parent = None
            self.next_block = None

    def children(self) -> List['Block']:
        return [inp.child for inp in self.input_list if inp.child is not None]

    def dispose(self) -> None:
        """Remove this block from its workspace, orphaning its children"""
        self.unplug()
        for inp in self.input_list:
            inp.disconnect()
        self.workspace.remove_block(self)
        self.disposed = True

    # Presentation

    def set_colour(self, colour: int) -> None:
        self.colour = colour

    def set_inputs_inline(self, inline: bool) -> None:
        self.inputs_inline = inline

    def set_tooltip(self, tooltip: Optional[str]) -> None:
        self.tooltip = tooltip

    def set_help_url(self, url: Union[str, Callable[[], Optional[str]], None]) -> None:
        self.help_url = url

    def get_help_url(self) -> Optional[str]:
        return self.help_url() if callable(self.help_url) else self.help_url

    def set_warning_text(self, text: Optional[str]) -> None:
        self.warning_text = text

    def add_context_menu_builder(self, builder: Callable[['Block', List[MenuOption]], None]) -> None:
        self._menu_builders.append(builder)

    def context_menu(self) -> List[MenuOption]:
        options: List[MenuOption] = []
        for builder in self._menu_builders:
            builder(self, options)
        return options

    def __repr__(self) -> str:
        return f"<Block {self.type} id={self.id}>"
