"""
Data structures describing block definitions.

A BlockSchema is built once per API function, when the block is registered,
and shared read-only by every block placed in a workspace.
"""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import SchemaError
from .naming import resolve_block_name
from .patterns import BASE_HELP_URL, DIRECTIONS_INPUT, DIRECTION_FIELD, PLACEHOLDER, NUMBER_BLOCK, TEXT_BLOCK

Check = Union[str, Tuple[str, ...]]
Choices = Tuple[Tuple[str, str], ...]


class Connections(IntFlag):
    """Which statement connectors a block has"""
    NONE = 0
    PREVIOUS_ONLY = 1
    NEXT_ONLY = 2
    BOTH = 3


class InputKind(Enum):
    """What an input contributes to a generated call"""
    VALUE = 'value'        # socket for a child expression
    DROPDOWN = 'dropdown'  # row holding a dropdown menu
    LABEL = 'label'        # text only, never an argument


class AddChildPolicy(IntEnum):
    """When a default child is attached to a revealed dependent input"""
    NONE = 0  # Mutations store the number, so keep NONE at 0.
    FIRST = 1
    ALL = 2


class HelpUrlType(IntEnum):
    """How the help URL is derived"""
    PREFIX_NAME = 1  # prefix and func_name
    PREFIX_DIR = 2   # prefix and the selected direction


# Literal child block created for each dependent input type
CHILD_BLOCK_TYPES = {
    'String': TEXT_BLOCK,
    'Number': NUMBER_BLOCK,
}


def _normalize_check(check: Any) -> Optional[Check]:
    if check is None or isinstance(check, str):
        return check
    return tuple(check)


def is_choice_list(spec: Any) -> bool:
    return (isinstance(spec, (list, tuple)) and len(spec) > 0
            and all(isinstance(c, (list, tuple)) for c in spec))


def normalize_choices(choices: Sequence[Sequence[str]]) -> Choices:
    """Convert dropdown choices to a tuple of (display text, value) pairs"""
    result = []
    for choice in choices:
        if len(choice) != 2 or not all(isinstance(part, str) for part in choice):
            raise SchemaError(f"Dropdown choice {choice!r} must be a (text, value) pair")
        result.append((choice[0], choice[1]))
    if not result:
        raise SchemaError("Dropdown menus need at least one choice")
    return tuple(result)


@dataclass(frozen=True)
class ArgSpec:
    """One argument slot of a message template"""
    name: str
    check: Optional[Check] = None      # value input type(s), None accepts anything
    choices: Optional[Choices] = None  # dropdown (text, value) pairs

    @property
    def kind(self) -> InputKind:
        return InputKind.VALUE if self.choices is None else InputKind.DROPDOWN

    @property
    def values(self) -> List[str]:
        return [value for _, value in self.choices or ()]

    @classmethod
    def from_tuple(cls, arg: Any) -> 'ArgSpec':
        """Accept ArgSpec, (name, type) or (name, choices)"""
        if isinstance(arg, ArgSpec):
            return arg
        if not isinstance(arg, (list, tuple)) or len(arg) != 2:
            raise SchemaError(f"Argument {arg!r} must be a (name, type) or (name, choices) pair")
        name, spec = arg
        if is_choice_list(spec):
            return cls(name=name, choices=normalize_choices(spec))
        return cls(name=name, check=_normalize_check(spec))


@dataclass(frozen=True)
class DependentInput:
    """A value input shown only while a dropdown holds one value"""
    controller: str       # name of the controlling dropdown
    enabling_value: str   # dropdown value that shows the input
    name: str             # name of the dependent value input
    check: Optional[str] = None
    title: Optional[str] = None  # label shown before the input, only while visible
    add_child: AddChildPolicy = AddChildPolicy.NONE


@dataclass(frozen=True)
class BlockSchema:
    """Complete, immutable description of one block type"""
    prefix: str
    block_name: str  # canonical name including the prefix, e.g. 'turtle_turn_left'
    colour: int = 0
    func_name: Optional[str] = None
    dropdown_func_name: Optional[str] = None  # dropdown whose value is the callee
    output: Optional[Check] = None
    multiple_outputs: int = 0
    stmt_conns: Connections = Connections.NONE
    parameter_order: Optional[Tuple[str, ...]] = None
    quote_dropdown_values: bool = True
    text: Optional[str] = None
    args: Tuple[ArgSpec, ...] = ()
    tooltip: Optional[str] = None
    help_url: Optional[str] = None
    help_url_type: Optional[HelpUrlType] = None
    exp_stmt: bool = False
    directions: Optional[Choices] = None
    dependent: Optional[DependentInput] = None
    side: bool = False
    suppress_lua: bool = False

    @classmethod
    def create(cls, prefix: str, colour: int, *, block_name: Optional[str] = None,
               func_name: Optional[str] = None, args: Sequence[Any] = (),
               stmt_conns: Optional[Connections] = None,
               parameter_order: Optional[Sequence[str]] = None,
               quote_dropdown_values: Optional[bool] = None,
               output: Any = None, directions: Optional[Sequence[Sequence[str]]] = None,
               help_url_type: Optional[int] = None,
               **info: Any) -> 'BlockSchema':
        """
        Build a schema from loosely typed author input.

        Args:
            prefix: API prefix, such as 'turtle'
            colour: Block hue
            **info: Remaining BlockSchema fields

        Raises:
            SchemaError: If the description is malformed
        """
        if quote_dropdown_values is None:
            quote_dropdown_values = True
        elif not isinstance(quote_dropdown_values, bool):
            raise SchemaError(
                f"quote_dropdown_values must be True or False, not {quote_dropdown_values!r}")

        output = _normalize_check(output)
        has_output = output is not None or bool(info.get('multiple_outputs'))
        # Blocks without outputs default to previous and next connectors
        if stmt_conns is None:
            stmt_conns = Connections.NONE if has_output else Connections.BOTH

        try:
            return cls(
                prefix=prefix,
                block_name=resolve_block_name(prefix, func_name, block_name),
                colour=colour,
                func_name=func_name,
                args=tuple(ArgSpec.from_tuple(arg) for arg in args or ()),
                stmt_conns=Connections(stmt_conns),
                parameter_order=tuple(parameter_order) if parameter_order is not None else None,
                quote_dropdown_values=quote_dropdown_values,
                output=output,
                directions=normalize_choices(directions) if directions is not None else None,
                help_url_type=HelpUrlType(help_url_type) if help_url_type is not None else None,
                **info,
            )
        except TypeError as e:
            raise SchemaError(f"Bad block description for prefix '{prefix}': {e}") from e

    def __post_init__(self):
        names = [arg.name for arg in self.args]
        for name in names:
            if not name:
                raise SchemaError(f"{self.block_name}: every argument needs a name")
            if names.count(name) > 1:
                raise SchemaError(f"{self.block_name}: argument '{name}' is defined twice")

        if self.multiple_outputs not in (0, 1, 2):
            raise SchemaError(f"{self.block_name}: at most two outputs are supported")
        if self.exp_stmt and self.multiple_outputs != 2:
            raise SchemaError(f"{self.block_name}: dual blocks declare two outputs")

        self._check_template()

        if self.dropdown_func_name and self.dropdown_func_name not in self.dropdown_names:
            raise SchemaError(
                f"{self.block_name}: callee dropdown '{self.dropdown_func_name}' does not exist")
        if not self.func_name and not self.dropdown_func_name and not self.suppress_lua:
            raise SchemaError(f"{self.block_name}: no func_name or dropdown_func_name to call")

        if self.parameter_order is not None:
            known = self.input_names
            for name in self.parameter_order:
                if name not in known:
                    raise SchemaError(
                        f"{self.block_name}: parameter_order names unknown input '{name}'")

        if self.help_url_type == HelpUrlType.PREFIX_DIR and not self.directions:
            raise SchemaError(f"{self.block_name}: PREFIX_DIR help needs directions")

        if self.dependent is not None:
            self._check_dependent()
        elif self.side:
            raise SchemaError(f"{self.block_name}: side blocks need a dependent input")

    def _check_template(self):
        if not self.text:
            if self.args:
                raise SchemaError(f"{self.block_name}: arguments need a message template")
            return
        used = [int(n) for n in re.findall(PLACEHOLDER, self.text) if n != '0']
        for n in used:
            if n > len(self.args):
                raise SchemaError(f"{self.block_name}: placeholder %{n} has no argument")
        for i, arg in enumerate(self.args, start=1):
            if used.count(i) != 1:
                raise SchemaError(
                    f"{self.block_name}: argument '{arg.name}' must appear exactly once in the template")

    def _check_dependent(self):
        dep = self.dependent
        if not dep.controller or not dep.name:
            raise SchemaError(
                f"{self.block_name}: a dependent input needs both a controlling dropdown and a target")
        controller = self.arg(dep.controller)
        if controller is None or controller.kind != InputKind.DROPDOWN:
            raise SchemaError(
                f"{self.block_name}: controlling dropdown '{dep.controller}' does not exist")
        if dep.enabling_value not in controller.values:
            raise SchemaError(
                f"{self.block_name}: '{dep.enabling_value}' is not a choice of '{dep.controller}'")
        if controller.values[0] == dep.enabling_value:
            raise SchemaError(
                f"{self.block_name}: the enabling value must not be the first choice of '{dep.controller}'")
        target = self.arg(dep.name)
        if target is None or target.kind != InputKind.VALUE:
            raise SchemaError(f"{self.block_name}: dependent input '{dep.name}' does not exist")
        if dep.check is not None and not isinstance(dep.check, str):
            raise SchemaError(f"{self.block_name}: dependent inputs must be simple types")
        if dep.add_child != AddChildPolicy.NONE and dep.check not in CHILD_BLOCK_TYPES:
            raise SchemaError(
                f"{self.block_name}: a child can only be added for String or Number inputs, "
                f"not {dep.check}")

    def arg(self, name: str) -> Optional[ArgSpec]:
        """Find an argument by name"""
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    @property
    def input_names(self) -> List[str]:
        names = [arg.name for arg in self.args]
        if self.directions:
            names.insert(0, DIRECTIONS_INPUT)
        return names

    @property
    def dropdown_names(self) -> List[str]:
        names = [arg.name for arg in self.args if arg.kind == InputKind.DROPDOWN]
        if self.directions:
            names.insert(0, DIRECTION_FIELD)
        return names

    @property
    def has_output(self) -> bool:
        return self.output is not None or self.multiple_outputs > 0

    def help_reference(self, direction: Optional[str] = None) -> Optional[str]:
        """Help URL for this block, given the selected direction if any"""
        if self.help_url:
            return self.help_url
        if self.help_url_type is None:
            return None
        page = direction if self.help_url_type == HelpUrlType.PREFIX_DIR else self.func_name
        if not page:
            return None
        return f"{BASE_HELP_URL}{self.prefix[:1].upper()}{self.prefix[1:]}.{page}"

    def to_dict(self) -> Dict[str, Any]:
        """Summary for listings and JSON output"""
        return {
            'block_name': self.block_name,
            'prefix': self.prefix,
            'func_name': self.func_name,
            'dropdown_func_name': self.dropdown_func_name,
            'inputs': self.input_names,
            'output': self.output,
            'dual': self.exp_stmt,
            'dependent_input': self.dependent.name if self.dependent else None,
        }
