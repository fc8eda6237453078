"""
Factories that describe API functions as blocks.

Each factory builds a BlockSchema from an author's description, registers
it, and returns it. Descriptions are keyword arguments named after the
BlockSchema fields, plus the dependent-input fields documented on
build_block_with_dependent_input().
"""

from typing import Any, Dict, List, Optional, Tuple

from ..common.errors import SchemaError
from ..common.patterns import (
    CABLE_INPUT,
    CABLE_VALUE,
    DD_MARKER,
    DEP_MARKER,
    DIRECTION_FIELD,
    SIDE_INPUT,
    SIDES,
)
from ..common.schema import (
    AddChildPolicy,
    ArgSpec,
    BlockSchema,
    DependentInput,
    HelpUrlType,
    is_choice_list,
)
from .registry import BlockRegistry

DEPENDENCE_KEYS = ('dd_name', 'dd_value', 'dep_name', 'dep_type', 'dep_title', 'add_child')


def build_block(registry: BlockRegistry, prefix: str, colour: int, **info: Any) -> BlockSchema:
    """
    Create a block whose fields come straight from info.

    Without an output or explicit stmt_conns, the block gets previous and
    next statement connectors. An optional text becomes its label.
    """
    schema = BlockSchema.create(prefix, colour, **info)
    registry.register(schema)
    return schema


def build_exp_stmt_block(registry: BlockRegistry, prefix: str, colour: int, **info: Any) -> BlockSchema:
    """
    Create a block that can switch between being an expression and a
    statement. These have a Boolean first output and a second output.

    If directions is given, a dropdown of (text, function name) pairs names
    the function to call.
    """
    info['output'] = 'Boolean'
    info['multiple_outputs'] = 2
    info['exp_stmt'] = True
    if info.get('directions'):
        info.setdefault('dropdown_func_name', DIRECTION_FIELD)
    return build_block(registry, prefix, colour, **info)


def build_value_block(registry: BlockRegistry, prefix: str, colour: int, **info: Any) -> BlockSchema:
    """
    Create a block laid out from a message template.

    info['text'] holds placeholders %1..%n and info['args'] the matching
    (name, type) or (name, choices) pairs.
    """
    if not info.get('text'):
        raise SchemaError(f"Value blocks in '{prefix}' need a text template")
    info['help_url_type'] = HelpUrlType.PREFIX_NAME
    return build_block(registry, prefix, colour, **info)


def set_dependence_info(info: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve the controlling dropdown and the dependent input.

    Unless info already names dd_name or dep_name, markers are looked for:
    the controlling dropdown's name and the choice value that enables the
    dependent input end with DD_MARKER; the dependent input's name ends with
    DEP_MARKER. Markers are stripped. info itself is left unchanged; a new
    dict is returned.

    Raises:
        SchemaError: If markers are repeated or only one side of the pair
            is defined
    """
    info = dict(info)
    dd_name = info.get('dd_name')
    dep_name = info.get('dep_name')

    if not dd_name and not dep_name:
        args: List[Tuple[str, Any]] = []
        for arg in info.get('args') or ():
            name, spec = _arg_pair(arg)
            if name and name.endswith(DD_MARKER):
                if dd_name:
                    raise SchemaError('dd_name is being redefined.')
                name = name[:-1]
                dd_name = name
                if not is_choice_list(spec):
                    raise SchemaError(f"Controlling input '{name}' must be a dropdown menu.")
                spec, dd_value = _strip_choice_marker(spec, info.get('dd_value'))
                if not dd_value:
                    raise SchemaError(f"No enabling value was found in dropdown {name}")
                info['dd_value'] = dd_value
            elif name and name.endswith(DEP_MARKER):
                if dep_name:
                    raise SchemaError('dep_name is being redefined.')
                name = name[:-1]
                dep_name = name
                if spec is not None and not isinstance(spec, str):
                    raise SchemaError('Dependent inputs must be simple types.')
                info['dep_type'] = spec
            args.append((name, spec))
        info['args'] = args
        info['dd_name'] = dd_name
        info['dep_name'] = dep_name

    if dd_name and not dep_name:
        raise SchemaError('A controlling dropdown menu was defined but not a dependent input.')
    if dep_name and not dd_name:
        raise SchemaError('A dependent input was defined but not a controlling dropdown menu.')
    if not dd_name:
        raise SchemaError('No controlling dropdown menu or dependent input was defined.')
    return info


def _arg_pair(arg: Any) -> Tuple[str, Any]:
    if isinstance(arg, ArgSpec):
        return arg.name, arg.choices if arg.choices is not None else arg.check
    if not isinstance(arg, (list, tuple)) or len(arg) != 2:
        raise SchemaError(f"Argument {arg!r} must be a (name, type) or (name, choices) pair")
    return arg[0], arg[1]


def _strip_choice_marker(choices, dd_value: Optional[str]):
    stripped = []
    for text, value in choices:
        if value.endswith(DD_MARKER):
            if dd_value:
                raise SchemaError('dd_value is being redefined.')
            value = value[:-1]
            dd_value = value
        stripped.append((text, value))
    return stripped, dd_value


def build_block_with_dependent_input(registry: BlockRegistry, prefix: str, colour: int,
                                     **info: Any) -> BlockSchema:
    """
    Create a block with a value input that is only shown while a dropdown
    menu has a certain value, which must not be its first choice.

    The pairing is given either by markers (see set_dependence_info()) or by:
    dd_name (controlling dropdown), dd_value (enabling value), dep_name
    (dependent input), dep_type (its type), dep_title (text shown before it
    while visible) and add_child (AddChildPolicy for attaching a literal
    block when it is shown; dep_type must then be 'String' or 'Number').
    """
    info = set_dependence_info(info)
    if not info.get('text'):
        raise SchemaError(f"Blocks with dependent inputs in '{prefix}' need a text template")

    dd_name = info.pop('dd_name')
    dep_name = info.pop('dep_name')
    dep_type = info.pop('dep_type', None)
    if dep_type is None:
        # Fall back on the type given with the argument itself
        for arg in info.get('args') or ():
            name, spec = _arg_pair(arg)
            if name == dep_name and not is_choice_list(spec):
                dep_type = spec
    info['dependent'] = DependentInput(
        controller=dd_name,
        enabling_value=info.pop('dd_value', None),
        name=dep_name,
        check=dep_type,
        title=info.pop('dep_title', None),
        add_child=AddChildPolicy(info.pop('add_child', None) or AddChildPolicy.NONE),
    )
    info.setdefault('help_url_type', HelpUrlType.PREFIX_NAME)
    return build_block(registry, prefix, colour, **info)


def build_block_with_side(registry: BlockRegistry, prefix: str, colour: int, **info: Any) -> BlockSchema:
    """
    Create a block with a side input: one of front, back, left, right, top,
    bottom or a cable, whose name is typed into a dependent String input.

    SIDE and CABLE are appended after the inputs described by info.
    A string literal is attached the first time CABLE is shown. Predicates
    (Boolean output) get a question mark at the end of their text.
    """
    if not info.get('help_url_type'):
        info['help_url_type'] = HelpUrlType.PREFIX_NAME
    args = list(info.get('args') or [])
    # Placeholders for SIDE and CABLE
    text = f"{info.get('text') or ''} %{len(args) + 1} %{len(args) + 2}"
    args.append((SIDE_INPUT, SIDES))
    args.append((CABLE_INPUT, 'String'))
    if info.get('output') == 'Boolean':
        text += '?'

    for key in DEPENDENCE_KEYS:
        if key in info:
            raise SchemaError(f"Side blocks define their own dependent input; drop '{key}'")
    info.update(
        text=text,
        args=args,
        dd_name=SIDE_INPUT,
        dd_value=CABLE_VALUE,
        dep_name=CABLE_INPUT,
        dep_type='String',
        # Only create a child string the first time the cable input is shown.
        add_child=AddChildPolicy.FIRST,
        side=True,
    )
    return build_block_with_dependent_input(registry, prefix, colour, **info)
