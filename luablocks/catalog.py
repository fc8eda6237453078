"""
Block catalogs: YAML files describing the functions of one or more APIs.

    apis:
      - prefix: turtle
        colour: 160
        blocks:
          - kind: block
            func_name: turnLeft
            tooltip: Turn the turtle left.

Each entry is handed to the factory named by its kind. Enum-valued fields
(stmt_conns, help_url_type, add_child) may be given by member name.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from .common.errors import SchemaError
from .common.schema import AddChildPolicy, BlockSchema, Connections, HelpUrlType
from .factory.builders import (
    build_block,
    build_block_with_dependent_input,
    build_block_with_side,
    build_exp_stmt_block,
    build_value_block,
)
from .factory.registry import BlockRegistry

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = Path(__file__).parent / 'data' / 'computercraft.yaml'

BUILDERS: Dict[str, Callable[..., BlockSchema]] = {
    'block': build_block,
    'exp_stmt': build_exp_stmt_block,
    'value': build_value_block,
    'dependent': build_block_with_dependent_input,
    'side': build_block_with_side,
}

ENUM_FIELDS = {
    'stmt_conns': Connections,
    'help_url_type': HelpUrlType,
    'add_child': AddChildPolicy,
}


def _convert_enums(info: Dict[str, Any]) -> Dict[str, Any]:
    for key, enum_cls in ENUM_FIELDS.items():
        value = info.get(key)
        if isinstance(value, str):
            try:
                info[key] = enum_cls[value.upper()]
            except KeyError:
                raise SchemaError(f"'{value}' is not a valid {key}") from None
    return info


def build_catalog(data: Any, registry: Optional[BlockRegistry] = None) -> BlockRegistry:
    """
    Register every block described by a parsed catalog.

    Args:
        data: Parsed catalog, a mapping with an 'apis' list
        registry: Registry to add to; a new one is created if omitted

    Raises:
        SchemaError: If the catalog or one of its blocks is malformed
    """
    if registry is None:
        registry = BlockRegistry()
    if not isinstance(data, dict) or not isinstance(data.get('apis'), list):
        raise SchemaError("A catalog needs a list of 'apis'")

    for api in data['apis']:
        prefix = api.get('prefix') if isinstance(api, dict) else None
        if not prefix:
            raise SchemaError("Every API in a catalog needs a prefix")
        colour = api.get('colour', 0)
        for entry in api.get('blocks') or []:
            info = dict(entry)
            kind = info.pop('kind', 'block')
            builder = BUILDERS.get(kind)
            if builder is None:
                raise SchemaError(f"Unknown block kind '{kind}' in API '{prefix}'")
            schema = builder(registry, prefix, info.pop('colour', colour), **_convert_enums(info))
            logger.debug("Built %s from catalog", schema.block_name)

    return registry


def load_catalog(path: Union[str, Path], registry: Optional[BlockRegistry] = None) -> BlockRegistry:
    """Read a YAML catalog and register its blocks"""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    logger.info("Loading catalog %s", path)
    return build_catalog(data, registry)


def load_default_catalog(registry: Optional[BlockRegistry] = None) -> BlockRegistry:
    """Registry with the bundled ComputerCraft blocks"""
    return load_catalog(DEFAULT_CATALOG, registry)
