"""In-memory editor host: blocks, inputs, fields and workspaces"""

from .block import Block, Input, MenuOption
from .fields import DropdownField, Field, LabelField, TextField
from .workspace import Workspace

__all__ = [
    'Block', 'Input', 'MenuOption',
    'Field', 'LabelField', 'TextField', 'DropdownField',
    'Workspace',
]
