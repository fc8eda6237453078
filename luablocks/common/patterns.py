"""
Shared constants for luablocks.
Used by the factories, the block features and the code generator.
"""

BASE_HELP_URL = 'http://computercraft.info/wiki/'

# Marker suffixes for the compact dependent-input notation
DD_MARKER = '*'   # controlling dropdown name and its enabling choice value
DEP_MARKER = '^'  # dependent input name

# Side selector appended by build_block_with_side
SIDE_INPUT = 'SIDE'
CABLE_INPUT = 'CABLE'
CABLE_VALUE = 'cable'
SIDES = (
    ('in front', 'front'),
    ('in back', 'back'),
    ('to the left', 'left'),
    ('to the right', 'right'),
    ('above', 'top'),
    ('below', 'bottom'),
    ('through cable...', 'cable'),
)

# Dual expression/statement blocks
DIRECTIONS_INPUT = 'DIRECTIONS'
DIRECTION_FIELD = 'DIR'
ADD_OUTPUT_TEXT = 'Add Output'
REMOVE_OUTPUT_TEXT = 'Remove Output'

# Mutation attribute names
IS_STATEMENT_ATTR = 'is_statement'
DEPENDENT_INPUT_ATTR = 'dependent_input'
LEGACY_DEPENDENT_INPUT_ATTR = 'cable_mode'
ADD_CHILD_ATTR = 'add_child'

# Built-in literal block types and the fields holding their values
TEXT_BLOCK = 'text'
TEXT_FIELD = 'TEXT'
NUMBER_BLOCK = 'math_number'
NUMBER_FIELD = 'NUM'

# Message template placeholders (%0 forces an input break)
PLACEHOLDER = r'%(\d+)'
