"""
Built-in literal blocks.

These are attached automatically to revealed dependent inputs and can be
placed by hand in any value input.
"""

from ..common.patterns import NUMBER_FIELD, TEXT_FIELD
from .block import Block
from .fields import LabelField, TextField

TEXT_COLOUR = 160
NUMBER_COLOUR = 230


def init_text(block: Block) -> None:
    block.set_colour(TEXT_COLOUR)
    block.set_output(True, 'String')
    block.set_tooltip('A letter, word, or line of text.')
    (block.append_dummy_input()
        .append_field(LabelField('“'))
        .append_field(TextField(''), TEXT_FIELD)
        .append_field(LabelField('”')))


def init_number(block: Block) -> None:
    block.set_colour(NUMBER_COLOUR)
    block.set_output(True, 'Number')
    block.set_tooltip('A number.')
    block.append_dummy_input().append_field(TextField('0'), NUMBER_FIELD)
