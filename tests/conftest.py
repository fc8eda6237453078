"""Shared fixtures for luablocks tests."""

import pytest

from luablocks.codegen import LuaGenerator
from luablocks.factory import (
    BlockRegistry,
    build_block,
    build_block_with_side,
    build_exp_stmt_block,
    build_value_block,
)
from luablocks.host import Workspace


@pytest.fixture
def registry():
    """Registry with a handful of turtle, os and peripheral blocks."""
    reg = BlockRegistry()
    build_block(reg, 'turtle', 160, func_name='turnLeft', text='turn left',
                tooltip='Turn left.', help_url_type=1)
    build_exp_stmt_block(reg, 'turtle', 160, block_name='detect', text='detect',
                         directions=[['in front', 'detect'], ['up', 'detectUp'],
                                     ['down', 'detectDown']],
                         tooltip='Detect a block.', help_url_type=2)
    build_value_block(reg, 'turtle', 160, func_name='select', text='select slot %1',
                      args=[('SLOT', 'Number')], tooltip='Select a slot.')
    build_block(reg, 'os', 290, func_name='getComputerID', block_name='get_id',
                output='Number', tooltip='Computer ID.', help_url_type=1)
    build_block_with_side(reg, 'peripheral', 60, func_name='isPresent', output='Boolean',
                          text='is present on', tooltip='Peripheral attached?')
    return reg


@pytest.fixture
def workspace(registry):
    return Workspace(registry)


@pytest.fixture
def generator(registry):
    return LuaGenerator(registry)


@pytest.fixture
def text_block(workspace):
    """Factory for string literal blocks."""
    def make(value):
        block = workspace.new_block('text')
        block.set_field_value('TEXT', value)
        return block
    return make


@pytest.fixture
def number_block(workspace):
    def make(value):
        block = workspace.new_block('math_number')
        block.set_field_value('NUM', value)
        return block
    return make
