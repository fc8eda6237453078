import pytest

from luablocks.common import SchemaError, resolve_block_name


def test_lower_camel_case_gets_one_underscore_per_capital():
    assert resolve_block_name('peripheral', 'isPresent') == 'peripheral_is_present'


def test_adjacent_capitals_share_one_underscore():
    assert resolve_block_name('os', 'getID') == 'os_get_id'
    assert resolve_block_name('x', 'abcXYZdef') == 'x_abc_xyzdef'


def test_lower_case_name_is_kept():
    assert resolve_block_name('turtle', 'forward') == 'turtle_forward'


def test_explicit_block_name_overrides_func_name():
    assert resolve_block_name('os', 'getComputerID', 'get_id') == 'os_get_id'
    assert resolve_block_name('turtle', block_name='detect') == 'turtle_detect'


def test_missing_names_raise():
    with pytest.raises(SchemaError):
        resolve_block_name('turtle')
