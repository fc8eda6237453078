import pytest

from luablocks.common import AddChildPolicy, BlockStructureError
from luablocks.factory import build_block_with_dependent_input
from luablocks.host import LabelField


def _names(block):
    return [inp.name for inp in block.input_list]


def test_dependent_input_starts_hidden(workspace):
    block = workspace.new_block('peripheral_is_present')
    assert block.get_field_value('SIDE') == 'front'
    assert not block.dependent_input_shown
    assert block.get_input('CABLE') is None
    assert block.dependent_position == 1


def test_enabling_value_shows_input_at_recorded_position(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    assert block.dependent_input_shown
    assert block.input_index('CABLE') == block.dependent_position == 1
    assert _names(block)[:2] == ['SIDE', 'CABLE']


def test_first_reveal_attaches_string_literal(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    child = block.get_input('CABLE').child
    assert child is not None
    assert child.type == 'text'
    assert child.parent is block
    assert block.add_child == AddChildPolicy.NONE


def test_hiding_detaches_child(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    child = block.get_input('CABLE').child

    block.set_field_value('SIDE', 'left')

    assert not block.dependent_input_shown
    assert block.get_input('CABLE') is None
    assert child.parent is None
    assert child in workspace.top_blocks()


def test_first_policy_attaches_only_once(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    block.set_field_value('SIDE', 'back')
    block.set_field_value('SIDE', 'cable')
    assert block.input_index('CABLE') == 1
    assert block.get_input('CABLE').child is None


def test_policy_is_kept_per_block(workspace):
    first = workspace.new_block('peripheral_is_present')
    first.set_field_value('SIDE', 'cable')
    second = workspace.new_block('peripheral_is_present')
    second.set_field_value('SIDE', 'cable')
    assert second.get_input('CABLE').child is not None


def test_selecting_other_disabling_values_keeps_input_hidden(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'top')
    block.set_field_value('SIDE', 'bottom')
    assert block.get_input('CABLE') is None


@pytest.fixture
def send_block(registry, workspace):
    build_block_with_dependent_input(
        registry, 'rednet', 0, func_name='send', text='send %1 to %2 %3',
        args=[('MESSAGE', 'String'), ('MODE*', [['everyone', 'all'], ['computer', 'id*']]),
              ('ID^', 'Number')],
        dep_title='number', add_child=AddChildPolicy.ALL)
    return workspace.new_block('rednet_send')


def test_all_policy_attaches_every_time(send_block):
    send_block.set_field_value('MODE', 'id')
    first = send_block.get_input('ID').child
    send_block.set_field_value('MODE', 'all')
    send_block.set_field_value('MODE', 'id')
    second = send_block.get_input('ID').child
    assert first is not None and second is not None
    assert first is not second
    assert second.type == 'math_number'
    assert send_block.add_child == AddChildPolicy.ALL


def test_dependent_title_is_shown_with_input(send_block):
    send_block.set_field_value('MODE', 'id')
    labels = [f.text for f in send_block.get_input('ID').fields if isinstance(f, LabelField)]
    assert labels == ['number']


def test_dependent_input_returns_to_its_slot(send_block):
    assert _names(send_block) == ['MESSAGE', 'MODE']
    send_block.set_field_value('MODE', 'id')
    assert _names(send_block) == ['MESSAGE', 'MODE', 'ID']
    assert send_block.dependent_position == 2


def test_inputs_before_dependent_slot_cannot_be_removed(send_block):
    with pytest.raises(BlockStructureError):
        send_block.remove_input('MODE')
