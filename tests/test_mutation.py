from xml.etree import ElementTree as ET

import pytest

from luablocks.blocks import dict_to_mutation, mutation_to_dict, mutation_to_xml, xml_to_mutation
from luablocks.common import AddChildPolicy, BlockStructureError


def test_plain_blocks_have_no_mutation(workspace):
    assert mutation_to_dict(workspace.new_block('turtle_turn_left')) == {}
    assert mutation_to_dict(workspace.new_block('text')) == {}


def test_dual_block_round_trip(workspace):
    block = workspace.new_block('turtle_detect')
    assert mutation_to_dict(block) == {'is_statement': 'true'}
    block.context_menu()[0].callback()
    saved = mutation_to_dict(block)
    assert saved == {'is_statement': 'false'}

    restored = workspace.new_block('turtle_detect')
    dict_to_mutation(restored, saved)
    assert not restored.is_statement
    assert restored.has_output


def test_missing_statement_flag_means_expression(workspace):
    block = workspace.new_block('turtle_detect')
    dict_to_mutation(block, {})
    assert not block.is_statement


def test_dependent_state_is_saved(workspace):
    block = workspace.new_block('peripheral_is_present')
    assert mutation_to_dict(block) == {'dependent_input': 'false', 'add_child': '1'}
    block.set_field_value('SIDE', 'cable')
    assert mutation_to_dict(block) == {'dependent_input': 'true', 'add_child': '0'}


def test_restoring_shown_input_does_not_attach_child(workspace):
    restored = workspace.new_block('peripheral_is_present')
    dict_to_mutation(restored, {'dependent_input': 'true', 'add_child': '0'})
    assert restored.dependent_input_shown
    assert restored.input_index('CABLE') == 1
    assert restored.get_input('CABLE').child is None
    assert restored.add_child == AddChildPolicy.NONE


def test_consumed_policy_survives_reload(workspace):
    restored = workspace.new_block('peripheral_is_present')
    dict_to_mutation(restored, {'dependent_input': 'false', 'add_child': '0'})
    restored.set_field_value('SIDE', 'cable')
    assert restored.get_input('CABLE').child is None


def test_legacy_attribute_is_read(workspace):
    restored = workspace.new_block('peripheral_is_present')
    dict_to_mutation(restored, {'cable_mode': 'true'})
    assert restored.dependent_input_shown
    assert restored.add_child == AddChildPolicy.FIRST


def test_restoring_hidden_state_hides_input(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    dict_to_mutation(block, {'dependent_input': 'false'})
    assert block.get_input('CABLE') is None


def test_xml_round_trip(workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    element = mutation_to_xml(block)
    assert element.tag == 'mutation'

    parsed = ET.fromstring(ET.tostring(element))
    restored = workspace.new_block('peripheral_is_present')
    xml_to_mutation(restored, parsed)
    assert mutation_to_dict(restored) == mutation_to_dict(block)


@pytest.mark.parametrize('value', ['x', '7'])
def test_bad_add_child_value_is_rejected_before_restoring(workspace, value):
    block = workspace.new_block('peripheral_is_present')
    with pytest.raises(BlockStructureError, match='add_child'):
        dict_to_mutation(block, {'dependent_input': 'true', 'add_child': value})
    assert not block.dependent_input_shown
    assert block.get_input('CABLE') is None
    assert block.add_child == AddChildPolicy.FIRST
