import pytest

from luablocks.catalog import load_default_catalog
from luablocks.factory import BlockRegistry, build_block, build_block_with_side
from luablocks.host import Workspace
from luablocks.linter import DEFAULT_CONFIG, RuleEngine, ValidationRule, load_config


@pytest.fixture
def engine():
    rules = RuleEngine()
    rules.configure_from_dict(DEFAULT_CONFIG)
    return rules


def _types(diagnostics):
    return sorted(d.type for d in diagnostics)


def test_default_catalog_is_clean(engine):
    assert engine.validate_registry(load_default_catalog()) == []


def test_catalog_rules(engine):
    registry = BlockRegistry()
    build_block(registry, 'turtle', 1, func_name='up')
    build_block(registry, 'turtle', 1, func_name='place', text='place %1 %2',
                args=[('TEXT', 'String'), ('COUNT', 'Number')], parameter_order=['TEXT'],
                tooltip='Place.', help_url='http://example.com')
    build_block(registry, 'turtle', 1, block_name='note', suppress_lua=True,
                tooltip='Note.', help_url_type=1)

    errors = engine.validate_registry(registry)

    assert _types(errors) == ['missing_help', 'missing_tooltip', 'suppressed_generator',
                              'unused_input']
    unused = [e for e in errors if e.type == 'unused_input'][0]
    assert 'COUNT' in unused.message
    assert unused.severity == 'warning'


def test_program_rules(engine, workspace):
    select = workspace.new_block('turtle_select')
    workspace.new_block('os_get_id')

    errors = engine.validate_workspace(workspace)

    assert _types(errors) == ['empty_input', 'orphan_expression']
    empty = [e for e in errors if e.type == 'empty_input'][0]
    assert empty.block_id == select.id


def test_connected_program_is_clean(engine, workspace):
    select = workspace.new_block('turtle_select')
    select.get_input('SLOT').connect(workspace.new_block('os_get_id'))
    assert engine.validate_workspace(workspace) == []


def test_dependent_input_state_rule(engine, workspace):
    block = workspace.new_block('peripheral_is_present')
    block.set_field_value('SIDE', 'cable')
    block.get_input('CABLE').child.dispose()
    assert [e for e in engine.validate_workspace(workspace) if e.severity == 'error'] == []

    # Bypass the change handler to break the invariant
    block.get_field('SIDE').value = 'left'
    errors = [e for e in engine.validate_workspace(workspace) if e.type == 'dependent_input_state']
    assert len(errors) == 1
    assert errors[0].severity == 'error'
    assert 'SIDE' in errors[0].message


def test_failing_rule_becomes_rule_error(workspace):
    class BrokenRule(ValidationRule):
        def get_rule_name(self):
            return 'broken'

        def check_block(self, block):
            raise RuntimeError('boom')

    rules = RuleEngine()
    rules.add_rule(BrokenRule())
    workspace.new_block('turtle_turn_left')

    [error] = rules.validate_workspace(workspace)
    assert error.type == 'rule_error'
    assert 'boom' in error.message


def test_disabled_rules_are_skipped():
    registry = BlockRegistry()
    build_block(registry, 'turtle', 1, func_name='up', help_url_type=1)
    rules = RuleEngine()
    rules.configure_from_dict({'rules': {'missing_tooltip': {'enabled': False}}})
    assert rules.validate_registry(registry) == []


def test_unknown_rule_raises():
    with pytest.raises(ValueError, match='Unknown rule'):
        RuleEngine().add_rule_by_name('no_such_rule')


def test_load_config_merges_over_defaults(tmp_path):
    path = tmp_path / 'rules.yaml'
    path.write_text("rules:\n  missing_help:\n    enabled: false\n"
                    "  empty_input:\n    severity: error\n")
    config = load_config(str(path))
    assert config['rules']['missing_help'] == {'severity': 'warning', 'enabled': False}
    assert config['rules']['empty_input']['severity'] == 'error'
    assert config['rules']['missing_tooltip'] == DEFAULT_CONFIG['rules']['missing_tooltip']
    # Defaults are not modified
    assert DEFAULT_CONFIG['rules']['missing_help']['enabled'] is True


def test_load_config_without_file():
    assert load_config(None) == DEFAULT_CONFIG


def test_side_blocks_from_own_registry_are_checked(engine):
    registry = BlockRegistry()
    build_block_with_side(registry, 'peripheral', 1, func_name='wrap', output='table',
                          text='wrap', tooltip='Wrap.')
    workspace = Workspace(registry)
    block = workspace.new_block('peripheral_wrap')
    block.set_field_value('SIDE', 'cable')
    errors = engine.validate_workspace(workspace)
    assert _types(errors) == ['orphan_expression']
