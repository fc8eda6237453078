"""
Validation framework for luablocks.
Provides a pluggable rule system for checking block catalogs and programs.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

import yaml

from ..common.diagnostics import Diagnostic
from ..common.schema import BlockSchema, InputKind
from ..factory.registry import BlockRegistry
from ..host.block import Block
from ..host.workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'rules': {
        'missing_tooltip': {'severity': 'warning', 'enabled': True},
        'missing_help': {'severity': 'warning', 'enabled': True},
        'unused_input': {'severity': 'warning', 'enabled': True},
        'suppressed_generator': {'severity': 'warning', 'enabled': True},
        'empty_input': {'severity': 'warning', 'enabled': True},
        'orphan_expression': {'severity': 'warning', 'enabled': True},
        'dependent_input_state': {'severity': 'error', 'enabled': True},
    }
}


def load_config(config_file: Optional[str] = None) -> Dict:
    """Load rule settings from a YAML file, merged over the defaults"""
    config = {'rules': {name: dict(rule) for name, rule in DEFAULT_CONFIG['rules'].items()}}
    if config_file and Path(config_file).exists():
        with open(config_file, 'r') as f:
            user_config = yaml.safe_load(f) or {}
        for name, rule_config in (user_config.get('rules') or {}).items():
            config['rules'].setdefault(name, {}).update(rule_config or {})
    return config


class ValidationRule(ABC):
    """Abstract base class for validation rules"""

    def __init__(self, config: Optional[Dict] = None):
        self.config = config or {}
        self.severity = self.config.get('severity', 'warning')
        self.enabled = self.config.get('enabled', True)

    @abstractmethod
    def get_rule_name(self) -> str:
        """Return the name of this rule"""
        pass

    def check_schema(self, schema: BlockSchema) -> List[Diagnostic]:
        """Check one registered block definition"""
        return []

    def check_block(self, block: Block) -> List[Diagnostic]:
        """Check one block placed in a workspace"""
        return []

    def create_error(self, message: str, source: str, block_id: Optional[str] = None,
                     suggestion: Optional[str] = None) -> Diagnostic:
        """Helper to create a diagnostic with consistent formatting"""
        return Diagnostic(
            type=self.get_rule_name(),
            message=message,
            source=source,
            block_id=block_id,
            severity=self.severity,
            suggestion=suggestion
        )


class MissingTooltipRule(ValidationRule):
    """Blocks should explain themselves on hover"""

    def get_rule_name(self) -> str:
        return "missing_tooltip"

    def check_schema(self, schema: BlockSchema) -> List[Diagnostic]:
        if schema.tooltip:
            return []
        return [self.create_error(
            f"Block '{schema.block_name}' has no tooltip",
            schema.block_name,
            suggestion="Add a 'tooltip' describing what the function does"
        )]


class MissingHelpRule(ValidationRule):
    """Blocks should link to their API documentation"""

    def get_rule_name(self) -> str:
        return "missing_help"

    def check_schema(self, schema: BlockSchema) -> List[Diagnostic]:
        if schema.help_url or schema.help_url_type is not None:
            return []
        return [self.create_error(
            f"Block '{schema.block_name}' has no help reference",
            schema.block_name,
            suggestion="Set 'help_url' or 'help_url_type'"
        )]


class UnusedInputRule(ValidationRule):
    """Value inputs left out of an explicit parameter_order are never generated"""

    def get_rule_name(self) -> str:
        return "unused_input"

    def check_schema(self, schema: BlockSchema) -> List[Diagnostic]:
        errors = []
        if schema.parameter_order is None:
            return errors
        for arg in schema.args:
            if arg.kind == InputKind.VALUE and arg.name not in schema.parameter_order:
                errors.append(self.create_error(
                    f"Input '{arg.name}' of '{schema.block_name}' is not in parameter_order",
                    schema.block_name,
                    suggestion=f"Add '{arg.name}' to parameter_order or remove the input"
                ))
        return errors


class SuppressedGeneratorRule(ValidationRule):
    """Blocks registered without a Lua generator"""

    def get_rule_name(self) -> str:
        return "suppressed_generator"

    def check_schema(self, schema: BlockSchema) -> List[Diagnostic]:
        if not schema.suppress_lua:
            return []
        return [self.create_error(
            f"Block '{schema.block_name}' has no Lua generator",
            schema.block_name,
            suggestion="Register a generator before using this block in programs"
        )]


class EmptyInputRule(ValidationRule):
    """Value inputs with nothing attached generate an empty argument"""

    def get_rule_name(self) -> str:
        return "empty_input"

    def check_block(self, block: Block) -> List[Diagnostic]:
        errors = []
        for inp in block.input_list:
            if inp.kind == InputKind.VALUE and inp.child is None:
                errors.append(self.create_error(
                    f"Input '{inp.name}' is empty",
                    block.type,
                    block.id,
                    "Attach a value block to this input"
                ))
        return errors


class OrphanExpressionRule(ValidationRule):
    """Values computed at the top level are thrown away"""

    def get_rule_name(self) -> str:
        return "orphan_expression"

    def check_block(self, block: Block) -> List[Diagnostic]:
        if block.parent is not None or not block.has_output:
            return []
        suggestion = None
        if block.schema is not None and block.schema.exp_stmt:
            suggestion = "Use 'Add Output'/'Remove Output' to turn it into a statement"
        return [self.create_error(
            "Block produces a value that is not used",
            block.type,
            block.id,
            suggestion
        )]


class DependentInputStateRule(ValidationRule):
    """The dependent input is present exactly when its dropdown enables it"""

    def get_rule_name(self) -> str:
        return "dependent_input_state"

    def check_block(self, block: Block) -> List[Diagnostic]:
        errors = []
        dep = block.schema.dependent if block.schema else None
        if dep is None:
            return errors

        dep_input = block.get_input(dep.name)
        if block.dependent_input_shown != (dep_input is not None):
            errors.append(self.create_error(
                f"Input '{dep.name}' presence does not match its shown flag",
                block.type,
                block.id
            ))
        elif dep_input is not None and block.input_list.index(dep_input) != block.dependent_position:
            errors.append(self.create_error(
                f"Input '{dep.name}' is not at position {block.dependent_position}",
                block.type,
                block.id
            ))

        enabled = block.get_field_value(dep.controller) == dep.enabling_value
        if enabled != block.dependent_input_shown:
            errors.append(self.create_error(
                f"Input '{dep.name}' visibility does not match dropdown '{dep.controller}'",
                block.type,
                block.id,
                f"Select '{dep.enabling_value}' to show it, anything else to hide it"
            ))
        return errors


class RuleEngine:
    """Executes multiple validation rules on catalogs and workspaces"""

    def __init__(self):
        self.rules: List[ValidationRule] = []
        self.rule_registry: Dict[str, Type[ValidationRule]] = {
            'missing_tooltip': MissingTooltipRule,
            'missing_help': MissingHelpRule,
            'unused_input': UnusedInputRule,
            'suppressed_generator': SuppressedGeneratorRule,
            'empty_input': EmptyInputRule,
            'orphan_expression': OrphanExpressionRule,
            'dependent_input_state': DependentInputStateRule,
        }

    def add_rule(self, rule: ValidationRule):
        """Add a validation rule to the engine"""
        if rule.enabled:
            self.rules.append(rule)

    def add_rule_by_name(self, rule_name: str, config: Optional[Dict] = None):
        """Add a rule by name with optional configuration"""
        if rule_name in self.rule_registry:
            rule_class = self.rule_registry[rule_name]
            rule = rule_class(config)
            self.add_rule(rule)
        else:
            raise ValueError(f"Unknown rule: {rule_name}")

    def configure_from_dict(self, config: Dict):
        """Configure rules from a configuration dictionary"""
        rules_config = config.get('rules', {})

        for rule_name, rule_config in rules_config.items():
            if rule_config.get('enabled', True):
                self.add_rule_by_name(rule_name, rule_config)

    def validate_registry(self, registry: BlockRegistry) -> List[Diagnostic]:
        """Run all enabled rules over every registered schema"""
        all_errors = []
        for schema in registry.schemas():
            for rule in self.rules:
                all_errors.extend(self._run(rule, rule.check_schema, schema, schema.block_name))
        return all_errors

    def validate_workspace(self, workspace: Workspace) -> List[Diagnostic]:
        """Run all enabled rules over every block in a workspace"""
        all_errors = []
        for block in workspace.all_blocks():
            for rule in self.rules:
                all_errors.extend(self._run(rule, rule.check_block, block, block.type))
        return all_errors

    def _run(self, rule: ValidationRule, check, target, source: str) -> List[Diagnostic]:
        try:
            return check(target)
        except Exception as e:
            # If a rule fails, report it instead of aborting the run
            logger.exception("Rule %s failed on %s", rule.get_rule_name(), source)
            return [Diagnostic(
                type='rule_error',
                message=f"Rule '{rule.get_rule_name()}' failed: {e}",
                source=source,
                severity='error'
            )]
