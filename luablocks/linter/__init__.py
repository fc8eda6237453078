"""Rule-based checks for block catalogs and programs"""

from .validator import DEFAULT_CONFIG, RuleEngine, ValidationRule, load_config

__all__ = ['RuleEngine', 'ValidationRule', 'DEFAULT_CONFIG', 'load_config']
