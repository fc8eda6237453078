#!/usr/bin/env python3
"""
Block Catalog Validator

Loads YAML block catalogs, reports definitions that cannot be built and
runs the catalog lint rules over the ones that can.

Usage:
    luablocks-validate catalog.yaml [other.yaml ...]
    luablocks-validate --json catalog.yaml
    luablocks-validate --config rules.yaml catalog.yaml
    luablocks-validate --list catalog.yaml
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

import yaml

from ..catalog import load_catalog
from ..common.diagnostics import Diagnostic
from ..common.errors import SchemaError
from ..factory.registry import BlockRegistry
from ..linter.validator import RuleEngine, load_config


class CatalogValidator:
    """Validates block catalogs against the configured rules"""

    def __init__(self, config_file: Optional[str] = None):
        self.rule_engine = RuleEngine()
        self.config = self._load_config(config_file)
        self._configure_rules()

    def _load_config(self, config_file: Optional[str]) -> Dict:
        """Load validation rules from config file or use defaults"""
        return load_config(config_file)

    def _configure_rules(self):
        """Configure the rule engine with loaded configuration"""
        self.rule_engine.configure_from_dict(self.config)

    def load(self, filepath: str) -> BlockRegistry:
        return load_catalog(filepath, BlockRegistry())

    def validate_file(self, filepath: str) -> List[Diagnostic]:
        """Validate a single catalog file"""
        try:
            registry = self.load(filepath)
        except (SchemaError, yaml.YAMLError, OSError) as e:
            return [Diagnostic(
                type='schema_error',
                message=f"Failed to load catalog: {e}",
                source='catalog',
                severity='error'
            )]
        return self.rule_engine.validate_registry(registry)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description='Validate block catalogs for ComputerCraft Lua APIs'
    )
    parser.add_argument(
        'catalogs',
        nargs='+',
        help='YAML block catalogs to validate'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output results in JSON format'
    )
    parser.add_argument(
        '--config',
        help='Path to configuration file with custom rules'
    )
    parser.add_argument(
        '--no-warnings',
        action='store_true',
        help='Only show errors, not warnings'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List the blocks each catalog defines instead of validating'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log catalog loading and block registration'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    validator = CatalogValidator(args.config)

    if args.list:
        return _list_blocks(validator, args.catalogs, args.json)

    all_errors = []
    for filepath in args.catalogs:
        errors = validator.validate_file(filepath)

        if args.no_warnings:
            errors = [e for e in errors if e.severity == 'error']

        all_errors.extend((filepath, e) for e in errors)

    # Output results
    if args.json:
        print(json.dumps([dict(e.to_dict(), file=f) for f, e in all_errors], indent=2))
    else:
        for filepath, error in all_errors:
            print(f"{filepath}: {error.format()}")
            if error.suggestion:
                print(f"  Suggestion: {error.suggestion}")

    # Exit with error code if there were errors
    error_count = sum(1 for _, e in all_errors if e.severity == 'error')
    sys.exit(1 if error_count > 0 else 0)


def _list_blocks(validator: CatalogValidator, catalogs: List[str], as_json: bool):
    listing = []
    failed = False
    for filepath in catalogs:
        try:
            registry = validator.load(filepath)
        except (SchemaError, yaml.YAMLError, OSError) as e:
            print(f"{filepath}: ERROR: Failed to load catalog: {e}", file=sys.stderr)
            failed = True
            continue
        listing.extend(dict(schema.to_dict(), file=filepath) for schema in registry.schemas())

    if as_json:
        print(json.dumps(listing, indent=2))
    else:
        for entry in listing:
            kind = 'dual' if entry['dual'] else ('value' if entry['output'] else 'statement')
            print(f"{entry['block_name']} ({kind}): {', '.join(entry['inputs']) or '-'}")

    sys.exit(1 if failed else 0)


if __name__ == '__main__':
    main()
