import json

import pytest

from luablocks.catalog import DEFAULT_CATALOG
from luablocks.cli.validate import CatalogValidator, main

UNDOCUMENTED = """
apis:
  - prefix: os
    blocks:
      - func_name: reboot
"""


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_bundled_catalog_passes(capsys):
    assert _run([str(DEFAULT_CATALOG)]) == 0
    assert capsys.readouterr().out == ''


def test_warnings_are_printed_without_failing(tmp_path, capsys):
    path = tmp_path / 'os.yaml'
    path.write_text(UNDOCUMENTED)

    assert _run([str(path)]) == 0

    out = capsys.readouterr().out
    assert f"{path}: os_reboot: WARNING: Block 'os_reboot' has no tooltip" in out
    assert 'Suggestion:' in out


def test_no_warnings_hides_warnings(tmp_path, capsys):
    path = tmp_path / 'os.yaml'
    path.write_text(UNDOCUMENTED)
    assert _run([str(path), '--no-warnings']) == 0
    assert capsys.readouterr().out == ''


def test_broken_catalog_fails_with_json(tmp_path, capsys):
    path = tmp_path / 'bad.yaml'
    path.write_text("apis:\n  - prefix: os\n    blocks:\n      - kind: widget\n")

    assert _run([str(path), '--json']) == 1

    [error] = json.loads(capsys.readouterr().out)
    assert error['type'] == 'schema_error'
    assert error['file'] == str(path)
    assert 'widget' in error['message']


def test_missing_file_is_reported():
    errors = CatalogValidator().validate_file('/nonexistent/catalog.yaml')
    assert [e.type for e in errors] == ['schema_error']


def test_invalid_yaml_is_reported(tmp_path):
    path = tmp_path / 'broken.yaml'
    path.write_text("apis: [unclosed\n")
    errors = CatalogValidator().validate_file(str(path))
    assert errors[0].severity == 'error'


def test_config_can_raise_severity(tmp_path, capsys):
    catalog = tmp_path / 'os.yaml'
    catalog.write_text(UNDOCUMENTED)
    config = tmp_path / 'rules.yaml'
    config.write_text("rules:\n  missing_tooltip:\n    severity: error\n"
                      "  missing_help:\n    enabled: false\n")

    assert _run([str(catalog), '--config', str(config)]) == 1
    out = capsys.readouterr().out
    assert 'ERROR' in out
    assert 'help reference' not in out


def test_list_blocks(capsys):
    assert _run(['--list', str(DEFAULT_CATALOG)]) == 0
    out = capsys.readouterr().out
    assert 'turtle_turn_left (statement): -' in out
    assert 'turtle_detect (dual): DIRECTIONS' in out
    assert 'peripheral_is_present (value): SIDE, CABLE' in out


def test_list_blocks_as_json(capsys):
    assert _run(['--list', '--json', str(DEFAULT_CATALOG)]) == 0
    listing = json.loads(capsys.readouterr().out)
    names = [entry['block_name'] for entry in listing]
    assert 'os_get_id' in names
