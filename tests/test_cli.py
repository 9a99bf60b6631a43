"""Tests for the command-line interface."""

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from rfml_exporter.__main__ import cli
from rfml_exporter.errors import ErrorContext, RetrievalError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType


@pytest.fixture
def exporter(mocker: 'MockerFixture') -> 'MockType':
    """Replace the exporter used by the CLI."""
    exporter = mocker.patch('rfml_exporter.__main__.Exporter')
    exporter.return_value.export.return_value = [Path('a.rfml'), Path('b.rfml')]

    return exporter


def test_export(exporter: 'MockType') -> None:
    """Export selected tests with options from the command line."""
    result = CliRunner().invoke(cli, [
        'export',
        '--token', 'secret',
        '--test-folder', 'rfml',
        '--embed-tests',
        '123', '124',
    ])

    assert result.exit_code == 0, result.output
    assert 'Exported 2 tests into rfml' in result.output

    options = exporter.call_args.args[0]
    assert options.token.get_secret_value() == 'secret'
    assert options.test_folder == Path('rfml')
    assert options.embed_tests is True
    assert options.tests == [123, 124]
    exporter.return_value.export.assert_called_once_with()


def test_export_environment(exporter: 'MockType', monkeypatch: pytest.MonkeyPatch) -> None:
    """Fall back to the environment for missing options."""
    monkeypatch.setenv('RAINFOREST_API_TOKEN', 'env-token')
    monkeypatch.setenv('RAINFOREST_EMBED_TESTS', '1')

    result = CliRunner().invoke(cli, ['export'])

    assert result.exit_code == 0, result.output

    options = exporter.call_args.args[0]
    assert options.token.get_secret_value() == 'env-token'
    assert options.embed_tests is True
    assert options.tests == []


def test_export_failure(exporter: 'MockType') -> None:
    """Report export errors and exit with a failure status."""
    exporter.return_value.export.side_effect = RetrievalError(
        'Request failed: Unauthorized',
        context=ErrorContext(source='/tests/rfml_ids', status_code=401),
    )

    result = CliRunner().invoke(cli, ['export'])

    assert result.exit_code == 1
    assert 'Error: Request failed: Unauthorized' in result.output
    assert 'with status 401' in result.output


def test_invalid_test_id(exporter: 'MockType') -> None:
    """Reject non-numeric test identifiers."""
    result = CliRunner().invoke(cli, ['export', 'login'])

    assert result.exit_code == 2
    exporter.assert_not_called()
