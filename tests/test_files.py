"""Tests for RFML file management."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from rfml_exporter.errors import OutputError
from rfml_exporter.files import TestFiles
from rfml_exporter.schema import Test

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


@pytest.mark.parametrize('data, expected', (
    pytest.param({'id': 123, 'title': 'Test title'}, '123_Test_title.rfml', id='simple title'),
    pytest.param({'id': 7, 'title': 'Log in / out?'}, '7_Log_in___out_.rfml', id='unsafe characters'),
    pytest.param({'id': 8, 'title': ' v1.2-beta '}, '8_v1.2-beta.rfml', id='dots and dashes'),
    pytest.param({'id': 9, 'title': ''}, '9_Unnamed_Test.rfml', id='empty title'),
    pytest.param({'title': 'Draft'}, 'Draft.rfml', id='no identifier'),
    pytest.param({'id': 1, 'title': 'x' * 300}, '1_' + 'x' * 100 + '.rfml', id='long title'),
    pytest.param({'id': 2, 'title': '\u00e9' * 300}, '2_' + '\u00e9' * 50 + '.rfml', id='long multibyte title'),
))
def test_file_name(data: dict[str, Any], expected: str) -> None:
    """Derive file names from test identifiers and titles."""
    assert TestFiles.file_name(Test.model_validate(data)) == expected


def test_create_file(fs: 'FakeFilesystem', single_test: Test) -> None:  # noqa: ARG001
    """Create the test folder and an empty file."""
    path = TestFiles(Path('spec/rainforest')).create_file(single_test)

    assert path == Path('spec/rainforest/123_Test_title.rfml')
    assert path.is_file()
    assert path.read_text() == ''


def test_create_existing_file(fs: 'FakeFilesystem', single_test: Test) -> None:
    """Keep the content of an already exported file."""
    fs.create_file('export/123_Test_title.rfml', contents='#! previous\n')

    path = TestFiles(Path('export')).create_file(single_test)

    assert path.read_text() == '#! previous\n'


def test_create_file_failure(fs: 'FakeFilesystem', single_test: Test) -> None:
    """Raise when the test folder can not be created."""
    fs.create_file('export')

    with pytest.raises(OutputError, match=r'^Can not write RFML file') as error:
        TestFiles(Path('export/rainforest')).create_file(single_test)

    assert 'export/rainforest/123_Test_title.rfml' in str(error.value)
    assert isinstance(error.value.__cause__, OSError)
