"""Local RFML file management.

Every exported test is stored as `<id>_<title>.rfml` inside the test
folder. The name is derived from stable record fields only, so exporting
the same test again overwrites the previous file.
"""

import logging
from pathlib import Path
from re import compile as regexp
from typing import TYPE_CHECKING

from rfml_exporter.errors import OutputError

if TYPE_CHECKING:
    from rfml_exporter.schema import Test

logger = logging.getLogger(__name__)

RFML_EXTENSION = '.rfml'
UNNAMED_TEST = 'Unnamed_Test'

#: Longest UTF-8 encoded title kept in a file name.
MAX_TITLE_BYTES = 100

#: Characters not allowed in generated file names.
UNSAFE_CHARS = regexp(r'[^\w.-]')


class TestFiles:
    """RFML files of a test folder."""

    __test__ = False

    def __init__(self, test_folder: Path) -> None:
        self.test_folder = Path(test_folder)

    @staticmethod
    def file_name(test: 'Test') -> str:
        """Build the file name of a test.

        Long titles are cut to `MAX_TITLE_BYTES` of UTF-8.

        Args:
            test: Test to name the file after.

        Returns:
            File name with the RFML extension.
        """
        name = UNSAFE_CHARS.sub('_', test.title.strip())
        name = name.encode()[:MAX_TITLE_BYTES].decode(errors='ignore') or UNNAMED_TEST
        if test.id is not None:
            name = f'{test.id}_{name}'

        return f'{name}{RFML_EXTENSION}'

    def create_file(self, test: 'Test') -> Path:
        """Create the file of a test if it does not exist yet.

        Args:
            test: Test to create the file for.

        Returns:
            Path of the created or already existing file.

        Raises:
            OutputError: If the folder or the file can not be created.
        """
        path = self.test_folder / self.file_name(test)

        try:
            self.test_folder.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
        except OSError as base:
            raise OutputError.from_os_error(base, path.as_posix()) from base

        logger.debug('Created %s', path)

        return path
