"""Export driver.

Resolves the list of tests to export, retrieves each of them, and writes
one RFML file per test. Tests are processed sequentially; the first
failure stops the export.
"""

import logging
from contextlib import nullcontext
from typing import TYPE_CHECKING

from rfml_exporter.client import HttpClient
from rfml_exporter.errors import OutputError
from rfml_exporter.files import TestFiles
from rfml_exporter.remote import RemoteTests
from rfml_exporter.rfml import render

if TYPE_CHECKING:
    from contextlib import AbstractContextManager
    from pathlib import Path

if TYPE_CHECKING:
    from rfml_exporter.settings import ExportOptions

logger = logging.getLogger(__name__)


class Exporter:
    """Export remote tests into RFML files."""

    def __init__(self, options: 'ExportOptions', *,
                 client: HttpClient | None = None) -> None:
        """Initialize the exporter.

        Args:
            options: Export options.
            client: Optional preconfigured API client. It is shared by
                every export and left open. By default each export opens
                its own client from the options and closes it afterwards.
        """
        self.options = options
        self.client = client

        self.test_files = TestFiles(options.test_folder)

    def connect(self) -> 'AbstractContextManager[HttpClient]':
        """Provide the API client of a single export."""
        if self.client is not None:
            return nullcontext(self.client)

        return HttpClient(self.options)

    def export(self) -> list['Path']:
        """Export all selected tests.

        Returns:
            Paths of the written files, in export order.

        Raises:
            RetrievalError: If a remote record can not be retrieved.
            RFMLFormatError: If a remote record is malformed.
            OutputError: If a file can not be written.
        """
        with self.connect() as client:
            remote_tests = RemoteTests(client)

            test_ids = self.get_test_ids(remote_tests)
            logger.info(
                'Exporting %d tests into %s',
                len(test_ids),
                self.test_files.test_folder,
            )

            return [self.export_test(remote_tests, test_id) for test_id in test_ids]

    def get_test_ids(self, remote_tests: RemoteTests) -> list[int]:
        """Resolve identifiers of the tests to export.

        Explicitly selected tests take precedence; the remote catalog is
        only fetched when no test was selected.
        """
        if self.options.tests:
            return list(self.options.tests)

        return remote_tests.primary_ids()

    def export_test(self, remote_tests: RemoteTests, test_id: int) -> 'Path':
        """Retrieve, render, and write a single test.

        Args:
            remote_tests: Remote catalog to retrieve the test from.
            test_id: Numeric test identifier.

        Returns:
            Path of the written file.
        """
        test = remote_tests.retrieve(test_id)
        path = self.test_files.create_file(test)

        self.write(path, render(test, embed_tests=self.options.embed_tests))
        logger.info('Exported test %s to %s', test_id, path)

        return path

    @staticmethod
    def write(path: 'Path', content: str) -> None:
        """Overwrite an existing file with new content.

        The file is truncated after writing so no bytes of a previous,
        longer export remain.

        Args:
            path: Existing file to write.
            content: RFML text.

        Raises:
            OutputError: If the file can not be written.
        """
        try:
            with path.open('r+', encoding='utf-8', newline='\n') as output:
                output.write(content)
                output.truncate()
        except OSError as base:
            raise OutputError.from_os_error(base, path.as_posix()) from base
