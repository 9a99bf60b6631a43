"""Remote test catalog.

Provides access to the list of test identifiers known to the service
and to full test records.
"""

import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from rfml_exporter.errors import RFMLFormatError
from rfml_exporter.schema import Test, TestIdentifier

if TYPE_CHECKING:
    from rfml_exporter.client import HttpClient

logger = logging.getLogger(__name__)

RFML_IDS_PATH = '/tests/rfml_ids'
TEST_PATH = '/tests/{test_id}'

_identifiers = TypeAdapter(list[TestIdentifier])


class RemoteTests:
    """Tests stored by the Rainforest service."""

    def __init__(self, client: 'HttpClient') -> None:
        self.client = client

    def primary_ids(self) -> list[int]:
        """Fetch identifiers of every remote test.

        Entries sharing an RFML identifier are all kept.

        Returns:
            Numeric test identifiers in the order returned by the service.

        Raises:
            RetrievalError: If the catalog can not be retrieved.
            RFMLFormatError: If the catalog is malformed.
        """
        data = self.client.get(RFML_IDS_PATH)

        try:
            identifiers = _identifiers.validate_python(data)
        except ValidationError as base:
            raise RFMLFormatError.from_pydantic_error(
                base,
                data=data,
                source=RFML_IDS_PATH,
            ) from base

        logger.debug('Found %d remote tests', len(identifiers))

        return [item.id for item in identifiers]

    def retrieve(self, test_id: int) -> Test:
        """Fetch a full test record.

        Args:
            test_id: Numeric test identifier.

        Returns:
            Validated test, including embedded tests.

        Raises:
            RetrievalError: If the record can not be retrieved.
            RFMLFormatError: If the record is malformed.
        """
        path = TEST_PATH.format(test_id=test_id)

        return Test.from_record(self.client.get(path), source=path)
