"""Test record model.

A test is retrieved from the remote service as a JSON object and
validated into an immutable `Test`. Embedded tests use the same model,
but the service only fills a subset of their fields, so every field
besides the elements falls back to an empty default.
"""

from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field, ValidationError, field_validator

from rfml_exporter.errors import RFMLFormatError
from rfml_exporter.models import SchemaModel

from .elements import Element, TestElement

if TYPE_CHECKING:
    from typing import Self


class Browser(SchemaModel):
    """Browser target of a test."""

    name: str

    state: Literal['enabled', 'disabled']

    @property
    def enabled(self) -> bool:
        """Whether the test runs on this browser."""
        return self.state == 'enabled'


class TestIdentifier(SchemaModel):
    """Catalog entry pairing both identifiers of a test."""

    __test__ = False

    id: int

    rfml_id: str


class Test(SchemaModel):
    """Remote test record."""

    __test__ = False

    id: int | None = None

    rfml_id: str = Field(
        default='',
        title='RFML identifier',
        description='Stable external identifier used to reference the test.',
    )

    title: str = ''

    start_uri: str = ''

    tags: list[str] = Field(default_factory=list)

    browsers: list[Browser] = Field(default_factory=list)

    elements: list[Element] = Field(
        default_factory=list,
        title='Test elements',
        description='Steps and embedded tests in execution order.',
    )

    @field_validator('rfml_id', 'title', 'start_uri', mode='before')
    @classmethod
    def _none_as_empty_text(cls, value: str | None) -> str:
        """Treat missing text as an empty string."""
        return '' if value is None else value

    @field_validator('tags', 'browsers', 'elements', mode='before')
    @classmethod
    def _none_as_empty_list(cls, value: list[Any] | None) -> list[Any]:
        """Treat missing sequences as empty."""
        return [] if value is None else value

    @property
    def enabled_browsers(self) -> list[str]:
        """Names of enabled browsers in their original order."""
        return [browser.name for browser in self.browsers if browser.enabled]

    @classmethod
    def from_record(cls, record: Any, *,  # noqa: ANN401
                    source: str | None = None) -> 'Self':
        """Validate a raw remote record.

        Args:
            record: Decoded JSON object returned by the service.
            source: API path the record was retrieved from.

        Returns:
            Validated test.

        Raises:
            RFMLFormatError: If the record does not match the schema,
                including unknown element types.
        """
        try:
            return cls.model_validate(record)

        except ValidationError as base:
            test_id = record.get('id') if isinstance(record, dict) else None
            raise RFMLFormatError.from_pydantic_error(
                base,
                data=record,
                source=source,
                test_id=test_id if isinstance(test_id, int) else None,
            ) from base


TestElement.model_rebuild()
Test.model_rebuild()
