"""Test element models.

An element is either a plain step with an action and an expected
response, or a reference to another test embedded at that position.
"""

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import Field, field_validator

from rfml_exporter.models import SchemaModel

if TYPE_CHECKING:
    from .tests import Test


class Step(SchemaModel):
    """Single test step: an instruction and the question to verify it."""

    action: str = Field(
        default='',
        title='Step action',
        description='Instruction given to the tester.',
    )

    response: str = Field(
        default='',
        title='Step response',
        description='Question the tester answers after the action.',
    )

    @field_validator('action', 'response', mode='before')
    @classmethod
    def _none_as_empty(cls, value: str | None) -> str:
        """Treat missing text as an empty string."""
        return '' if value is None else value


class BaseElement(SchemaModel):
    """Common fields of every test element."""

    redirection: bool | None = Field(
        default=None,
        title='Redirection flag',
        description=(
            'Whether the browser is redirected to the start URI before '
            'this element. Absent when the service does not set it.'
        ),
    )


class StepElement(BaseElement):
    """Element wrapping a plain step."""

    type: Literal['step']

    element: Step


class TestElement(BaseElement):
    """Element embedding another test."""

    __test__ = False

    type: Literal['test']

    element: 'Test'


#: Closed union of supported element variants.
Element = Annotated[
    StepElement | TestElement,
    Field(discriminator='type'),
]
