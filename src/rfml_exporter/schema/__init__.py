"""Record schema of remote Rainforest tests.

Defines immutable Pydantic models describing a test, its browsers, and
its ordered elements. Elements form a closed union of steps and embedded
tests, discriminated by the `type` key of the remote record.
"""

from .elements import BaseElement, Element, Step, StepElement, TestElement
from .tests import Browser, Test, TestIdentifier

__all__ = (
    'BaseElement',
    'Browser',
    'Element',
    'Step',
    'StepElement',
    'Test',
    'TestElement',
    'TestIdentifier',
)
