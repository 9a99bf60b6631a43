"""Tests configurations and fixtures."""

from os import environ
from typing import TYPE_CHECKING, Any

import pytest

from rfml_exporter.schema import Test

if TYPE_CHECKING:
    from collections.abc import Callable

EMBEDDED_RFML_ID = 'embedded_test_rfml_id'


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove exporter settings inherited from the environment."""
    for name in tuple(environ):
        if name.upper().startswith('RAINFOREST_'):
            monkeypatch.delenv(name)


@pytest.fixture
def embedded_record() -> dict[str, Any]:
    """Provide a record of a test embedded into another one."""
    return {
        'rfml_id': EMBEDDED_RFML_ID,
        'elements': [
            {
                'type': 'step',
                'element': {
                    'action': 'Embedded Action',
                    'response': 'Embedded Response',
                },
            },
        ],
    }


@pytest.fixture
def elements(embedded_record: dict[str, Any]) -> list[dict[str, Any]]:
    """Provide elements mixing steps and embedded tests.

    Override this fixture to change the elements of `record`.
    """
    return [
        {
            'type': 'test',
            'redirection': True,
            'element': embedded_record,
        },
        {
            'type': 'step',
            'redirection': False,
            'element': {
                'action': 'Step Action',
                'response': 'Step Response',
            },
        },
        {
            'type': 'test',
            'redirection': True,
            'element': embedded_record,
        },
        {
            'type': 'step',
            'redirection': False,
            'element': {
                'action': 'Last step',
                'response': 'Last step?',
            },
        },
    ]


@pytest.fixture
def record(elements: list[dict[str, Any]]) -> dict[str, Any]:
    """Provide a raw test record as returned by the service."""
    return {
        'id': 123,
        'rfml_id': 'rfml_id_123',
        'title': 'Test title',
        'start_uri': '/uri',
        'tags': ['foo', 'bar'],
        'browsers': [
            {'name': 'chrome', 'state': 'enabled'},
            {'name': 'safari', 'state': 'enabled'},
            {'name': 'firefox', 'state': 'disabled'},
        ],
        'elements': elements,
    }


@pytest.fixture
def single_test(record: dict[str, Any]) -> Test:
    """Provide the validated test of `record`."""
    return Test.from_record(record)


@pytest.fixture
def make_step() -> 'Callable[..., dict[str, Any]]':
    """Provide a factory of raw step elements."""
    def make(action: str, response: str = 'Response?', **extra: Any) -> dict[str, Any]:
        return {
            'type': 'step',
            'element': {'action': action, 'response': response},
            **extra,
        }

    return make
