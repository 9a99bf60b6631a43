"""Runtime configuration of the exporter.

Options are resolved from explicit keyword arguments first (as passed by
the command-line interface) and then from `RAINFOREST_*` environment
variables.
"""

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from rfml_exporter.models import SettingsModel

DEFAULT_API_URL = 'https://app.rainforestqa.com/api/1'
DEFAULT_TEST_FOLDER = Path('spec/rainforest')


class ExportOptions(SettingsModel):
    """Options consumed by the export driver and its collaborators."""

    model_config = SettingsConfigDict(
        env_prefix='RAINFOREST_',
        populate_by_name=True,
    )

    token: SecretStr | None = Field(
        default=None,
        validation_alias='RAINFOREST_API_TOKEN',
        description='Client token sent with every API request.',
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description='Base URL of the Rainforest API.',
    )

    test_folder: Path = Field(
        default=DEFAULT_TEST_FOLDER,
        description='Directory receiving the exported RFML files.',
    )

    embed_tests: bool = Field(
        default=False,
        description=(
            'Reference embedded tests by their RFML identifier '
            'instead of inlining their steps.'
        ),
    )

    tests: list[int] = Field(
        default_factory=list,
        description='Explicit test identifiers to export; empty means all.',
    )

    debug: bool = Field(
        default=False,
        description='Enable debug logging.',
    )
