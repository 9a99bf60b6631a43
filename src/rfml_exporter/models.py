"""Base Pydantic models for exported records and settings.

This module defines the foundational model classes used by all record
structures. Records are immutable once validated, so a single render pass
always sees the same data the remote service returned.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all record elements.

    Design principles enforced by this model:
        - Immutability: records cannot be modified after validation.
        - Tolerant schema handling: the remote service returns many keys
          the exporter does not need; they are ignored instead of being
          rejected.

    All record models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    This class serves as the root for all settings models responsible for
    resolving runtime configuration (command-line values, environment
    variables, CI-provided values).

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
