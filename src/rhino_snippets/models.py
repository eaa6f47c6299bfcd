"""Base Pydantic models for catalog and completion elements.

This module defines the foundational model classes used by all catalog
and completion structures. It enforces immutability and strict schema
validation so that catalog snapshots stay read-only for the lifetime of
every completion request.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all engine elements.

    This class serves as the root for all Pydantic models representing
    catalog descriptors, composed snippets and completion results.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          A catalog snapshot observed by a request never changes under it.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in catalog records.

    All engine models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The field defined in this model does not affect composition and is
    used purely as documentation in generated completions.
    """

    description: str = Field(
        default='',
        title='Description',
        description='Human-readable description of the catalog element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for engine settings.

    This class serves as the root for all settings models responsible for
    resolving runtime configuration (environment variables or explicit
    keyword arguments).

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
