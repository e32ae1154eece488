"""Base Pydantic models for DSL elements.

This module defines the foundational model classes used by declarative
DSL structures such as specs, assertions and plugins, and the base for
runtime settings.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for declarative DSL elements.

    Design principles enforced by this model:
        - Immutability: DSL elements cannot be modified after creation,
          so a spec or an assertion definition registered once behaves
          the same for every run.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in extensions.

    Arbitrary types are allowed because most elements carry callables.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The fields defined in this model do not affect execution semantics
    and are used for listings and diagnostics only.
    """

    title: str | None = Field(
        default=None,
        title='Title',
        description='Short human-readable title of the DSL element.',
    )

    description: str | None = Field(
        default=None,
        title='Description',
        description='Detailed human-readable description of the DSL element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so unrelated environment variables never break resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
