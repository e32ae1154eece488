"""Declarative DSL plugin definition.

This module defines the top-level declarative container used to describe
assertion verbs provided by a pytest-specify plugin.

Installed packages expose `Plugin` instances through the
`specify_plugins` entry-point group; the assertion registry loads them
when a specifier is created.
"""

from pydantic import Field

from pytest_specify.models import SchemaModel
from pytest_specify.names import Namespace  # noqa: TC001

from .assertions import Assertion, AssertionVerb

__all__ = (
    'Assertion',
    'AssertionVerb',
    'Plugin',
)


class Plugin(SchemaModel):
    """Declarative container for DSL plugin extensions.

    Plugin instances are declarative descriptions only. They are
    consumed by the registry loader to register assertion verbs and to
    detect naming conflicts.
    """

    name: Namespace = Field(
        title='Plugin namespace',
        description=(
            'Logical namespace of the plugin. '
            'Used for identification and diagnostics.'
        ),
    )

    version: int = Field(
        default=1,
        title='DSL version',
        description=(
            'Version of the plugin DSL contract. '
            'This is not a semantic version of the plugin implementation.'
        ),
    )

    assertions: list[Assertion] = Field(
        default_factory=list,
        title='Assertions',
        description='Assertion verbs contributed by the plugin.',
    )
