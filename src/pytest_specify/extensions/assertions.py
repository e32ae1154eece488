"""Declarative assertion verb definitions.

An assertion describes a verb exposed on assertion handlers: the name
(and aliases) it is resolved by and the callable implementing it.

Verb callables receive the handler subject first, then the arguments
given at the call site, and the optional message last. They report
their outcome through `pytest_specify.engine.report` rather than
returning it, so one verb may report any number of times.
"""

from collections.abc import Callable
from typing import Any

from pydantic import Field

from pytest_specify.models import DescribedMixin, SchemaModel
from pytest_specify.names import Verb  # noqa: TC001

#: The verb receives the subject value, call-site arguments and an
#: optional trailing message, and reports through the active engine.
type AssertionVerb = Callable[..., Any]


class Assertion(DescribedMixin, SchemaModel):
    """Declarative assertion verb definition."""

    verb: AssertionVerb = Field(
        title='Verb function',
        description=(
            'Callable implementing the assertion. '
            'Receives the subject value, the call-site arguments and the '
            'optional message, and reports the outcome to the active engine.'
        ),
    )

    name: Verb = Field(
        title='Verb name',
        description='Primary attribute name of the verb on assertion handlers.',
    )

    aliases: list[Verb] = Field(
        default_factory=list,
        title='Verb aliases',
        description=(
            'Alternative attribute names resolving to the same verb, '
            'for example a camelCase spelling of a snake_case name.'
        ),
    )

    @property
    def names(self) -> tuple[str, ...]:
        """Primary name followed by aliases."""
        return (self.name, *self.aliases)
