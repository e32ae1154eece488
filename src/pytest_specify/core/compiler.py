"""Example tree to statement compilation.

The compiler flattens a finished forest of examples into an ordered
list of statements. Traversal is depth-first pre-order: an example
emits its group declaration, then one test per own spec, then its
children in declaration order. Siblings never interleave.

Statements are immutable models; calling one with an engine performs
the corresponding engine primitive.
"""

from typing import TYPE_CHECKING

from pydantic import Field

from pytest_specify.examples import Procedure  # noqa: TC001
from pytest_specify.models import SchemaModel

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

if TYPE_CHECKING:
    from pytest_specify.engine import Engine
    from pytest_specify.examples import Example


class DeclareGroup(SchemaModel):
    """Statement switching the active group of the engine."""

    name: str = Field(
        title='Qualified group name',
        description='Names of the example and its ancestors, outermost first.',
    )

    befores: tuple[Procedure, ...] = Field(
        default=(),
        title='Rolled-up setup hooks',
        description='Setup hooks of the example and its ancestors, outermost first.',
    )

    afters: tuple[Procedure, ...] = Field(
        default=(),
        title='Rolled-up teardown hooks',
        description='Teardown hooks of the example and its ancestors, innermost first.',
    )

    def setup(self) -> None:
        """Run every rolled-up setup hook."""
        for hook in self.befores:
            hook()

    def teardown(self) -> None:
        """Run every rolled-up teardown hook."""
        for hook in self.afters:
            hook()

    def __call__(self, engine: 'Engine') -> None:
        """Declare the group on the engine."""
        engine.declare_group(self.name, self.setup, self.teardown)


class RunTest(SchemaModel):
    """Statement registering one spec with the engine."""

    description: str = Field(title='Spec description')
    body: Procedure = Field(title='Spec body')

    def __call__(self, engine: 'Engine') -> None:
        """Register the test on the engine."""
        engine.run_test(self.description, self.body)


#: Single compiled statement.
type Statement = DeclareGroup | RunTest


def compile_example(example: 'Example') -> 'Iterator[Statement]':
    """Compile one example and its descendants.

    Args:
        example: Example whose subtree is finished.

    Yields:
        Statements in execution order.
    """
    yield DeclareGroup(
        name=example.qualified_name(),
        befores=tuple(example.effective_setup()),
        afters=tuple(example.effective_teardown()),
    )

    for spec in example.specs:
        yield RunTest(description=spec.description, body=spec.body)

    for child in example.children:
        yield from compile_example(child)


def compile_examples(forest: 'Iterable[Example]') -> list[Statement]:
    """Compile a forest of root examples into statements.

    Args:
        forest: Root examples in declaration order.

    Returns:
        Flat list of statements in execution order.
    """
    return [
        statement
        for example in forest
        for statement in compile_example(example)
    ]
