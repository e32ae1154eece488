"""Example tree model and inheritance rollups.

An example is a named, nestable group of specs sharing setup and
teardown hooks. Examples form a tree: every node keeps a weak link to
its parent and owns its children and specs, both kept in declaration
order.

Effective hooks and names are rolled up lazily from the node to the
root, so they reflect the tree as it is when compilation happens.
"""

from collections.abc import Callable, Iterator
from typing import Any
from weakref import ref

from pydantic import Field

from pytest_specify.models import SchemaModel

#: Zero-argument procedure used for specs, setup and teardown hooks.
type Procedure = Callable[[], Any]

#: Separator between ancestor names in a qualified name.
NAME_SEPARATOR = ', '


def noop() -> None:
    """Default setup and teardown hook."""


class Spec(SchemaModel):
    """A single named check within an example group."""

    description: str = Field(
        title='Spec description',
        description='What "it" should do, reported as the test name.',
    )

    body: Procedure = Field(
        title='Spec body',
        description='Zero-argument callable performing the check.',
    )


class Example:
    """Node of the example tree.

    A node created with a parent is appended to the parent's children;
    a node created without one is appended to `forest` when given.
    Children and specs are only ever appended.
    """

    def __init__(self, name: str, parent: 'Example | None' = None, *,
                 forest: list['Example'] | None = None) -> None:
        """Create an example and attach it to its owner.

        Args:
            name: Own (unqualified) description of the group.
            parent: Enclosing example, if nested.
            forest: Root list receiving the node when it has no parent.
        """
        self.name = name
        self._parent = ref(parent) if parent is not None else None

        self.children: list[Example] = []
        self.specs: list[Spec] = []

        self.setup: Procedure = noop
        self.teardown: Procedure = noop

        if parent is not None:
            parent.children.append(self)
        elif forest is not None:
            forest.append(self)

    def __repr__(self) -> str:
        """String representation."""
        return f'<Example {self.qualified_name()!r}>'

    @property
    def parent(self) -> 'Example | None':
        """Enclosing example, or `None` for roots."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def depth(self) -> int:
        """Number of ancestors above this node."""
        return sum(1 for _ in self.lineage()) - 1

    def lineage(self) -> Iterator['Example']:
        """Iterate from this node up to its root."""
        node: Example | None = self
        while node is not None:
            yield node
            node = node.parent

    def add_spec(self, description: str, body: Procedure) -> Spec:
        """Append a spec to this example.

        Args:
            description: Spec description.
            body: Zero-argument test body.

        Returns:
            The registered spec.
        """
        spec = Spec(description=description, body=body)
        self.specs.append(spec)
        return spec

    def effective_setup(self) -> list[Procedure]:
        """Roll up setup hooks, outermost first."""
        return [node.setup for node in self.lineage()][::-1]

    def effective_teardown(self) -> list[Procedure]:
        """Roll up teardown hooks, innermost first."""
        return [node.teardown for node in self.lineage()]

    def qualified_name(self) -> str:
        """Join ancestor names from the root down to this node."""
        return NAME_SEPARATOR.join([node.name for node in self.lineage()][::-1])

    def walk(self) -> Iterator['Example']:
        """Iterate over this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def outline(self) -> dict[str, Any]:
        """Describe the subtree as plain data.

        Returns:
            Mapping with the group name, its spec descriptions and the
            outlines of nested groups; empty lists are omitted.
        """
        outline: dict[str, Any] = {'describe': self.name}
        if self.specs:
            outline['it'] = [spec.description for spec in self.specs]
        if self.children:
            outline['examples'] = [child.outline() for child in self.children]

        return outline
