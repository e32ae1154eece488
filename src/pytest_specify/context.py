"""Build context for example trees.

A build context owns the forest of root examples produced by one
specification run and the cursor pointing at the example currently
being described. The active context is carried in a context variable,
so runs in separate threads or tasks never share a cursor.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from pytest_specify.errors import DSLBuildError
from pytest_specify.examples import Example

if TYPE_CHECKING:
    from collections.abc import Iterator

_current_build: ContextVar['BuildContext | None'] = ContextVar('specify_build', default=None)


class BuildContext:
    """Forest and cursor of a single specification run."""

    def __init__(self) -> None:
        """Create an empty forest with no open example."""
        self.forest: list[Example] = []
        self.cursor: Example | None = None

    @contextmanager
    def describe(self, name: str) -> 'Iterator[Example]':
        """Open a new example under the cursor.

        The cursor moves to the new example for the duration of the
        block and is restored on every exit path.

        Args:
            name: Own description of the example.

        Yields:
            The newly created example.
        """
        previous = self.cursor
        self.cursor = Example(name, previous, forest=self.forest)
        try:
            yield self.cursor
        finally:
            self.cursor = previous

    def require_cursor(self, verb: str) -> Example:
        """Return the open example or fail for verbs needing one.

        Args:
            verb: Name of the DSL verb being used.

        Returns:
            The example currently being described.

        Raises:
            DSLBuildError: If no example is open.
        """
        if self.cursor is None:
            raise DSLBuildError(f'{verb}() must be called inside describe()')

        return self.cursor

    @contextmanager
    def activate(self) -> 'Iterator[BuildContext]':
        """Make this context the current build for the block."""
        token = _current_build.set(self)
        try:
            yield self
        finally:
            _current_build.reset(token)


def current_build() -> BuildContext | None:
    """Return the active build context, if a specification is being built."""
    return _current_build.get()
