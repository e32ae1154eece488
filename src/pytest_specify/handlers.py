"""Fluent assertion handlers.

`assert_(value)` binds a subject and exposes every registered verb as
an attribute. Verbs are looked up in the registry on each access, so
verbs registered later are visible to handlers created earlier.
"""

from functools import partial
from typing import TYPE_CHECKING, Any

from pytest_specify.values import UNDEFINED

if TYPE_CHECKING:
    from pytest_specify.core.loader import AssertionRegistryMixin


class AssertionHandler:
    """Subject value bound to the assertion registry."""

    __slots__ = ('_registry', 'value')

    def __init__(self, value: Any = UNDEFINED, *,  # noqa: ANN401
                 registry: 'AssertionRegistryMixin') -> None:
        """Bind a subject.

        Args:
            value: Value the verbs assert against; absent by default.
            registry: Registry resolving verb names.
        """
        self.value = value
        self._registry = registry

    def __getattr__(self, name: str) -> partial[Any]:
        """Resolve a verb with the subject prepended to its arguments.

        Raises:
            AttributeError: If no verb is registered under the name.
        """
        # verb names always start with a letter
        if name.startswith('_'):
            raise AttributeError(name)

        return partial(self._registry.resolve_verb(name), self.value)

    def __dir__(self) -> list[str]:
        """List registered verbs."""
        return sorted({*super().__dir__(), *self._registry.assertions})

    def __repr__(self) -> str:
        """String representation."""
        return f'<AssertionHandler {self.value!r}>'


class Asserter:
    """The `assert_` verb.

    Calling it returns a handler; `pass_` and `fail` are shortcuts for
    the subject-less verbs.
    """

    def __init__(self, registry: 'AssertionRegistryMixin') -> None:
        """Initialize with the registry handlers resolve against."""
        self.registry = registry

    def __call__(self, value: Any = UNDEFINED) -> AssertionHandler:  # noqa: ANN401
        """Bind `value` to a new handler."""
        return AssertionHandler(value, registry=self.registry)

    def pass_(self, message: str | None = None) -> None:
        """Report an unconditional success."""
        self().pass_(message)

    def fail(self, message: str | None = None) -> None:
        """Report an unconditional failure."""
        self().fail(message)
