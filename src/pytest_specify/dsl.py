"""Specification DSL verbs.

A `Builder` exposes the verbs a specification builder uses:
`describe`, `before`, `after`, `it`, `given`, `assert_` and `wait`.
Each builder is tied to the build context of one specification run,
so the verbs always add to the example currently being described.
"""

from functools import partial
from typing import TYPE_CHECKING, Any

from pytest_specify.context import current_build
from pytest_specify.engine import current_engine
from pytest_specify.errors import DSLBuildError
from pytest_specify.handlers import Asserter
from pytest_specify.values import format_argument, spread_argument

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_specify.context import BuildContext
    from pytest_specify.core.loader import AssertionRegistryMixin
    from pytest_specify.engine import Clock
    from pytest_specify.examples import Example, Procedure, Spec

#: Verb names made available to specification builders.
VERBS = ('describe', 'before', 'after', 'it', 'given', 'assert_', 'wait')

#: Failure message reported by specs declared without a body.
NOT_IMPLEMENTED = 'Not Implemented'


class Given:
    """Pending parameterized spec created by `given`."""

    def __init__(self, builder: 'Builder', arguments: tuple[Any, ...]) -> None:
        """Remember the arguments to expand.

        Args:
            builder: Builder receiving the expanded specs.
            arguments: Scalars or lists/tuples of positional arguments.
        """
        self.builder = builder
        self.arguments = arguments

    def it(self, description: str,
           fn: 'Callable[..., Any] | None' = None) -> list['Spec']:
        """Declare one spec per argument.

        Args:
            description: Template description of the spec.
            fn: Test body accepting the spread argument; a missing body
                expands into "Not Implemented" stubs.

        Returns:
            The generated specs, in argument order.
        """
        return [
            self.builder.it(
                f'given {format_argument(argument)}, {description}',
                fn if fn is None else partial(fn, *spread_argument(argument)),
            )
            for argument in self.arguments
        ]


class Builder:
    """Verb set bound to one build context."""

    def __init__(self, context: 'BuildContext',
                 registry: 'AssertionRegistryMixin',
                 clock: 'Clock') -> None:
        """Bind the verbs.

        Args:
            context: Build context receiving examples and specs.
            registry: Registry resolving assertion verbs.
            clock: Blocking sleep used by `wait`, in seconds.
        """
        self.context = context
        self.clock = clock
        self.assert_ = Asserter(registry)

    def describe(self, description: str,
                 fn: 'Procedure | None' = None) -> 'Example | Callable[[Procedure], Example]':
        """Describe a nested example group.

        `fn` runs immediately with the new example as the cursor. When
        `fn` is omitted, returns a decorator that does the same.

        Args:
            description: Own name of the group.
            fn: Zero-argument callable declaring hooks, specs and groups.

        Returns:
            The new example, or a decorator returning it when `fn`
            is omitted.
        """
        if fn is None:
            return partial(self.describe, description)  # type: ignore[return-value]

        self.require_building('describe')
        with self.context.describe(description) as example:
            fn()

        return example

    def before[F: Procedure](self, fn: F) -> F:
        """Set the setup hook of the current example."""
        self.require_building('before').require_cursor('before').setup = fn
        return fn

    def after[F: Procedure](self, fn: F) -> F:
        """Set the teardown hook of the current example."""
        self.require_building('after').require_cursor('after').teardown = fn
        return fn

    def it(self, description: str, fn: 'Procedure | None' = None) -> 'Spec':
        """Declare a spec in the current example.

        Args:
            description: What "it" should do.
            fn: Test body; when omitted, the spec reports a
                "Not Implemented" failure.

        Returns:
            The registered spec.

        Raises:
            DSLBuildError: If called outside `describe` or `fn`
                is not callable.
        """
        example = self.require_building('it').require_cursor('it')

        if fn is None:
            fn = partial(self.assert_.fail, NOT_IMPLEMENTED)

        if not callable(fn):
            raise DSLBuildError.from_example(
                f'Spec body must be callable, got {type(fn).__name__}',
                example,
                spec=description,
            )

        return example.add_spec(description, fn)

    def given(self, *arguments: Any) -> Given:  # noqa: ANN401
        """Start a parameterized spec.

        Args:
            *arguments: One entry per generated spec; lists and tuples
                are spread as positional arguments.

        Returns:
            An object whose `it` declares the specs.

        Raises:
            DSLBuildError: If no argument is given.
        """
        if not arguments:
            raise DSLBuildError.from_example(
                'given() requires at least one argument',
                self.context.cursor,
            )

        return Given(self, arguments)

    def wait(self, ms: float, fn: 'Procedure') -> None:
        """Pause the running spec, then call `fn`.

        Args:
            ms: Delay in milliseconds.
            fn: Callable resumed after the delay.

        Raises:
            DSLRuntimeError: If no engine is running or a wait is
                already in progress.
        """
        engine = current_engine()
        engine.pause()
        try:
            self.clock(ms / 1000)
            fn()
        finally:
            engine.resume()

    def require_building(self, verb: str) -> 'BuildContext':
        """Return the build context while its specification is built.

        Raises:
            DSLBuildError: If the verb is used after the build finished,
                for example from inside a running spec.
        """
        if current_build() is not self.context:
            raise DSLBuildError(f'{verb}() must be called while the specification is built')

        return self.context

    def verbs(self) -> dict[str, Any]:
        """Map verb names to their bound implementations."""
        return {name: getattr(self, name) for name in VERBS}
