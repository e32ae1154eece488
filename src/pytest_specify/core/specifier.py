"""Specification driver.

A `Specifier` runs specifications: it builds the example forest by
calling a builder function with the DSL verbs in scope, compiles the
forest into statements and executes them against an engine.

It also owns the assertion registry, so custom verbs registered on
a specifier are shared by every run it performs.
"""

from functools import partial
from time import sleep
from typing import TYPE_CHECKING, Any

from pytest_specify.builtins.assertions import BUILTINS
from pytest_specify.config import Settings
from pytest_specify.context import BuildContext
from pytest_specify.dsl import Builder
from pytest_specify.engine import SyncEngine, activate_engine
from pytest_specify.scope import invoke

from .compiler import compile_examples
from .loader import AssertionRegistryMixin

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_specify.engine import Clock, Engine
    from pytest_specify.examples import Example

    from .compiler import Statement

#: Specification builder; may accept the `Builder` positionally.
type BuilderFunction = Callable[..., Any]


class Specification:
    """Named builder awaiting execution.

    Produced by using a specifier as a decorator. The pytest plugin
    collects module-level specifications from test modules.
    """

    __test__ = False

    def __init__(self, name: str, builder: 'BuilderFunction', *,
                 specifier: 'Specifier') -> None:
        """Bind a builder to a title and a specifier.

        Args:
            name: Title of the specification.
            builder: Function declaring examples and specs.
            specifier: Specifier performing runs.
        """
        self.name = name
        self.builder = builder
        self.specifier = specifier

    def __repr__(self) -> str:
        """String representation."""
        return f'<Specification {self.name!r}>'

    def __call__(self, engine: 'Engine | None' = None) -> 'Engine':
        """Run the specification against `engine`."""
        return self.specifier(self.name, self.builder, engine)

    def build(self) -> list['Example']:
        """Build the example forest without running specs."""
        return self.specifier.build(self.builder)

    def compile(self) -> list['Statement']:
        """Build and compile without running specs."""
        return compile_examples(self.build())


class Specifier(AssertionRegistryMixin):
    """Specification driver and assertion registry.

    Attributes:
        global_api: Whether builders get the verbs through their module
            namespace instead of a private scope.
        clock: Blocking sleep used by `wait`, in seconds.
    """

    def __init__(self, settings: Settings | None = None, *,
                 clock: 'Clock | None' = None) -> None:
        """Initialize the driver.

        During initialization the specifier registers the built-in
        verbs and, unless disabled in settings, loads plugin verbs.

        Args:
            settings: Runtime settings; read from the environment
                when omitted.
            clock: Blocking sleep used by `wait`; `time.sleep` by default.

        Raises:
            PluginError: If plugin loading fails in strict mode.
        """
        if settings is None:
            settings = Settings()

        self.global_api = settings.global_api
        self.strict_mode = settings.strict
        self.clock: Clock = clock or sleep

        self.clear_plugins()

        for assertion in BUILTINS:
            self.add_assertion(assertion)

        if settings.load_plugins:
            self.load_plugins()

    def build(self, builder: 'BuilderFunction') -> list['Example']:
        """Run a builder and return the example forest it declares.

        Every call starts from an empty forest and no open example.

        Args:
            builder: Function declaring examples and specs.

        Returns:
            Root examples in declaration order.

        Raises:
            DSLBuildError: If the builder misuses the DSL.
        """
        context = BuildContext()

        with context.activate():
            invoke(
                builder,
                Builder(context, self, self.clock),
                global_api=self.global_api,
            )

        return context.forest

    def run(self, name: str, builder: 'BuilderFunction',
            engine: 'Engine | None' = None) -> 'Engine':
        """Run a specification.

        Args:
            name: Title of the specification.
            builder: Function declaring examples and specs.
            engine: Engine executing the statements; a new `SyncEngine`
                when omitted.

        Returns:
            The engine the statements were executed against.
        """
        if engine is None:
            engine = SyncEngine()

        engine.set_title(name)

        statements = compile_examples(self.build(builder))

        with activate_engine(engine):
            for statement in statements:
                statement(engine)

        return engine

    def __call__(self, name: str, builder: 'BuilderFunction | None' = None,
                 engine: 'Engine | None' = None) -> Any:  # noqa: ANN401
        """Run a specification, or decorate a builder when omitted.

        Returns:
            The engine used for the run, or a decorator producing a
            `Specification` when `builder` is omitted.
        """
        if builder is None:
            return partial(Specification, name, specifier=self)

        return self.run(name, builder, engine)


#: Process-wide default specifier.
specify = Specifier()
