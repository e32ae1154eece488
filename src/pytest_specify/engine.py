"""Execution engine boundary.

Compiled statements drive an engine through a small protocol: group
declarations, test registrations and pass/fail reports, plus a
pause/resume pair used by timed waits. Assertion verbs report through
`report`, which forwards to the engine active in the current context.

`SyncEngine` is the in-process engine: it runs every test as soon as
it is registered and records the outcome.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Protocol

from pydantic import Field

from pytest_specify.errors import DSLRuntimeError
from pytest_specify.examples import Procedure, noop
from pytest_specify.models import SchemaModel

#: Blocking sleep taking a delay in seconds.
type Clock = Callable[[float], Any]

_current_engine: ContextVar['Engine | None'] = ContextVar('specify_engine', default=None)


class Engine(Protocol):
    """Primitives a specification run requires from a test engine."""

    def set_title(self, name: str) -> None:
        """Bind the display title of the run."""

    def declare_group(self, name: str, setup: Procedure, teardown: Procedure) -> None:
        """Register a group; its hooks wrap every test until the next group."""

    def run_test(self, description: str, body: Procedure) -> None:
        """Register a test belonging to the most recently declared group."""

    def report(self, passed: bool, message: str | None = None) -> None:
        """Record one assertion outcome against the running test."""

    def pause(self) -> None:
        """Stop advancing to the next statement."""

    def resume(self) -> None:
        """Continue advancing after a pause."""


@contextmanager
def activate_engine(engine: Engine) -> Iterator[Engine]:
    """Make `engine` receive reports for the duration of the block."""
    token = _current_engine.set(engine)
    try:
        yield engine
    finally:
        _current_engine.reset(token)


def current_engine() -> Engine:
    """Return the engine receiving reports.

    Raises:
        DSLRuntimeError: If no engine is active.
    """
    if (engine := _current_engine.get()) is None:
        raise DSLRuntimeError('No engine is running specs')

    return engine


def report(passed: bool, message: str | None = None) -> None:
    """Report one assertion outcome to the active engine.

    Args:
        passed: Outcome of the assertion.
        message: Optional human-readable message.
    """
    current_engine().report(bool(passed), message)


class Report(SchemaModel):
    """Outcome of a single assertion."""

    passed: bool = Field(title='Passed')
    message: str | None = Field(default=None, title='Message')


class TestResult(SchemaModel):
    """Outcome of a single spec run by `SyncEngine`."""

    __test__ = False

    group: str = Field(title='Qualified group name')
    description: str = Field(title='Spec description')

    reports: tuple[Report, ...] = Field(
        default=(),
        title='Assertion reports',
        description='Every report made while the spec ran, in order.',
    )

    error: str | None = Field(
        default=None,
        title='Unexpected error',
        description='Representation of an exception raised by the spec, if any.',
    )

    @property
    def failures(self) -> tuple[Report, ...]:
        """Failed reports."""
        return tuple(item for item in self.reports if not item.passed)

    @property
    def passed(self) -> bool:
        """True if the spec raised nothing and every report passed."""
        return self.error is None and not self.failures


class SyncEngine:
    """Engine running each test as soon as it is registered.

    Setup and teardown hooks of the active group wrap every test;
    teardown runs even when the body raises. Exceptions escaping a
    test are recorded as errors and the run continues.
    """

    def __init__(self) -> None:
        """Initialize an engine without results."""
        self.title: str | None = None
        self.results: list[TestResult] = []

        self._group = ''
        self._setup: Procedure = noop
        self._teardown: Procedure = noop

        self._reports: list[Report] | None = None
        self._paused = False

    def set_title(self, name: str) -> None:
        """Bind the display title of the run."""
        self.title = name

    def declare_group(self, name: str, setup: Procedure, teardown: Procedure) -> None:
        """Switch the active group."""
        self._group = name
        self._setup = setup
        self._teardown = teardown

    def run_test(self, description: str, body: Procedure) -> None:
        """Run a test in the active group and record its outcome."""
        reports: list[Report] = []
        error: str | None = None

        self._reports = reports
        try:
            self._setup()
            try:
                body()
            finally:
                self._teardown()
        except Exception as base:  # noqa: BLE001
            error = f'{base!r}'
        finally:
            self._reports = None
            self._paused = False

        self.results.append(TestResult(
            group=self._group,
            description=description,
            reports=tuple(reports),
            error=error,
        ))

    def report(self, passed: bool, message: str | None = None) -> None:
        """Record an assertion outcome against the running test.

        Raises:
            DSLRuntimeError: If no test is running.
        """
        if self._reports is None:
            raise DSLRuntimeError('Assertions must run inside a spec')

        self._reports.append(Report(passed=passed, message=message))

    def pause(self) -> None:
        """Mark the running test as waiting.

        Raises:
            DSLRuntimeError: If the test is already waiting.
        """
        if self._paused:
            raise DSLRuntimeError('Nested waits are not supported')

        self._paused = True

    def resume(self) -> None:
        """Clear the waiting mark."""
        self._paused = False

    @property
    def passed(self) -> int:
        """Number of specs that passed."""
        return sum(1 for result in self.results if result.passed)

    @property
    def failed(self) -> int:
        """Number of specs that failed or raised."""
        return len(self.results) - self.passed
