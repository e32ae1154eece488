"""Runtime execution layer for collected specs.

This module defines the engines used by the pytest integration and the
pytest item running a single spec. Collection records groups and tests
through `CollectingEngine`; each `SpecItem` then runs its spec with
`ItemEngine` collecting assertion reports, and fails with one
`SpecFailure` listing every failed report.
"""

from typing import TYPE_CHECKING

import pytest
from pydantic import Field

from pytest_specify.engine import Report, activate_engine
from pytest_specify.errors import DSLError, DSLRuntimeError, ErrorContext
from pytest_specify.examples import Procedure  # noqa: TC001
from pytest_specify.models import SchemaModel

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from _pytest._code.code import ExceptionInfo, TerminalRepr


class DeclaredTest(SchemaModel):
    """Test registered by a `RunTest` statement."""

    description: str = Field(title='Spec description')
    body: Procedure = Field(title='Spec body')


class DeclaredGroup(SchemaModel):
    """Group registered by a `DeclareGroup` statement."""

    name: str = Field(title='Qualified group name')
    setup: Procedure = Field(title='Rolled-up setup')
    teardown: Procedure = Field(title='Rolled-up teardown')

    tests: list[DeclaredTest] = Field(
        default_factory=list,
        title='Tests',
        description='Tests registered while this group was active.',
    )


class CollectingEngine:
    """Engine recording groups and tests without running them."""

    def __init__(self) -> None:
        """Initialize an empty recording."""
        self.title: str | None = None
        self.groups: list[DeclaredGroup] = []

    def set_title(self, name: str) -> None:
        """Bind the display title of the run."""
        self.title = name

    def declare_group(self, name: str, setup: Procedure, teardown: Procedure) -> None:
        """Record a new active group."""
        self.groups.append(DeclaredGroup(name=name, setup=setup, teardown=teardown))

    def run_test(self, description: str, body: Procedure) -> None:
        """Record a test in the active group.

        Raises:
            DSLRuntimeError: If no group was declared.
        """
        if not self.groups:
            raise DSLRuntimeError('Tests must be declared inside a group')

        self.groups[-1].tests.append(DeclaredTest(description=description, body=body))

    def report(self, passed: bool, message: str | None = None) -> None:  # noqa: ARG002
        """Reject assertions made during collection.

        Raises:
            DSLRuntimeError: Always.
        """
        raise DSLRuntimeError('Assertions must run inside a spec')

    def pause(self) -> None:
        """Reject waits made during collection.

        Raises:
            DSLRuntimeError: Always.
        """
        raise DSLRuntimeError('wait() must run inside a spec')

    def resume(self) -> None:
        """Nothing is paused during collection."""


class ItemEngine:
    """Engine collecting the reports of a single running spec."""

    def __init__(self) -> None:
        """Initialize without reports."""
        self.reports: list[Report] = []
        self._paused = False

    def set_title(self, name: str) -> None:  # noqa: ARG002
        """Reject nested specification runs.

        Raises:
            DSLRuntimeError: Always.
        """
        raise DSLRuntimeError('Specifications can not run inside a spec')

    def declare_group(self, name: str, setup: Procedure, teardown: Procedure) -> None:  # noqa: ARG002
        """Reject group declarations while a spec runs.

        Raises:
            DSLRuntimeError: Always.
        """
        raise DSLRuntimeError('Groups can not be declared inside a spec')

    def run_test(self, description: str, body: Procedure) -> None:  # noqa: ARG002
        """Reject test registrations while a spec runs.

        Raises:
            DSLRuntimeError: Always.
        """
        raise DSLRuntimeError('Tests can not be declared inside a spec')

    def report(self, passed: bool, message: str | None = None) -> None:
        """Record an assertion outcome."""
        self.reports.append(Report(passed=passed, message=message))

    def pause(self) -> None:
        """Mark the spec as waiting.

        Raises:
            DSLRuntimeError: If the spec is already waiting.
        """
        if self._paused:
            raise DSLRuntimeError('Nested waits are not supported')

        self._paused = True

    def resume(self) -> None:
        """Clear the waiting mark."""
        self._paused = False

    @property
    def failures(self) -> list[Report]:
        """Failed reports."""
        return [item for item in self.reports if not item.passed]


class SpecFailure(AssertionError):
    """One or more assertions of a spec reported failure."""


class SpecItem(pytest.Item):
    """Pytest item executing a single spec.

    The rolled-up setup of the group runs before the body and the
    rolled-up teardown after it, even when the body raises.
    """

    def __init__(self, *, group: DeclaredGroup, test: DeclaredTest,
                 **kwargs: 'Any') -> None:
        """Initialize a pytest item for one spec.

        Args:
            group: Group the spec belongs to.
            test: Spec description and body.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.group = group
        self.test = test

    def runtest(self) -> None:
        """Execute the spec.

        Raises:
            SpecFailure: If any assertion reported failure.
        """
        engine = ItemEngine()

        with activate_engine(engine):
            self.group.setup()
            try:
                self.test.body()
            finally:
                self.group.teardown()

        if failures := engine.failures:
            raise self.fail(failures, total=len(engine.reports))

    def fail(self, failures: list[Report], *, total: int) -> SpecFailure:
        """Create a failure listing every failed report.

        Args:
            failures: Failed reports, in order.
            total: Number of reports made by the spec.

        Returns:
            SpecFailure with formatted message.
        """
        error_context = ErrorContext(
            group=self.group.name,
            spec=self.test.description,
            element={'failed': [item.message or '<no message>' for item in failures]},
        )

        message = f'{len(failures)} of {total} assertions failed'

        return SpecFailure(DSLError.format(message, error_context))

    def repr_failure(self, excinfo: 'ExceptionInfo[BaseException]',
                     style: 'Any' = None) -> 'str | TerminalRepr':
        """Render spec failures without a traceback."""
        if isinstance(excinfo.value, SpecFailure):
            return str(excinfo.value)

        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Location shown in test reports."""
        return self.path, None, f'{self.group.name}: {self.test.description}'
