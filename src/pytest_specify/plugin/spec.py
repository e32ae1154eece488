"""Pytest collectors for specifications.

A specification is built and compiled at collection time against a
recording engine. The recorded groups become `GroupCollector` nodes,
named by their qualified example names, each holding one `SpecItem`
per spec in declaration order.
"""

from typing import TYPE_CHECKING

import pytest

from .case import CollectingEngine, SpecItem

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

if TYPE_CHECKING:
    from pytest_specify.core import Specification

    from .case import DeclaredGroup


class SpecificationCollector(pytest.Collector):
    """Collector for one module-level specification."""

    def __init__(self, *, specification: 'Specification', **kwargs: 'Any') -> None:
        """Initialize the collector.

        Args:
            specification: Specification to build.
            **kwargs: Keyword pytest.Collector arguments.
        """
        super().__init__(**kwargs)

        self.specification = specification

    def collect(self) -> 'Iterable[GroupCollector]':
        """Build the specification and collect its groups.

        Groups without specs are skipped.

        Returns:
            Iterable of group collectors in compilation order.

        Raises:
            DSLBuildError: If the builder misuses the DSL.
        """
        engine = CollectingEngine()
        self.specification(engine)

        for group in engine.groups:
            if group.tests:
                yield GroupCollector.from_parent(
                    self,
                    name=group.name,
                    group=group,
                )


class GroupCollector(pytest.Collector):
    """Collector for one example group."""

    def __init__(self, *, group: 'DeclaredGroup', **kwargs: 'Any') -> None:
        """Initialize the collector.

        Args:
            group: Recorded group declaration and its tests.
            **kwargs: Keyword pytest.Collector arguments.
        """
        super().__init__(**kwargs)

        self.group = group

    def collect(self) -> 'Iterable[SpecItem]':
        """Collect one item per spec of the group."""
        for test in self.group.tests:
            yield SpecItem.from_parent(
                self,
                name=test.description,
                group=self.group,
                test=test,
            )
