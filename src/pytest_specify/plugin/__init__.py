"""Pytest plugin collecting and executing behavioral specifications.

This module integrates `pytest-specify` with pytest by:
- registering custom command-line options;
- collecting module-level `Specification` objects (created with the
  `@specify('Name')` decorator) from test modules as pytest collectors.

Every example group of a specification becomes a collector and every
spec a test item.
"""

from typing import TYPE_CHECKING

from pytest_specify.core import Specification, specify

from .spec import SpecificationCollector

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.python import PyCollector


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-specify.

    Args:
        parser: Pytest argument parser.
    """
    parser.addoption(
        '--specify-global-api',
        action='store_true',
        dest='specify_global_api',
        default=False,
        help=(
            'Merge the DSL verbs into the module namespace of specification '
            'builders instead of injecting them into a private scope.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Apply command-line options to the default specifier.

    Args:
        config: Pytest configuration object.
    """
    config.specify_global_api = specify.global_api  # type: ignore[attr-defined]
    if config.getoption('--specify-global-api', default=False):
        specify.global_api = True


def pytest_unconfigure(config: 'Config') -> None:
    """Restore the default specifier mode changed at configuration.

    Args:
        config: Pytest configuration object.
    """
    if hasattr(config, 'specify_global_api'):
        specify.global_api = config.specify_global_api


def pytest_pycollect_makeitem(collector: 'PyCollector', name: str,
                              obj: object) -> SpecificationCollector | None:
    """Collect module-level specifications.

    Args:
        collector: Module or class collector being populated.
        name: Attribute name of the object.
        obj: Attribute value.

    Returns:
        A `SpecificationCollector` for specifications, otherwise `None`
            to let pytest continue with its default collection.
    """
    if isinstance(obj, Specification):
        return SpecificationCollector.from_parent(
            collector,
            name=name,
            specification=obj,
        )

    return None
