"""Tests configurations and fixtures."""

from importlib.metadata import EntryPoint, EntryPoints
from typing import TYPE_CHECKING

import pytest

from pytest_specify.config import Settings
from pytest_specify.core import Specifier
from pytest_specify.engine import SyncEngine

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType

if TYPE_CHECKING:
    from pytest_specify.extensions import Plugin


@pytest.fixture
def clock(mocker: 'MockerFixture') -> 'MockType':
    """Provide a fake blocking sleep recording requested delays."""
    return mocker.Mock(return_value=None)


@pytest.fixture
def specifier(clock: 'MockType') -> Specifier:
    """Provide an isolated specifier.

    Plugins are not loaded and `wait` never sleeps, so custom verbs
    registered by a test do not leak into the default specifier.
    """
    return Specifier(Settings(load_plugins=False, global_api=False), clock=clock)


@pytest.fixture
def engine() -> SyncEngine:
    """Provide a fresh in-process engine."""
    return SyncEngine()


@pytest.fixture
def patch_entrypoints(mocker: 'MockerFixture') -> 'Callable[..., MockType]':
    """Provide a factory for mocking `importlib.metadata.entry_points`.

    Returns a callable that patches `entry_points()` to simulate
    discovery of plugins in the `specify_plugins` entry point group.
    """
    def patch(*plugins: 'Plugin | object', raises: Exception | None = None) -> 'MockType':
        """Patch `entry_points` with a controlled plugin configuration.

        Args:
            plugins: Objects to be returned by `EntryPoint.load()`.
                If empty, no entry points are registered.
            raises: Exception to raise when `EntryPoint.load()` is called.

        Returns:
            A mock patch object replacing `importlib.metadata.entry_points`
            for the duration of the test.
        """
        entrypoints = []
        for plugin in plugins:
            ep = mocker.Mock(spec=EntryPoint)
            ep.group = 'specify_plugins'
            ep.name = 'tests'
            ep.value = 'tests.plugins:test'
            ep.load.return_value = plugin
            if raises is not None:
                ep.load.side_effect = raises
            entrypoints.append(ep)

        return mocker.patch(
            'importlib.metadata.entry_points',
            return_value=EntryPoints(entrypoints),
        )

    return patch
