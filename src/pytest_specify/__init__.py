"""Behavioral specification DSL for pytest.

The `pytest_specify` package lets tests be written as nested example
groups with inherited setup and teardown hooks:

    @specify('Calculator')
    def calculator():
        @describe('addition')
        def _():
            it('adds numbers', lambda: assert_(1 + 1).equals(2))

Key features:
- `describe`, `before`, `after`, `it`, `given`, `assert_` and `wait`
  resolvable as bare names inside builders, without global imports;
- nested groups compiled into flat, ordered test sequences;
- extensible assertion verbs, including entry-point plugins;
- pytest collection of module-level specifications and a small CLI.
"""

from pytest_specify.core import Specification, Specifier, specify
from pytest_specify.engine import SyncEngine
from pytest_specify.extensions import Assertion, Plugin
from pytest_specify.values import UNDEFINED

__all__ = (
    'UNDEFINED',
    'Assertion',
    'Plugin',
    'Specification',
    'Specifier',
    'SyncEngine',
    'specify',
)
