"""Tests for scope extension of specification builders.

Builders in this module refer to the DSL verbs as bare names.
"""

from typing import TYPE_CHECKING, Any

import pytest

from pytest_specify.config import Settings
from pytest_specify.core import DeclareGroup, Specifier, compile_examples
from pytest_specify.dsl import VERBS
from pytest_specify.scope import accepts_builder, extend_scope

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from pytest_mock import MockType

if TYPE_CHECKING:
    from pytest_specify.engine import SyncEngine


def calculator() -> None:
    def group() -> None:
        it('adds', lambda: assert_(1 + 1).equals(2))

        def nested() -> None:
            before(lambda: None)
            given(1, 2).it('is positive', lambda value: assert_(value > 0).is_true())

        describe('nested', nested)

    describe('calculator', group)


def helper() -> None:
    it('is declared by a module-level helper', lambda: None)


COUNTER = 0


def bump() -> None:
    global COUNTER  # noqa: PLW0603
    COUNTER += 1


def _shape(statements: list) -> list[str]:
    return [
        item.name if isinstance(item, DeclareGroup) else item.description
        for item in statements
    ]


@pytest.fixture
def module_globals() -> 'Iterator[dict[str, Any]]':
    """Provide this module namespace, dropping names added by the test."""
    namespace = globals()
    existing = set(namespace)

    yield namespace

    for name in set(namespace) - existing:
        del namespace[name]


@pytest.fixture
def global_specifier(clock: 'MockType') -> Specifier:
    """Provide a specifier merging verbs into module namespaces."""
    return Specifier(Settings(load_plugins=False, global_api=True), clock=clock)


def test_scoped_mode_resolves_bare_names(specifier: Specifier, engine: 'SyncEngine') -> None:
    """Verbs resolve in the builder and in functions it defines."""
    specifier('calculator', calculator, engine)

    assert [result.description for result in engine.results] == [
        'adds',
        'given 1, is positive',
        'given 2, is positive',
    ]
    assert engine.failed == 0


def test_scoped_mode_keeps_module_clean(specifier: Specifier) -> None:
    """The defining module never receives the verbs."""
    specifier.build(calculator)

    assert not set(VERBS) & set(globals())


def test_global_mode_merges_verbs(global_specifier: Specifier,
                                  module_globals: dict[str, Any]) -> None:
    """Verbs are merged into the module namespace of the builder."""
    global_specifier.build(calculator)

    assert set(VERBS) <= set(module_globals)


def test_modes_compile_identically(specifier: Specifier, global_specifier: Specifier,
                                   module_globals: dict[str, Any]) -> None:  # noqa: ARG001
    """Both modes produce the same statement sequence."""
    scoped = _shape(compile_examples(specifier.build(calculator)))
    merged = _shape(compile_examples(global_specifier.build(calculator)))

    assert scoped == merged == [
        'calculator',
        'adds',
        'calculator, nested',
        'given 1, is positive',
        'given 2, is positive',
    ]


def test_scoped_mode_needs_helpers_inside(specifier: Specifier) -> None:
    """Module-level helpers called by a builder do not see the verbs."""
    def builder() -> None:
        describe('group', helper)

    with pytest.raises(NameError, match="'it' is not defined"):
        specifier.build(builder)


def test_global_mode_reaches_helpers(global_specifier: Specifier,
                                     module_globals: dict[str, Any]) -> None:  # noqa: ARG001
    """Module-level helpers see verbs merged into their module."""
    def builder() -> None:
        describe('group', helper)

    forest = global_specifier.build(builder)

    assert [spec.description for spec in forest[0].specs] == ['is declared by a module-level helper']


def test_scoped_mode_reads_live_globals(specifier: Specifier, engine: 'SyncEngine') -> None:
    """Spec bodies see module globals rebound after the build."""
    start = COUNTER

    def builder() -> None:
        def group() -> None:
            it('counts', lambda: (bump(), assert_(COUNTER).equals(start + 1)))

        describe('counter', group)

    specifier('counter', builder, engine)

    assert COUNTER == start + 1
    assert engine.results[0].passed


def test_scoped_mode_resolves_builtins() -> None:
    """Names missing from the module fall back to builtins."""
    def builder() -> object:
        return len(verb)

    assert extend_scope(builder, {'verb': 'abc'})() == 3


def test_defaulted_parameters_keep_defaults(specifier: Specifier) -> None:
    """Builders with only defaulted parameters are called without the builder."""
    def builder(count: int = 2) -> None:
        describe('counted', lambda: given(*range(count)).it('works'))

    forest = specifier.build(builder)

    assert [spec.description for spec in forest[0].specs] == ['given 0, works', 'given 1, works']


def test_locals_shadow_verbs(specifier: Specifier) -> None:
    """Local names and parameters take precedence over the verbs."""
    shadowed: list[str] = []

    def builder() -> None:
        it = shadowed.append

        def group() -> None:
            it('not a spec')

        describe('group', group)

    forest = specifier.build(builder)

    assert shadowed == ['not a spec']
    assert forest[0].specs == []


def test_closures_are_preserved(specifier: Specifier) -> None:
    """The scoped copy keeps the closure and defaults of the builder."""
    name = 'from closure'

    def builder(*, suffix: str = 'with default') -> None:
        describe(f'{name} {suffix}', lambda: None)

    forest = specifier.build(builder)

    assert forest[0].name == 'from closure with default'


def test_global_statement_stays_private(specifier: Specifier) -> None:
    """Globals assigned by a scoped builder land in its private scope."""
    def builder() -> None:
        global LEAKED  # noqa: PLW0603
        LEAKED = True

    specifier.build(builder)

    assert 'LEAKED' not in globals()


def test_bound_methods(specifier: Specifier) -> None:
    """Bound methods keep their instance."""
    class Suite:
        name = 'suite'

        def build(self) -> None:
            describe(self.name, lambda: it('works', lambda: None))

    forest = specifier.build(Suite().build)

    assert forest[0].name == 'suite'
    assert [spec.description for spec in forest[0].specs] == ['works']


def test_callable_objects_receive_builder(specifier: Specifier) -> None:
    """Callables other than functions get the builder explicitly."""
    class Suite:
        def __call__(self, s: Any) -> None:  # noqa: ANN401
            s.describe('callable', lambda: s.it('works', lambda: None))

    forest = specifier.build(Suite())

    assert forest[0].name == 'callable'


def test_builder_and_bare_names_together(specifier: Specifier) -> None:
    """A builder taking a parameter also sees the verbs as names."""
    def builder(s: Any) -> None:  # noqa: ANN401
        assert s.describe == describe
        describe('group', lambda: None)

    assert [root.name for root in specifier.build(builder)] == ['group']


def test_extend_scope_copies_function() -> None:
    """The copy resolves extra names without changing the original."""
    def probe() -> object:
        return verb

    copy = extend_scope(probe, {'verb': 42})

    assert copy() == 42
    assert copy is not probe
    assert copy.__name__ == 'probe'
    with pytest.raises(NameError):
        probe()


@pytest.mark.parametrize('fn, accepts', (
    pytest.param(lambda: None, False, id='no parameters'),
    pytest.param(lambda s: None, True, id='positional'),
    pytest.param(lambda s=1: None, False, id='defaulted'),
    pytest.param(lambda s, t=1: None, True, id='required and defaulted'),
    pytest.param(lambda *args: None, True, id='variadic'),
    pytest.param(lambda *, s=None: None, False, id='keyword only'),
    pytest.param(print, True, id='builtin'),
))
def test_accepts_builder(fn: Any, accepts: bool) -> None:  # noqa: ANN401
    """Only required positional parameters or `*args` receive the builder."""
    assert accepts_builder(fn) is accepts
