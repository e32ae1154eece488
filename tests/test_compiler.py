"""Tests for example tree compilation."""

from typing import TYPE_CHECKING

from pytest_specify.core import DeclareGroup, RunTest, compile_examples
from pytest_specify.examples import Example, noop

if TYPE_CHECKING:
    from pytest_specify.engine import SyncEngine


def _shape(statements: list) -> list[tuple[str, str]]:
    """Reduce statements to comparable pairs."""
    return [
        ('group', item.name) if isinstance(item, DeclareGroup) else ('test', item.description)
        for item in statements
    ]


def test_group_specs_before_children() -> None:
    """A group emits its own specs before descending into children."""
    forest: list[Example] = []
    g1 = Example('G1', forest=forest)
    g1.add_spec('spec 1', noop)
    g1.add_spec('spec 2', noop)
    g2 = Example('G2', g1)
    g2.add_spec('spec 1', noop)

    assert _shape(compile_examples(forest)) == [
        ('group', 'G1'),
        ('test', 'spec 1'),
        ('test', 'spec 2'),
        ('group', 'G1, G2'),
        ('test', 'spec 1'),
    ]


def test_siblings_never_interleave() -> None:
    """Whole subtrees are emitted before the next sibling."""
    forest: list[Example] = []
    root = Example('root', forest=forest)
    first = Example('first', root)
    Example('deep', first).add_spec('deep spec', noop)
    Example('second', root).add_spec('second spec', noop)
    Example('other root', forest=forest)

    assert _shape(compile_examples(forest)) == [
        ('group', 'root'),
        ('group', 'root, first'),
        ('group', 'root, first, deep'),
        ('test', 'deep spec'),
        ('group', 'root, second'),
        ('test', 'second spec'),
        ('group', 'other root'),
    ]


def test_empty_forest() -> None:
    """Nothing is emitted for an empty forest."""
    assert compile_examples([]) == []


def test_group_hooks_follow_rollups() -> None:
    """Group setup runs outermost first and teardown innermost first."""
    calls: list[str] = []
    forest: list[Example] = []
    outer = Example('outer', forest=forest)
    inner = Example('inner', outer)

    outer.setup = lambda: calls.append('outer setup')
    outer.teardown = lambda: calls.append('outer teardown')
    inner.setup = lambda: calls.append('inner setup')
    inner.teardown = lambda: calls.append('inner teardown')

    group = compile_examples(forest)[1]
    assert isinstance(group, DeclareGroup)

    group.setup()
    group.teardown()

    assert calls == ['outer setup', 'inner setup', 'inner teardown', 'outer teardown']


def test_statements_drive_engine(engine: 'SyncEngine') -> None:
    """Executing statements in order runs every test in its group."""
    calls: list[str] = []
    forest: list[Example] = []
    example = Example('group', forest=forest)
    example.setup = lambda: calls.append('setup')
    example.teardown = lambda: calls.append('teardown')
    example.add_spec('works', lambda: calls.append('body'))

    statements = compile_examples(forest)
    assert isinstance(statements[1], RunTest)

    for statement in statements:
        statement(engine)

    assert calls == ['setup', 'body', 'teardown']
    assert [(result.group, result.description) for result in engine.results] == [('group', 'works')]
