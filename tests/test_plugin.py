"""Integration tests for the pytest plugin."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pytest


CALCULATOR_CONTENT = '''
from pytest_specify import specify


@specify('Calculator')
def calculator():
    def group():
        it('adds', lambda: assert_(1 + 1).equals(2))
        it('fails', lambda: assert_(1).equals(2, 'one is not two'))
        it('is pending')

        def nested():
            given(1, 2).it('is positive', lambda value: assert_(value > 0).is_true())

        describe('nested', nested)
        describe('empty', lambda: None)

    describe('math', group)
'''

HOOKS_CONTENT = '''
from pytest_specify import specify

CALLS = []


@specify('Hooks')
def hooks():
    def group():
        before(lambda: CALLS.append('before'))
        after(lambda: CALLS.append('after'))
        it('runs', lambda: CALLS.append('spec'))
        it('raises', lambda: 1 / 0)

    describe('group', group)


def test_calls():
    assert CALLS == ['before', 'spec', 'after', 'before', 'after']
'''

HELPERS_CONTENT = '''
from pytest_specify import specify


def declare():
    it('works', lambda: assert_.pass_())


@specify('Helpers')
def helpers():
    describe('group', declare)
'''


def test_collects_groups_and_specs(pytester: 'pytest.Pytester') -> None:
    """Every group with specs is a collector and every spec an item."""
    pytester.makepyfile(test_calculator=CALCULATOR_CONTENT)

    result = pytester.runpytest('--collect-only', '-q')

    result.stdout.fnmatch_lines([
        'test_calculator.py::calculator::math::adds',
        'test_calculator.py::calculator::math::fails',
        'test_calculator.py::calculator::math::is pending',
        'test_calculator.py::calculator::math, nested::given 1, is positive',
        'test_calculator.py::calculator::math, nested::given 2, is positive',
    ])
    result.stdout.no_fnmatch_line('*math, empty*')


def test_runs_specs(pytester: 'pytest.Pytester') -> None:
    """Failed reports fail the item with their messages."""
    pytester.makepyfile(test_calculator=CALCULATOR_CONTENT)

    result = pytester.runpytest()

    result.assert_outcomes(passed=3, failed=2)
    result.stdout.fnmatch_lines([
        '*1 of 1 assertions failed*',
        '*on spec "fails"*',
        '*- one is not two*',
        '*- Not Implemented*',
    ])


def test_hooks_wrap_items(pytester: 'pytest.Pytester') -> None:
    """Group hooks run around every item, teardown included on errors."""
    pytester.makepyfile(test_hooks=HOOKS_CONTENT)

    result = pytester.runpytest()

    result.assert_outcomes(passed=2, failed=1)
    result.stdout.fnmatch_lines(['*ZeroDivisionError*'])


def test_scoped_mode_by_default(pytester: 'pytest.Pytester') -> None:
    """Module-level helpers do not see the verbs without the option."""
    pytester.makepyfile(test_helpers=HELPERS_CONTENT)

    result = pytester.runpytest()

    result.assert_outcomes(errors=1)
    result.stdout.fnmatch_lines(["*NameError: name 'it' is not defined*"])


def test_global_api_option(pytester: 'pytest.Pytester') -> None:
    """The command-line option switches the default specifier to global mode."""
    pytester.makepyfile(test_helpers=HELPERS_CONTENT)

    result = pytester.runpytest('--specify-global-api')

    result.assert_outcomes(passed=1)
