"""Built-in assertion verbs for pytest-specify DSL.

Every verb takes the handler subject first, the expected value (when
the verb compares against one) second, and an optional message last.
Outcomes are reported to the active engine, so failing verbs never
interrupt the spec that uses them.

Each verb is registered under a snake_case name and a camelCase alias.
"""

from numbers import Real
from typing import TYPE_CHECKING

from pytest_specify.engine import report
from pytest_specify.extensions import Assertion
from pytest_specify.values import UNDEFINED, deep_equal

if TYPE_CHECKING:
    from typing import Any


def _equals(actual: 'Any', expected: 'Any', message: str | None = None) -> None:
    """Equality verb."""
    report(actual == expected, message)


def _same_kind(actual: 'Any', expected: 'Any') -> bool:
    if all(isinstance(value, Real) and not isinstance(value, bool) for value in (actual, expected)):
        return True

    return type(actual) is type(expected)


def _is_not_equal_to(actual: 'Any', expected: 'Any', message: str | None = None) -> None:
    """Strict inequality verb.

    Values of different types are never equal, so `1` and `True`
    are reported as different. Numbers other than booleans compare
    by value, so `1` and `1.0` are equal.
    """
    report(not _same_kind(actual, expected) or actual != expected, message)


def _is_same_as(actual: 'Any', expected: 'Any', message: str | None = None) -> None:
    """Deep equality verb."""
    report(deep_equal(actual, expected), message)


def _is_not_same_as(actual: 'Any', expected: 'Any', message: str | None = None) -> None:
    """Deep inequality verb."""
    report(not deep_equal(actual, expected), message)


def _is_true(actual: 'Any', message: str | None = None) -> None:
    """Truthiness verb."""
    report(bool(actual), message)


def _is_false(actual: 'Any', message: str | None = None) -> None:
    """Falsiness verb."""
    report(not actual, message)


def _is_null(actual: 'Any', message: str | None = None) -> None:
    """Null verb."""
    report(actual is None, message)


def _is_not_null(actual: 'Any', message: str | None = None) -> None:
    """Not-null verb."""
    report(actual is not None, message)


def _is_defined(actual: 'Any', message: str | None = None) -> None:
    """Defined verb."""
    report(actual is not UNDEFINED, message)


def _is_undefined(actual: 'Any', message: str | None = None) -> None:
    """Undefined verb."""
    report(actual is UNDEFINED, message)


def _pass(actual: 'Any', message: str | None = None) -> None:  # noqa: ARG001
    """Unconditional success."""
    report(True, message)


def _fail(actual: 'Any', message: str | None = None) -> None:  # noqa: ARG001
    """Unconditional failure."""
    report(False, message)


def _throws_exception(actual: 'Any', message: str | None = None) -> None:
    """Exception verb.

    Calls the subject without arguments; passes if it raises.
    """
    try:
        actual()
    except Exception:  # noqa: BLE001
        report(True, message)
    else:
        report(False, message)


equals = Assertion(
    verb=_equals,
    name='equals',
    aliases=['is_equal_to', 'isEqualTo'],
    title='Equality',
    description='Subject compares equal to the expected value.',
)

is_not_equal_to = Assertion(
    verb=_is_not_equal_to,
    name='is_not_equal_to',
    aliases=['isNotEqualTo'],
    title='Strict inequality',
    description='Subject differs from the expected value in type or value.',
)

is_same_as = Assertion(
    verb=_is_same_as,
    name='is_same_as',
    aliases=['isSameAs'],
    title='Deep equality',
    description='Subject is structurally equal to the expected value.',
)

is_not_same_as = Assertion(
    verb=_is_not_same_as,
    name='is_not_same_as',
    aliases=['isNotSameAs'],
    title='Deep inequality',
    description='Subject is not structurally equal to the expected value.',
)

is_true = Assertion(
    verb=_is_true,
    name='is_true',
    aliases=['isTrue'],
    title='Truthy',
)

is_false = Assertion(
    verb=_is_false,
    name='is_false',
    aliases=['isFalse'],
    title='Falsy',
)

is_null = Assertion(
    verb=_is_null,
    name='is_null',
    aliases=['isNull'],
    title='Null',
    description='Subject is `None`.',
)

is_not_null = Assertion(
    verb=_is_not_null,
    name='is_not_null',
    aliases=['isNotNull'],
    title='Not null',
    description='Subject is not `None`.',
)

is_defined = Assertion(
    verb=_is_defined,
    name='is_defined',
    aliases=['isDefined'],
    title='Defined',
    description='Subject was supplied.',
)

is_undefined = Assertion(
    verb=_is_undefined,
    name='is_undefined',
    aliases=['isUndefined'],
    title='Undefined',
    description='Subject was not supplied.',
)

pass_ = Assertion(
    verb=_pass,
    name='pass_',
    title='Pass',
    description='Always succeeds; the subject is ignored.',
)

fail = Assertion(
    verb=_fail,
    name='fail',
    title='Fail',
    description='Always fails; the subject is ignored.',
)

throws_exception = Assertion(
    verb=_throws_exception,
    name='throws_exception',
    aliases=['throwsException'],
    title='Raises',
    description='Calling the subject without arguments raises an exception.',
)

BUILTINS = (
    equals,
    is_not_equal_to,
    is_same_as,
    is_not_same_as,
    is_true,
    is_false,
    is_null,
    is_not_null,
    is_defined,
    is_undefined,
    pass_,
    fail,
    throws_exception,
)
