"""Core value helpers for the specification DSL.

This module defines the sentinel used for absent assertion subjects,
the textual form of parameterized spec arguments, and the structural
equality used by deep-comparison assertion verbs.
"""

from collections.abc import Mapping, Set
from typing import Any, Final, final

#: Sequences treated as multi-argument tuples and compared element-wise.
SEQUENCES = (list, tuple)

#: Separator used when rendering a tuple argument as text.
ARGUMENT_SEPARATOR: Final = ','


@final
class Undefined:
    """Sentinel type for an absent value.

    Distinguishes "no value was supplied" from an explicit `None`,
    which the DSL treats as the null value.
    """

    _instance: 'Undefined | None' = None

    def __new__(cls) -> 'Undefined':
        """Return the single shared instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        """String representation."""
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        """Absent values are falsy."""
        return False


UNDEFINED: Final = Undefined()


def format_argument(value: Any) -> str:  # noqa: ANN401
    """Render a spec argument as text.

    Lists and tuples, nested ones included, are joined with a bare
    comma. Any other value uses its `str` form.

    Args:
        value: Argument passed to `given`.

    Returns:
        Textual form embedded into the spec description.
    """
    if isinstance(value, SEQUENCES):
        return ARGUMENT_SEPARATOR.join(format_argument(item) for item in value)

    return str(value)


def spread_argument(value: Any) -> tuple[Any, ...]:  # noqa: ANN401
    """Convert a spec argument into positional call arguments.

    Args:
        value: Argument passed to `given`.

    Returns:
        The items of a list or tuple, or a single-item tuple otherwise.
    """
    if isinstance(value, SEQUENCES):
        return tuple(value)

    return (value,)


def deep_equal(actual: Any, expected: Any) -> bool:  # noqa: ANN401
    """Compare two values structurally.

    Mappings compare by key set and recursively by value, lists and
    tuples element-wise (a list never equals a tuple), sets by
    equality, and objects exposing `__dict__` by exact type and
    recursively by attributes. Everything else falls back to `==`.

    Reference cycles are handled: a pair of containers already under
    comparison is assumed equal when it is reached again.

    Args:
        actual: Actual value.
        expected: Expected value.

    Returns:
        True if both values are structurally equal.
    """
    return _deep_equal(actual, expected, set())


def _deep_equal(actual: Any, expected: Any,  # noqa: ANN401, PLR0911
                seen: set[tuple[int, int]]) -> bool:
    """Recursive worker for `deep_equal`."""
    if actual is expected:
        return True

    key = (id(actual), id(expected))
    if key in seen:
        return True

    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping) or actual.keys() != expected.keys():
            return False
        seen.add(key)
        return all(_deep_equal(actual[name], expected[name], seen) for name in expected)

    if isinstance(expected, SEQUENCES):
        if type(actual) is not type(expected) or len(actual) != len(expected):
            return False
        seen.add(key)
        return all(
            _deep_equal(left, right, seen)
            for left, right in zip(actual, expected, strict=True)
        )

    if isinstance(expected, Set):
        return isinstance(actual, Set) and actual == expected

    if hasattr(expected, '__dict__') and not callable(expected):
        if type(actual) is not type(expected):
            return False
        seen.add(key)
        return _deep_equal(vars(actual), vars(expected), seen)

    return bool(actual == expected)
