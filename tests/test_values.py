"""Tests for value helpers."""

from typing import Any

import pytest

from pytest_specify.values import UNDEFINED, Undefined, deep_equal, format_argument, spread_argument


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class OtherPoint(Point):
    pass


def test_undefined_is_singleton() -> None:
    """Creating the sentinel again returns the shared instance."""
    assert Undefined() is UNDEFINED
    assert repr(UNDEFINED) == 'UNDEFINED'
    assert not UNDEFINED
    assert UNDEFINED is not None


@pytest.mark.parametrize('value, expected', (
    pytest.param(1, '1', id='int'),
    pytest.param('text', 'text', id='str'),
    pytest.param([3, 4], '3,4', id='list'),
    pytest.param((1, 'a', None), '1,a,None', id='tuple'),
    pytest.param([], '', id='empty'),
    pytest.param([[1, 2], 3], '1,2,3', id='nested'),
))
def test_format_argument(value: Any, expected: str) -> None:
    """Tuples render joined with a bare comma, scalars as text."""
    assert format_argument(value) == expected


@pytest.mark.parametrize('value, expected', (
    pytest.param(1, (1,), id='scalar'),
    pytest.param('ab', ('ab',), id='str'),
    pytest.param([3, 4], (3, 4), id='list'),
    pytest.param((5,), (5,), id='tuple'),
))
def test_spread_argument(value: Any, expected: tuple) -> None:
    """Lists and tuples spread, anything else is a single argument."""
    assert spread_argument(value) == expected


@pytest.mark.parametrize('actual, expected, result', (
    pytest.param({'a': [1, {'b': 2}]}, {'a': [1, {'b': 2}]}, True, id='nested'),
    pytest.param({'a': 1}, {'a': 1, 'b': 2}, False, id='missing key'),
    pytest.param([1, 2], (1, 2), False, id='list vs tuple'),
    pytest.param([1, 2], [1, 2, 3], False, id='length'),
    pytest.param({1, 2}, {2, 1}, True, id='set'),
    pytest.param(Point(1, 2), Point(1, 2), True, id='objects'),
    pytest.param(Point(1, 2), OtherPoint(1, 2), False, id='object types'),
    pytest.param(Point(1, 2), Point(1, 3), False, id='object attributes'),
    pytest.param(1.5, 1.5, True, id='scalar'),
    pytest.param(None, 0, False, id='none'),
))
def test_deep_equal(actual: Any, expected: Any, result: bool) -> None:
    """Structural equality over containers and plain objects."""
    assert deep_equal(actual, expected) is result


def test_deep_equal_cycles() -> None:
    """Self-referencing structures compare without recursion errors."""
    left: list[Any] = [1]
    left.append(left)
    right: list[Any] = [1]
    right.append(right)

    assert deep_equal(left, right) is True

    other: list[Any] = [2]
    other.append(other)

    assert deep_equal(left, other) is False
