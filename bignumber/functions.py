"""Free functions over BigNumber values.

These use only the public contract of BigNumber (sign, checked digit
access and the ordering operators).
"""

from __future__ import annotations

from bignumber.number import BigNumber


def absolute(value: BigNumber) -> BigNumber:
    """Return |value| as a new value."""
    if value.sign:
        return value.copy()
    return -value


def maximum(first: BigNumber, second: BigNumber) -> BigNumber:
    """Return a copy of the larger value; ``first`` wins a tie."""
    if first < second:
        return second.copy()
    return first.copy()


def minimum(first: BigNumber, second: BigNumber) -> BigNumber:
    """Return a copy of the smaller value; ``second`` wins a tie."""
    if first < second:
        return first.copy()
    return second.copy()


def is_even(value: BigNumber) -> bool:
    return value[0] % 2 == 0


def is_odd(value: BigNumber) -> bool:
    return not is_even(value)


def is_positive(value: BigNumber) -> bool:
    """True for values >= 0 (zero counts as positive)."""
    return value.sign


def is_negative(value: BigNumber) -> bool:
    return not is_positive(value)
