"""Digit-buffer algorithms on unsigned magnitudes.

A magnitude is a fixed-length bytearray of decimal digits stored least
significant first, plus a count of significant cells (``used``). Cells at
index >= used are ignored and may hold stale digits.

These functions know nothing about signs or overflow policy; callers in
bignumber.number decide what to do with a carry that did not fit.
"""

from __future__ import annotations


def strip(digits: bytearray, used: int) -> int:
    """Return the significant length after dropping leading zero cells.

    Never returns less than 1: zero is a single 0 cell.
    """
    while used > 1 and digits[used - 1] == 0:
        used -= 1
    return used


def is_zero(digits: bytearray, used: int) -> bool:
    """True if the magnitude is zero (assumes it is stripped)."""
    return used == 1 and digits[0] == 0


def compare_magnitudes(a: bytearray, a_used: int, b: bytearray, b_used: int) -> int:
    """Compare two stripped magnitudes.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    if a_used != b_used:
        return -1 if a_used < b_used else 1
    for i in range(a_used - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def add_magnitudes(
    a: bytearray, a_used: int, b: bytearray, b_used: int, capacity: int
) -> tuple[bytearray, int, int]:
    """Schoolbook addition with carry, least significant digit first.

    Args:
        a: First magnitude
        a_used: Significant length of a
        b: Second magnitude (may be the same buffer as a)
        b_used: Significant length of b
        capacity: Length of the result buffer

    Returns:
        (result, used, carry) where carry is the final carry that did not fit
        in ``capacity`` cells (0 when the sum fits)
    """
    result = bytearray(capacity)
    length = max(a_used, b_used)
    carry = 0
    for i in range(length):
        total = carry
        if i < a_used:
            total += a[i]
        if i < b_used:
            total += b[i]
        result[i] = total % 10
        carry = total // 10
    if carry and length < capacity:
        result[length] = carry
        return result, length + 1, 0
    return result, length, carry


def sub_magnitudes(
    big: bytearray, big_used: int, small: bytearray, small_used: int, capacity: int
) -> tuple[bytearray, int]:
    """Subtract ``small`` from ``big`` with borrow.

    Caller guarantees big >= small, so no borrow survives the last digit.

    Returns:
        (result, used) with leading zeros stripped
    """
    result = bytearray(capacity)
    borrow = 0
    for i in range(big_used):
        sub = borrow
        if i < small_used:
            sub += small[i]
        if sub > big[i]:
            result[i] = 10 + big[i] - sub
            borrow = 1
        else:
            result[i] = big[i] - sub
            borrow = 0
    return result, strip(result, big_used)


def mul_digit(a: bytearray, a_used: int, digit: int, capacity: int) -> tuple[bytearray, int, int]:
    """Multiply a magnitude by a single digit (0-9).

    Returns:
        (result, used, carry) where carry is the top digit that did not fit
    """
    result = bytearray(capacity)
    if digit == 0:
        return result, 1, 0
    carry = 0
    for i in range(a_used):
        total = digit * a[i] + carry
        result[i] = total % 10
        carry = total // 10
    if carry and a_used < capacity:
        result[a_used] = carry
        return result, a_used + 1, 0
    return result, a_used, carry


def shift_left(digits: bytearray, used: int, n: int) -> int:
    """Multiply by 10**n in place, discarding digits pushed past capacity.

    Cells move from the highest index down so sources are read before they
    are overwritten.

    Returns:
        The new significant length
    """
    capacity = len(digits)
    if n == 0:
        return used
    if n >= capacity:
        digits[0] = 0
        return 1
    new_used = min(used + n, capacity)
    for i in range(new_used - 1, n - 1, -1):
        digits[i] = digits[i - n]
    for i in range(n):
        digits[i] = 0
    return strip(digits, new_used)


def shift_right(digits: bytearray, used: int, n: int) -> int:
    """Divide by 10**n in place, truncating.

    Returns:
        The new significant length
    """
    if n == 0:
        return used
    if used <= n:
        digits[0] = 0
        return 1
    for i in range(used - n):
        digits[i] = digits[i + n]
    return used - n


def halve(digits: bytearray, used: int) -> tuple[int, int]:
    """Divide by 2 in place, most significant digit first.

    Returns:
        (new used, remainder) where remainder is 0 or 1
    """
    remainder = 0
    for i in range(used - 1, -1, -1):
        current = remainder * 10 + digits[i]
        digits[i] = current // 2
        remainder = current % 2
    return strip(digits, used), remainder
