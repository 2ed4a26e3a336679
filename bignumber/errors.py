"""BigNumber error classes.

Every error carries an ErrorKind tag so callers can match on the failure
without depending on the class hierarchy. Each class also derives from the
closest builtin exception, so ``except ZeroDivisionError`` keeps working.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Tag identifying which precondition an operation violated."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    DIVIDE_BY_ZERO = "divide_by_zero"
    NEGATIVE_EXPONENT = "negative_exponent"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    INVALID_LITERAL = "invalid_literal"


class BigNumberError(Exception):
    """Base error for BigNumber operations."""

    kind: ClassVar[ErrorKind]


class CapacityExceeded(BigNumberError, OverflowError):
    """Value needs more decimal digits than the type's capacity."""

    kind = ErrorKind.CAPACITY_EXCEEDED


class DivideByZero(BigNumberError, ZeroDivisionError):
    """Division or modulo by zero."""

    kind = ErrorKind.DIVIDE_BY_ZERO


class NegativeExponent(BigNumberError, ValueError):
    """Exponent of a power operation is negative."""

    kind = ErrorKind.NEGATIVE_EXPONENT


class IndexOutOfRange(BigNumberError, IndexError):
    """Checked digit access past the significant digits."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE


class InvalidLiteral(BigNumberError, ValueError):
    """Decimal string contains something other than a sign and digits."""

    kind = ErrorKind.INVALID_LITERAL
