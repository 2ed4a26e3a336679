"""Bounded decimal integer type.

This module provides BigNumber, a signed integer stored as a fixed-length
buffer of decimal digits. The digit capacity is part of the type:

- BigNumber[20] is a class whose values hold at most 20 decimal digits
- Division by zero raises DivideByZero
- Results that need more digits than the capacity raise CapacityExceeded
  (or are truncated, depending on the type's BigNumberConfig)

Usage pattern:
    from bignumber import BigNumber

    Big = BigNumber[40]

    a = Big("123456789012345678901234567890")
    b = Big(-987654321)

    product = a * b          # same-capacity result
    quotient = a / b         # truncates toward zero
    remainder = a % b        # takes the sign of a
    power = Big(2) ** 100

Compound assignment (``+=``, ``*=``, ...) mutates the value in place, so
every name bound to that value sees the change. Binary operators always
return a new value.
"""

from __future__ import annotations

import functools
import operator
from typing import ClassVar

import structlog

from bignumber.config import DEFAULT_CONFIG, BigNumberConfig
from bignumber.digits import (
    add_magnitudes,
    compare_magnitudes,
    halve,
    is_zero,
    mul_digit,
    shift_left,
    shift_right,
    strip,
    sub_magnitudes,
)
from bignumber.errors import (
    CapacityExceeded,
    DivideByZero,
    IndexOutOfRange,
    InvalidLiteral,
    NegativeExponent,
)

logger = structlog.get_logger()

# One class per (capacity, config)
_TYPES: dict[tuple[int, BigNumberConfig], type[BigNumber]] = {}


def bignumber_type(capacity: int, config: BigNumberConfig = DEFAULT_CONFIG) -> type[BigNumber]:
    """Return the BigNumber class for a digit capacity.

    Classes are cached, so repeated calls with the same arguments return the
    same class and its values interoperate.

    Args:
        capacity: Maximum number of decimal digits, must be positive
        config: Behavior flags bound to the class

    Returns:
        A BigNumber subclass with ``capacity`` and ``config`` set

    Raises:
        TypeError: If capacity is not an int
        ValueError: If capacity is not positive
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise TypeError(f"BigNumber capacity must be int, got {type(capacity).__name__}")
    if capacity <= 0:
        raise ValueError(f"BigNumber capacity must be positive, got {capacity}")
    key = (capacity, config)
    cls = _TYPES.get(key)
    if cls is None:
        name = f"BigNumber[{capacity}]"
        cls = type(
            name,
            (BigNumber,),
            {
                "__slots__": (),
                "__module__": __name__,
                "__qualname__": name,
                "capacity": capacity,
                "config": config,
            },
        )
        _TYPES[key] = cls
    return cls


def _restore(capacity: int, config: BigNumberConfig, text: str) -> BigNumber:
    """Unpickle helper: rebuild the class, then parse the canonical string."""
    return bignumber_type(capacity, config)(text)


class BigNumber:
    """Signed decimal integer with a fixed digit capacity.

    Values are sign-magnitude: a digit buffer of ``capacity`` cells, least
    significant first, a count of significant cells, and a sign flag.
    Zero is always non-negative and has exactly one significant cell.

    Use ``BigNumber[K]`` (or ``bignumber_type(K, config)``) to get a concrete
    class; BigNumber itself cannot be instantiated.

    Attributes:
        capacity: Maximum number of decimal digits (class-level)
        config: Overflow behavior (class-level)
    """

    capacity: ClassVar[int] = 0
    config: ClassVar[BigNumberConfig] = DEFAULT_CONFIG

    __slots__ = ("_digits", "_used", "_sign")
    _digits: bytearray
    _used: int
    _sign: bool

    def __class_getitem__(cls, capacity: int) -> type[BigNumber]:
        if cls.capacity:
            raise TypeError(f"{cls.__name__} already has a capacity")
        return bignumber_type(capacity)

    def __init__(self, value: int | str | BigNumber = 0) -> None:
        """Create a value from an int, a decimal string or another BigNumber.

        Args:
            value: Integer, decimal string (optional sign, then digits), or a
                BigNumber to copy. A BigNumber of another capacity is
                re-parsed from its canonical string.

        Raises:
            TypeError: If the class has no capacity or value has another type
            CapacityExceeded: If value has more significant digits than capacity
            InvalidLiteral: If a string contains anything but a sign and digits
        """
        if not self.capacity:
            raise TypeError("BigNumber needs a capacity, use BigNumber[K](...)")
        self._digits = bytearray(self.capacity)
        self._used = 1
        self._sign = True
        if isinstance(value, BigNumber):
            if value.capacity == self.capacity:
                self._assign(value)
            else:
                self._parse(str(value))
        elif isinstance(value, str):
            self._parse(value)
        elif isinstance(value, int):
            self._parse(str(int(value)))
        else:
            raise TypeError(f"BigNumber requires int or str, got {type(value).__name__}")

    def _parse(self, text: str) -> None:
        sign = True
        body = text
        if body[:1] in ("+", "-"):
            sign = body[0] == "+"
            body = body[1:]
        if not body:
            return
        if not (body.isascii() and body.isdigit()):
            raise InvalidLiteral(f"Invalid decimal literal: {text!r}")
        significant = body.lstrip("0") or "0"
        if len(significant) > self.capacity:
            raise CapacityExceeded(
                f"Input string contains {len(significant)} digits, "
                f"capacity is {self.capacity}"
            )
        for i, char in enumerate(reversed(significant)):
            self._digits[i] = ord(char) - ord("0")
        self._used = len(significant)
        self._sign = sign or significant == "0"

    # --- Constants and copies ---

    @classmethod
    @functools.cache
    def _constant(cls, value: int) -> BigNumber:
        # Shared per class; never passed as a receiver of in-place ops.
        return cls(value)

    @classmethod
    def zero(cls) -> BigNumber:
        """Create a value equal to 0."""
        return cls()

    @classmethod
    def one(cls) -> BigNumber:
        """Create a value equal to 1."""
        return cls._constant(1).copy()

    def copy(self) -> BigNumber:
        """Return an independent value with its own digit buffer."""
        clone = type(self)()
        clone._assign(self)
        return clone

    def __copy__(self) -> BigNumber:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> BigNumber:
        return self.copy()

    def __reduce__(self) -> tuple[object, tuple[int, BigNumberConfig, str]]:
        return (_restore, (self.capacity, self.config, str(self)))

    # --- Public state ---

    @property
    def used(self) -> int:
        """Number of significant digit cells."""
        return self._used

    @property
    def sign(self) -> bool:
        """True for non-negative values (zero included)."""
        return self._sign

    @property
    def buffer(self) -> bytearray:
        """The live digit buffer, least significant digit first.

        Writes are not validated. Callers must store only 0-9 and must not
        leave a leading zero inside the significant cells.
        """
        return self._digits

    # --- Internal helpers ---

    def _is_zero(self) -> bool:
        return is_zero(self._digits, self._used)

    def _assign(self, other: BigNumber) -> None:
        self._digits[: other._used] = other._digits[: other._used]
        self._used = other._used
        self._sign = other._sign

    def _commit(self, result: bytearray, used: int, sign: bool) -> None:
        """Replace the value, keeping the same buffer object."""
        self._digits[:] = result
        self._used = strip(self._digits, used)
        self._sign = sign or self._is_zero()

    def _overflow(self, operation: str) -> None:
        """Apply the overflow policy for a result that lost high digits."""
        if self.config.reject_on_overflow:
            raise CapacityExceeded(
                f"Result of {operation} exceeds capacity of {self.capacity} digits"
            )
        logger.warning(
            "bignumber_overflow_truncated",
            operation=operation,
            capacity=self.capacity,
        )

    def _coerce(self, other: object) -> BigNumber | None:
        """Convert an operand to this class, or None if unsupported."""
        if isinstance(other, BigNumber):
            return other if other.capacity == self.capacity else None
        if isinstance(other, (int, str)):
            return type(self)(other)
        return None

    def _less(self, other: BigNumber) -> bool:
        """The ordering primitive every comparison derives from."""
        if self._sign != other._sign:
            return not self._sign
        if not self._sign:
            return compare_magnitudes(other._digits, other._used, self._digits, self._used) < 0
        return compare_magnitudes(self._digits, self._used, other._digits, other._used) < 0

    def _magnitude_ge(self, other: BigNumber) -> bool:
        return compare_magnitudes(self._digits, self._used, other._digits, other._used) >= 0

    # --- In-place arithmetic ---

    def _iadd(self, other: BigNumber) -> BigNumber:
        if self._sign != other._sign:
            return self._isub(-other)
        result, used, carry = add_magnitudes(
            self._digits, self._used, other._digits, other._used, self.capacity
        )
        if carry:
            self._overflow("addition")
        self._commit(result, used, self._sign)
        return self

    def _isub(self, other: BigNumber) -> BigNumber:
        if self._sign != other._sign:
            # |self| + |other|, keeping the minuend's sign
            result, used, carry = add_magnitudes(
                self._digits, self._used, other._digits, other._used, self.capacity
            )
            if carry:
                self._overflow("subtraction")
            self._commit(result, used, self._sign)
            return self
        if self._magnitude_ge(other):
            result, used = sub_magnitudes(
                self._digits, self._used, other._digits, other._used, self.capacity
            )
            self._commit(result, used, self._sign)
        else:
            result, used = sub_magnitudes(
                other._digits, other._used, self._digits, self._used, self.capacity
            )
            self._commit(result, used, not self._sign)
        return self

    def _imul(self, other: BigNumber) -> BigNumber:
        negative = self._sign != other._sign
        capacity = self.capacity
        product = bytearray(capacity)
        product_used = 1
        # other may be self: nothing is written to self until the end
        for i in range(other._used - 1, -1, -1):
            if product_used == capacity and not is_zero(product, product_used):
                self._overflow("multiplication")
            product_used = shift_left(product, product_used, 1)
            partial, partial_used, carry = mul_digit(
                self._digits, self._used, other._digits[i], capacity
            )
            if carry:
                self._overflow("multiplication")
            product, product_used, carry = add_magnitudes(
                product, product_used, partial, partial_used, capacity
            )
            if carry:
                self._overflow("multiplication")
            product_used = strip(product, product_used)
        self._commit(product, product_used, not negative)
        return self

    def _quotient(self, other: BigNumber) -> BigNumber:
        """Restoring long division, truncating toward zero.

        Raises:
            DivideByZero: If other is zero
        """
        if other._is_zero():
            raise DivideByZero(f"Division by zero: {self} / 0")
        shift = max(0, self._used - other._used)
        divisor = abs(other)
        divisor._used = shift_left(divisor._digits, divisor._used, shift)
        remainder = abs(self)
        quotient = type(self)()
        for _ in range(shift + 1):
            # The divisor is aligned to the remainder's length, so at most
            # 9 subtractions fit at each position.
            digit = 0
            while remainder._magnitude_ge(divisor):
                remainder._isub(divisor)
                digit += 1
            quotient._used = shift_left(quotient._digits, quotient._used, 1)
            quotient._digits[0] = digit
            quotient._used = strip(quotient._digits, quotient._used)
            divisor._used = shift_right(divisor._digits, divisor._used, 1)
        quotient._sign = self._sign == other._sign or quotient._is_zero()
        return quotient

    def _idiv(self, other: BigNumber) -> BigNumber:
        quotient = self._quotient(other)
        self._assign(quotient)
        return self

    def _imod(self, other: BigNumber) -> BigNumber:
        quotient = self._quotient(other)
        quotient._imul(other)
        return self._isub(quotient)

    def _ipow(self, exponent: BigNumber) -> BigNumber:
        """Exponentiation by squaring, most significant exponent bit first.

        Raises:
            NegativeExponent: If exponent is negative
        """
        if not exponent._sign:
            raise NegativeExponent(f"Exponent is negative: {exponent}")
        if exponent._is_zero():
            self._assign(self._constant(1))
            return self
        even = exponent._digits[0] % 2 == 0
        bits: list[int] = []
        remaining = exponent.copy()
        while not remaining._is_zero():
            remaining._used, bit = halve(remaining._digits, remaining._used)
            bits.append(bit)
        base = self.copy()
        result = self.copy()
        for bit in reversed(bits[:-1]):
            result._imul(result)
            if bit:
                result._imul(base)
        if even:
            result._sign = True
        self._assign(result)
        return self

    # --- Arithmetic operators ---

    def __add__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.copy()._iadd(operand)

    def __radd__(self, other: int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.copy()._iadd(self)

    def __iadd__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._iadd(operand)

    def __sub__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.copy()._isub(operand)

    def __rsub__(self, other: int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.copy()._isub(self)

    def __isub__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._isub(operand)

    def __mul__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.copy()._imul(operand)

    def __rmul__(self, other: int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.copy()._imul(self)

    def __imul__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._imul(operand)

    def __truediv__(self, other: BigNumber | int | str) -> BigNumber:
        """Integer division truncating toward zero.

        Raises:
            DivideByZero: If other is zero
        """
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._quotient(operand)

    def __rtruediv__(self, other: int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand._quotient(self)

    def __itruediv__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._idiv(operand)

    def __mod__(self, other: BigNumber | int | str) -> BigNumber:
        """Remainder of truncating division: ``a - (a / b) * b``.

        The result has the sign of the dividend, unlike Python's int.

        Raises:
            DivideByZero: If other is zero
        """
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self.copy()._imod(operand)

    def __rmod__(self, other: int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand.copy()._imod(self)

    def __imod__(self, other: BigNumber | int | str) -> BigNumber:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._imod(operand)

    def __divmod__(self, other: BigNumber | int | str) -> tuple[BigNumber, BigNumber]:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        quotient = self._quotient(operand)
        return quotient, self - quotient * operand

    def __rdivmod__(self, other: int | str) -> tuple[BigNumber, BigNumber]:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return divmod(operand, self)

    def __pow__(
        self, other: BigNumber | int | str, modulo: BigNumber | int | str | None = None
    ) -> BigNumber:
        """Raise to a non-negative integer power.

        Raises:
            NegativeExponent: If other is negative
            DivideByZero: If modulo is zero
        """
        exponent = self._coerce(other)
        if exponent is None:
            return NotImplemented
        result = self.copy()._ipow(exponent)
        if modulo is not None:
            divisor = self._coerce(modulo)
            if divisor is None:
                return NotImplemented
            result._imod(divisor)
        return result

    def __rpow__(self, other: int | str) -> BigNumber:
        base = self._coerce(other)
        if base is None:
            return NotImplemented
        return base.copy()._ipow(self)

    def __ipow__(self, other: BigNumber | int | str) -> BigNumber:
        exponent = self._coerce(other)
        if exponent is None:
            return NotImplemented
        return self._ipow(exponent)

    # ``^`` is exponentiation for this type, not bitwise xor
    __xor__ = __pow__
    __rxor__ = __rpow__
    __ixor__ = __ipow__

    def __lshift__(self, n: int) -> BigNumber:
        return self.copy().__ilshift__(n)

    def __ilshift__(self, n: int) -> BigNumber:
        """Multiply by 10**n in place.

        Digits pushed past the capacity are discarded; ``n >= capacity``
        gives zero.
        """
        count = operator.index(n)
        if count < 0:
            raise ValueError(f"negative shift count: {count}")
        self._used = shift_left(self._digits, self._used, count)
        self._sign = self._sign or self._is_zero()
        return self

    def __rshift__(self, n: int) -> BigNumber:
        return self.copy().__irshift__(n)

    def __irshift__(self, n: int) -> BigNumber:
        """Divide by 10**n in place, truncating toward zero."""
        count = operator.index(n)
        if count < 0:
            raise ValueError(f"negative shift count: {count}")
        self._used = shift_right(self._digits, self._used, count)
        self._sign = self._sign or self._is_zero()
        return self

    def __neg__(self) -> BigNumber:
        """Negate the value. Zero stays non-negative."""
        result = self.copy()
        if not result._is_zero():
            result._sign = not result._sign
        return result

    def __pos__(self) -> BigNumber:
        return self.copy()

    def __abs__(self) -> BigNumber:
        result = self.copy()
        result._sign = True
        return result

    # --- Increment / decrement ---

    def increment(self) -> BigNumber:
        """Add one in place and return self (prefix ``++``)."""
        return self._iadd(self._constant(1))

    def decrement(self) -> BigNumber:
        """Subtract one in place and return self (prefix ``--``)."""
        return self._isub(self._constant(1))

    def post_increment(self) -> BigNumber:
        """Add one in place and return the previous value (postfix ``++``)."""
        previous = self.copy()
        self.increment()
        return previous

    def post_decrement(self) -> BigNumber:
        """Subtract one in place and return the previous value (postfix ``--``)."""
        previous = self.copy()
        self.decrement()
        return previous

    # --- Comparison operations ---

    def __lt__(self, other: BigNumber | int | str) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return self._less(operand)

    def __gt__(self, other: BigNumber | int | str) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return operand._less(self)

    def __le__(self, other: BigNumber | int | str) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return not operand._less(self)

    def __ge__(self, other: BigNumber | int | str) -> bool:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return not self._less(operand)

    def __eq__(self, other: object) -> bool:
        """Value equality with another BigNumber of the same capacity.

        int and str operands are not converted, so equality agrees with
        __hash__, which hashes the canonical string.
        """
        if not isinstance(other, BigNumber) or other.capacity != self.capacity:
            return NotImplemented
        return not self._less(other) and not other._less(self)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __hash__(self) -> int:
        """Hash of the canonical decimal string."""
        return hash(str(self))

    # --- Indexing ---

    def __getitem__(self, index: int) -> int:
        """Checked digit read; index 0 is the units digit.

        Raises:
            IndexOutOfRange: If index is not below the significant length
        """
        position = operator.index(index)
        if not 0 <= position < self._used:
            raise IndexOutOfRange(
                f"Index {position} is out of range, largest index is {self._used - 1}"
            )
        return self._digits[position]

    def __setitem__(self, index: int, digit: int) -> None:
        """Checked digit write.

        Raises:
            IndexOutOfRange: If index is not below the significant length
            ValueError: If digit is not in 0-9
        """
        position = operator.index(index)
        if not 0 <= position < self._used:
            raise IndexOutOfRange(
                f"Index {position} is out of range, largest index is {self._used - 1}"
            )
        if not 0 <= digit <= 9:
            raise ValueError(f"Digit must be in 0-9, got {digit}")
        self._digits[position] = digit

    def __len__(self) -> int:
        return self._used

    # --- Conversion ---

    def __str__(self) -> str:
        text = "".join(map(str, reversed(self._digits[: self._used])))
        return text if self._sign else "-" + text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __int__(self) -> int:
        value = 0
        for i in range(self._used - 1, -1, -1):
            value = value * 10 + self._digits[i]
        return value if self._sign else -value

    def __index__(self) -> int:
        return int(self)

    def __bool__(self) -> bool:
        """True if non-zero."""
        return not self._is_zero()

    # --- Named operations ---

    def checked_div(self, other: BigNumber | int | str) -> BigNumber | None:
        """Divide, returning None on zero instead of raising.

        Unlike ``/``, this returns None instead of raising DivideByZero.
        """
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"Cannot divide {type(self).__name__} by {type(other).__name__}")
        if operand._is_zero():
            return None
        return self._quotient(operand)

    def checked_mod(self, other: BigNumber | int | str) -> BigNumber | None:
        """Modulo, returning None on zero instead of raising."""
        operand = self._coerce(other)
        if operand is None:
            raise TypeError(f"Cannot divide {type(self).__name__} by {type(other).__name__}")
        if operand._is_zero():
            return None
        return self.copy()._imod(operand)

    def checked_pow(self, other: BigNumber | int | str) -> BigNumber | None:
        """Power, returning None for a negative exponent instead of raising."""
        exponent = self._coerce(other)
        if exponent is None:
            raise TypeError(f"Cannot raise {type(self).__name__} to {type(other).__name__}")
        if not exponent._sign:
            return None
        return self.copy()._ipow(exponent)
