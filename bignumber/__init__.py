"""Bounded decimal big integers.

This package provides BigNumber[K], a signed integer type holding at most K
decimal digits in a fixed-length digit buffer:
- Exact +, -, *, truncating / and %, ** (also spelled ^), decimal shifts
- Errors tagged with ErrorKind: CapacityExceeded, DivideByZero,
  NegativeExponent, IndexOutOfRange, InvalidLiteral
- Canonical decimal encoding, hashing, stream and pydantic helpers
"""

from bignumber.codec import (
    bignumber_field,
    decode,
    encode,
    hash_bignumber,
    read_bignumber,
    write_bignumber,
)
from bignumber.config import DEFAULT_CONFIG, BigNumberConfig
from bignumber.errors import (
    BigNumberError,
    CapacityExceeded,
    DivideByZero,
    ErrorKind,
    IndexOutOfRange,
    InvalidLiteral,
    NegativeExponent,
)
from bignumber.functions import (
    absolute,
    is_even,
    is_negative,
    is_odd,
    is_positive,
    maximum,
    minimum,
)
from bignumber.number import BigNumber, bignumber_type

__version__ = "0.1.0"
__all__ = [
    # Types
    "BigNumber",
    "bignumber_type",
    # Configuration
    "BigNumberConfig",
    "DEFAULT_CONFIG",
    # Errors
    "BigNumberError",
    "CapacityExceeded",
    "DivideByZero",
    "ErrorKind",
    "IndexOutOfRange",
    "InvalidLiteral",
    "NegativeExponent",
    # Functions
    "absolute",
    "maximum",
    "minimum",
    "is_even",
    "is_odd",
    "is_positive",
    "is_negative",
    # Codec
    "bignumber_field",
    "decode",
    "encode",
    "hash_bignumber",
    "read_bignumber",
    "write_bignumber",
    "__version__",
]
