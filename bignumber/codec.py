"""Canonical decimal encoding for BigNumber values.

The canonical form is an optional ``-`` (negatives only) followed by the
digits, most significant first, with no leading zeros. Hashing, text
streams and pydantic models all go through this form.
"""

from __future__ import annotations

from typing import Annotated, Any, TextIO

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from bignumber.config import DEFAULT_CONFIG, BigNumberConfig
from bignumber.errors import BigNumberError
from bignumber.number import BigNumber, bignumber_type


def encode(value: BigNumber) -> str:
    """Render the canonical decimal string (no ``+``, no ``-0``)."""
    return str(value)


def decode(text: str, capacity: int, config: BigNumberConfig = DEFAULT_CONFIG) -> BigNumber:
    """Parse a decimal string into a BigNumber of the given capacity.

    Raises:
        CapacityExceeded: If text has more significant digits than capacity
        InvalidLiteral: If text is not an optional sign followed by digits
    """
    return bignumber_type(capacity, config)(text)


def hash_bignumber(value: BigNumber) -> int:
    """Hash of the canonical string; equal values hash equally."""
    return hash(encode(value))


def read_bignumber(
    stream: TextIO, capacity: int, config: BigNumberConfig = DEFAULT_CONFIG
) -> BigNumber:
    """Read one whitespace-delimited token from a text stream and decode it.

    Leading whitespace is skipped. At end of stream the token is empty, which
    decodes to zero.
    """
    char = stream.read(1)
    while char and char.isspace():
        char = stream.read(1)
    token = []
    while char and not char.isspace():
        token.append(char)
        char = stream.read(1)
    return decode("".join(token), capacity, config)


def write_bignumber(stream: TextIO, value: BigNumber) -> None:
    """Write the canonical string of value to a text stream."""
    stream.write(encode(value))


class _BigNumberPydanticAnnotation:
    """Pydantic adapter validating into one BigNumber class.

    Accepts BigNumber values of the same capacity, ints and decimal strings;
    serializes to the canonical string.
    """

    def __init__(self, capacity: int, config: BigNumberConfig) -> None:
        self.cls = bignumber_type(capacity, config)

    def validate(self, value: Any) -> BigNumber:
        if isinstance(value, BigNumber) and value.capacity == self.cls.capacity:
            return value
        if not isinstance(value, (int, str)):
            raise ValueError(f"BigNumber must be string or int, got {type(value).__name__}")
        try:
            return self.cls(value)
        except BigNumberError as err:
            raise ValueError(f"Invalid {self.cls.__name__}: {err}") from err

    def __get_pydantic_core_schema__(
        self, _source_type: Any, _handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                encode, return_schema=core_schema.str_schema()
            ),
        )

    def __get_pydantic_json_schema__(
        self, _core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_schema = handler(core_schema.str_schema(pattern=r"^-?[0-9]+$"))
        json_schema["description"] = (
            f"Signed decimal integer with at most {self.cls.capacity} digits"
        )
        return json_schema


def bignumber_field(capacity: int, config: BigNumberConfig = DEFAULT_CONFIG) -> Any:
    """Build a pydantic field type for BigNumber[capacity].

    Usage:
        class Invoice(BaseModel):
            total: bignumber_field(40)

    Values are validated from ints or decimal strings and serialized as the
    canonical decimal string.
    """
    return Annotated[BigNumber, _BigNumberPydanticAnnotation(capacity, config)]
