"""Tests for canonical encoding, streams and the pydantic field type."""

import io

import pytest
from pydantic import BaseModel, ValidationError

from bignumber import (
    BigNumber,
    CapacityExceeded,
    bignumber_field,
    decode,
    encode,
    hash_bignumber,
    read_bignumber,
    write_bignumber,
)

Amount = bignumber_field(10)


class Invoice(BaseModel):
    total: Amount


class TestEncodeDecode:
    """Tests for the canonical string form."""

    @pytest.mark.parametrize(
        "text,canonical",
        [("0", "0"), ("-0", "0"), ("+15", "15"), ("-00100", "-100"), ("9" * 30, "9" * 30)],
    )
    def test_canonical(self, text, canonical):
        """Decoding then encoding yields the canonical string."""
        value = decode(text, 30)
        assert encode(value) == canonical
        assert encode(decode(encode(value), 30)) == canonical

    def test_decode_capacity(self):
        """decode builds the class for the requested capacity."""
        value = decode("123", 5)
        assert type(value) is BigNumber[5]
        with pytest.raises(CapacityExceeded):
            decode("123456", 5)

    def test_hash(self):
        """Equal values hash equally."""
        assert hash_bignumber(decode("007", 10)) == hash_bignumber(decode("7", 10))
        assert hash_bignumber(decode("7", 10)) == hash("7")


class TestStreams:
    """Tests for text stream helpers."""

    def test_read_tokens(self):
        """Tokens are split on whitespace."""
        stream = io.StringIO("  123\n-45\t+6 ")
        assert int(read_bignumber(stream, 10)) == 123
        assert int(read_bignumber(stream, 10)) == -45
        assert int(read_bignumber(stream, 10)) == 6

    def test_read_at_eof_is_zero(self):
        """An exhausted stream yields zero."""
        assert int(read_bignumber(io.StringIO("   "), 10)) == 0

    def test_read_too_long(self):
        """Stream tokens obey the capacity."""
        with pytest.raises(CapacityExceeded):
            read_bignumber(io.StringIO("123456"), 3)

    def test_write(self):
        """write_bignumber emits the canonical string."""
        stream = io.StringIO()
        write_bignumber(stream, decode("-0042", 10))
        assert stream.getvalue() == "-42"


class TestPydanticField:
    """Tests for bignumber_field()."""

    def test_validate_from_str_and_int(self):
        """Strings and ints become BigNumber[10]."""
        invoice = Invoice(total="-0042")
        assert type(invoice.total) is BigNumber[10]
        assert int(invoice.total) == -42
        assert int(Invoice(total=12345).total) == 12345

    def test_existing_value_passes_through(self):
        """A value of the right class is kept as is."""
        value = BigNumber[10](5)
        assert Invoice(total=value).total is value

    @pytest.mark.parametrize("raw", ["12345678901", "abc", 1.5, None])
    def test_invalid_values(self, raw):
        """Bad values raise ValidationError."""
        with pytest.raises(ValidationError):
            Invoice(total=raw)

    def test_serializes_canonical_string(self):
        """Dumps use the canonical decimal string."""
        invoice = Invoice(total="-0042")
        assert invoice.model_dump() == {"total": "-42"}
        assert invoice.model_dump_json() == '{"total":"-42"}'

    def test_round_trip_json(self):
        """JSON output validates back to an equal value."""
        invoice = Invoice(total=9_999_999_999)
        restored = Invoice.model_validate_json(invoice.model_dump_json())
        assert restored.total == invoice.total

    def test_json_schema(self):
        """The JSON schema describes a decimal string."""
        schema = Invoice.model_json_schema()["properties"]["total"]
        assert schema["type"] == "string"
        assert "10 digits" in schema["description"]
