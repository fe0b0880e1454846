"""Tests for values/integer.py."""

import pytest

from gitconf import Integer, IntegerDecodeError, Owned
from gitconf.values import Suffix


class TestIntegerDecode:
    """Tests for Integer.decode."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (b"0", Integer(0)),
            (b"42", Integer(42)),
            (b"-7", Integer(-7)),
            (b"+3", Integer(3)),
            (b"10k", Integer(10, Suffix.KIBI)),
            (b"10K", Integer(10, Suffix.KIBI)),
            (b"2m", Integer(2, Suffix.MEBI)),
            (b"1G", Integer(1, Suffix.GIBI)),
            (b'"5g"', Integer(5, Suffix.GIBI)),
            (b"  12  ", Integer(12)),
        ],
    )
    def test_valid(self, raw: bytes, expected: Integer) -> None:
        """The suffix is kept next to the unmultiplied number."""
        assert Integer.decode(Owned(raw)) == expected

    @pytest.mark.parametrize(
        "raw", [b"", b"abc", b"1.5", b"10x", b"10kb", b"k", b"1 0"]
    )
    def test_malformed(self, raw: bytes) -> None:
        """Anything but digits with one optional suffix is rejected."""
        with pytest.raises(IntegerDecodeError):
            Integer.decode(Owned(raw))

    def test_implicit(self) -> None:
        """A key without a value is not an integer."""
        with pytest.raises(IntegerDecodeError, match="missing value"):
            Integer.decode(None)

    def test_out_of_range(self) -> None:
        """Numbers beyond a signed 64-bit integer are rejected."""
        assert Integer.decode(Owned(b"9223372036854775807")).value == 2**63 - 1
        with pytest.raises(IntegerDecodeError, match="out of range"):
            Integer.decode(Owned(b"9223372036854775808"))


class TestToDecimal:
    """Tests for Integer.to_decimal."""

    def test_multipliers(self) -> None:
        """Suffixes are powers of 1024."""
        assert Integer(3).to_decimal() == 3
        assert Integer(1, Suffix.KIBI).to_decimal() == 1024
        assert Integer(2, Suffix.MEBI).to_decimal() == 2 * 1024**2
        assert Integer(-1, Suffix.GIBI).to_decimal() == -(1024**3)

    def test_overflow(self) -> None:
        """A multiplied value outside 64 bits is an error."""
        value = Integer.decode(Owned(b"9223372036854775807g"))
        with pytest.raises(IntegerDecodeError, match="out of range"):
            value.to_decimal()
