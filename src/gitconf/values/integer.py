"""Integer values with an optional power-of-1024 size suffix."""

import re
from dataclasses import dataclass
from enum import Enum

from gitconf.cow import Cow
from gitconf.exceptions import IntegerDecodeError
from gitconf.values.string import normalize

_INTEGER = re.compile(rb"([+-]?[0-9]+)([kKmMgG]?)")

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class Suffix(Enum):
    """Size suffix, stored unmultiplied next to the number."""

    KIBI = "k"
    MEBI = "m"
    GIBI = "g"

    @property
    def multiplier(self) -> int:
        return {Suffix.KIBI: 1024, Suffix.MEBI: 1024**2, Suffix.GIBI: 1024**3}[self]


@dataclass(frozen=True)
class Integer:
    """A decoded integer.

    ``Integer.decode(b"10g")`` is ``Integer(10, Suffix.GIBI)``; use
    ``to_decimal()`` to apply the multiplier.
    """

    value: int
    suffix: Suffix | None = None

    @classmethod
    def decode(cls, raw: Cow | None) -> "Integer":
        """Decode ``[+-]digits[kmg]``.

        Raises:
            IntegerDecodeError: On an implicit value, a malformed number, an
                unknown suffix or a number outside the signed 64-bit range.
        """
        if raw is None:
            raise IntegerDecodeError(None, "missing value")
        text = normalize(raw).tobytes()
        match = _INTEGER.fullmatch(text)
        if match is None:
            raise IntegerDecodeError(text)
        value = int(match.group(1))
        if not _I64_MIN <= value <= _I64_MAX:
            raise IntegerDecodeError(text, "out of range")
        suffix = Suffix(match.group(2).decode().lower()) if match.group(2) else None
        return cls(value, suffix)

    def to_decimal(self) -> int:
        """Return the value with the suffix multiplier applied.

        Raises:
            IntegerDecodeError: If the result overflows a signed 64-bit integer.
        """
        if self.suffix is None:
            return self.value
        result = self.value * self.suffix.multiplier
        if not _I64_MIN <= result <= _I64_MAX:
            raise IntegerDecodeError(
                f"{self.value}{self.suffix.value}".encode(), "out of range"
            )
        return result
