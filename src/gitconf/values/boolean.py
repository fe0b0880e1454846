"""Boolean values.

A key that is present without ``=`` is implicitly true. Explicit tokens are
matched case-insensitively against a ``BooleanTable``; the default table is
git's own vocabulary.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from gitconf.cow import Cow
from gitconf.exceptions import BooleanDecodeError
from gitconf.names import ascii_fold, to_bytes
from gitconf.values.string import normalize


@dataclass(frozen=True)
class BooleanTable:
    """Case-folded tokens accepted as true and false."""

    true_tokens: frozenset[bytes]
    false_tokens: frozenset[bytes]

    def __post_init__(self) -> None:
        overlap = self.true_tokens & self.false_tokens
        if overlap:
            raise ValueError(
                f"Tokens cannot be both true and false: {sorted(overlap)!r}"
            )

    @classmethod
    def from_tokens(
        cls,
        true_tokens: Iterable[str | bytes],
        false_tokens: Iterable[str | bytes],
    ) -> "BooleanTable":
        """Build a table, folding every token to lowercase ASCII."""
        return cls(
            frozenset(ascii_fold(to_bytes(t)) for t in true_tokens),
            frozenset(ascii_fold(to_bytes(t)) for t in false_tokens),
        )

    def lookup(self, token: bytes) -> bool | None:
        """Return the truth value of ``token`` or None if it is not known."""
        folded = ascii_fold(token)
        if folded in self.true_tokens:
            return True
        if folded in self.false_tokens:
            return False
        return None


DEFAULT_TRUE_TOKENS = ("true", "yes", "on", "1")
DEFAULT_FALSE_TOKENS = ("false", "no", "off", "0", "")

DEFAULT_TABLE = BooleanTable.from_tokens(DEFAULT_TRUE_TOKENS, DEFAULT_FALSE_TOKENS)


@dataclass(frozen=True)
class Boolean:
    """A decoded boolean.

    ``token`` is the explicit text that produced the value. It is None only
    for the implicit true of a key without a value, so ``Boolean(True)`` and
    ``Boolean(True, b"true")`` are both truthy but not equal.
    """

    value: bool
    token: Cow | None = None

    @property
    def implicit(self) -> bool:
        return self.token is None

    @property
    def explicit(self) -> bool:
        return self.token is not None

    def __bool__(self) -> bool:
        return self.value

    @classmethod
    def decode(
        cls, raw: Cow | None, table: BooleanTable = DEFAULT_TABLE
    ) -> "Boolean":
        """Decode a raw value.

        Args:
            raw: The raw value, None for a key without ``=``.
            table: The accepted tokens.

        Raises:
            BooleanDecodeError: If the token is in neither half of the table.
        """
        if raw is None:
            return cls(True)
        token = normalize(raw)
        value = table.lookup(token.tobytes())
        if value is None:
            raise BooleanDecodeError(token.tobytes())
        return cls(value, token)
