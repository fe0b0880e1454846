"""String values.

Raw values keep their quotes and escapes until they are looked up. Normalizing
follows git's value rules:

- unquoted whitespace at either end is dropped,
- every unquoted whitespace byte inside the value becomes a single space,
- double quotes are removed and quoted and unquoted runs are concatenated,
- ``\\\\``, ``\\"``, ``\\n``, ``\\t`` and ``\\b`` are resolved, a backslash
  before a line break joins the lines.
"""

from dataclasses import dataclass

from gitconf.cow import Cow, Owned
from gitconf.exceptions import StringDecodeError

_ESCAPES = {
    ord("\\"): ord("\\"),
    ord('"'): ord('"'),
    ord("n"): ord("\n"),
    ord("t"): ord("\t"),
    ord("b"): ord("\b"),
}
_WHITESPACE = frozenset(b" \t")
_COMMENT_CHARS = frozenset(b"#;")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_SPACE = ord(" ")

# Bytes that force a materialized copy when they appear unquoted.
_NEEDS_COPY = frozenset(b'"\\\t#;')


def normalize(raw: Cow) -> Cow:
    """Unquote and unescape a raw value.

    The result is a narrower view of ``raw`` when only surrounding whitespace
    or one pair of surrounding quotes has to go, otherwise an ``Owned`` copy.

    Raises:
        StringDecodeError: On an unknown escape, a trailing backslash or an
            unbalanced quote.
    """
    data = raw.tobytes()
    start, end = 0, len(data)
    while start < end and data[start] in _WHITESPACE:
        start += 1
    while end > start and data[end - 1] in _WHITESPACE:
        end -= 1

    inner = data[start:end]
    if not _NEEDS_COPY.intersection(inner):
        return raw if (start, end) == (0, len(data)) else raw.slice(start, end)
    if (
        len(inner) >= 2
        and inner[0] == _QUOTE
        and inner[-1] == _QUOTE
        and b'"' not in inner[1:-1]
        and b"\\" not in inner[1:-1]
    ):
        return raw.slice(start + 1, end - 1)
    return Owned(_unquote(data, start, end))


def _unquote(data: bytes, start: int, end: int) -> bytes:
    out = bytearray()
    pending_spaces = 0
    in_quote = False
    i = start
    while i < end:
        c = data[i]
        if c in _WHITESPACE and not in_quote:
            if out:
                pending_spaces += 1
            i += 1
            continue
        if c in _COMMENT_CHARS and not in_quote:
            break
        out.extend(b" " * pending_spaces)
        pending_spaces = 0
        if c == _BACKSLASH:
            i += 1
            if i >= end:
                raise StringDecodeError(data, "trailing backslash")
            escaped = data[i]
            if escaped == ord("\n"):
                i += 1
                continue
            if escaped == ord("\r") and data[i + 1 : i + 2] == b"\n":
                i += 2
                continue
            if escaped not in _ESCAPES:
                raise StringDecodeError(
                    data, f"unknown escape sequence \\{chr(escaped)}"
                )
            out.append(_ESCAPES[escaped])
        elif c == _QUOTE:
            in_quote = not in_quote
        else:
            out.append(c)
        i += 1
    if in_quote:
        raise StringDecodeError(data, "missing end quote")
    return bytes(out)


@dataclass(frozen=True)
class String:
    """A decoded string value."""

    value: Cow

    @classmethod
    def decode(cls, raw: Cow | None) -> "String":
        """Decode a raw value; an implicit value is the empty string."""
        if raw is None:
            return cls(Owned(b""))
        return cls(normalize(raw))

    def __str__(self) -> str:
        return self.value.decode(errors="replace")
