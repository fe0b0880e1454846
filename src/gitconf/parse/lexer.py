"""Lexer turning raw config bytes into structural events.

The lexer only knows about the shape of the format. Values are emitted raw,
with quotes and escapes intact, as zero-copy views into the input buffer.
Unquoting and type decoding happen later, at lookup time.
"""

import logging
from collections.abc import Iterator

from gitconf.cow import Borrowed, Owned
from gitconf.exceptions import ParseError
from gitconf.parse.events import (
    Comment,
    Event,
    KeyValueSeparator,
    Newline,
    SectionHeader,
    SectionKey,
    Value,
    ValueDone,
    ValueNotDone,
    Whitespace,
)

logger = logging.getLogger(__name__)

_BOM = b"\xef\xbb\xbf"
_WHITESPACE = frozenset(b" \t")
_COMMENT_CHARS = frozenset(b"#;")
_LETTERS = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset(b"0123456789")
_KEY_CHARS = _LETTERS | _DIGITS | frozenset(b"-")
_SECTION_NAME_CHARS = _KEY_CHARS | frozenset(b".")

_NL = ord("\n")
_CR = ord("\r")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_OPEN_BRACKET = ord("[")
_CLOSE_BRACKET = ord("]")
_EQUALS = ord("=")


class Lexer:
    """Produce events from a fully buffered config file.

    Args:
        data: The raw bytes. The lexer keeps a reference; every text field of
            the produced events is a ``memoryview`` slice of it.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self.buffer = data if isinstance(data, bytes) else bytes(data)
        self._view = memoryview(self.buffer)
        self._line = 1
        self._pos = 0

    def events(self) -> Iterator[Event]:
        """Yield events in input order.

        Raises:
            ParseError: On any structural problem. The error carries the
                1-based line number.
        """
        data = self.buffer
        end = len(data)
        pos = len(_BOM) if data.startswith(_BOM) else 0
        self._line = 1
        count = 0
        while pos < end:
            c = data[pos]
            if c in _WHITESPACE:
                step = self._whitespace(pos)
            elif c == _NL or c == _CR:
                step = self._newline(pos)
            elif c in _COMMENT_CHARS:
                step = self._comment(pos)
            elif c == _OPEN_BRACKET:
                step = self._section_header(pos)
            elif c in _LETTERS:
                step = self._key(pos)
            else:
                raise ParseError(f"Unexpected character {chr(c)!r}", self._line)
            for event in step:
                count += 1
                yield event
            pos = self._pos
        logger.debug("Lexed %d bytes into %d events", end, count)

    def _borrow(self, start: int, end: int) -> Borrowed:
        return Borrowed(self._view[start:end])

    def _newline_length(self, pos: int) -> int:
        """Length of the line terminator at ``pos``, 0 if there is none."""
        data = self.buffer
        if pos >= len(data):
            return 0
        if data[pos] == _NL:
            return 1
        if data[pos] == _CR and pos + 1 < len(data) and data[pos + 1] == _NL:
            return 2
        return 0

    def _whitespace(self, pos: int) -> Iterator[Event]:
        data = self.buffer
        i = pos
        while i < len(data) and data[i] in _WHITESPACE:
            i += 1
        yield Whitespace(self._borrow(pos, i))
        self._pos = i

    def _newline(self, pos: int) -> Iterator[Event]:
        length = self._newline_length(pos)
        if not length:
            raise ParseError("Carriage return without line feed", self._line)
        yield Newline(self._borrow(pos, pos + length))
        self._line += 1
        self._pos = pos + length

    def _comment(self, pos: int) -> Iterator[Event]:
        data = self.buffer
        i = pos + 1
        while i < len(data) and not self._newline_length(i):
            i += 1
        yield Comment(tag=data[pos : pos + 1], text=self._borrow(pos + 1, i))
        self._pos = i

    def _section_header(self, pos: int) -> Iterator[Event]:
        data = self.buffer
        end = len(data)
        name_start = i = pos + 1
        while i < end and data[i] in _SECTION_NAME_CHARS:
            i += 1
        name_end = i
        if name_end == name_start:
            raise ParseError("Empty or invalid section name", self._line)
        if i >= end:
            raise ParseError("Unterminated section header", self._line)

        if data[i] == _CLOSE_BRACKET:
            dot = data.find(b".", name_start, name_end)
            if dot == -1:
                yield SectionHeader(self._borrow(name_start, name_end))
            else:
                if dot == name_start or dot == name_end - 1:
                    raise ParseError("Invalid legacy subsection", self._line)
                yield SectionHeader(
                    self._borrow(name_start, dot),
                    self._borrow(dot + 1, name_end),
                    separator=".",
                )
            self._pos = i + 1
            return

        if data[i] not in _WHITESPACE:
            raise ParseError(
                f"Invalid character {chr(data[i])!r} in section name", self._line
            )
        while i < end and data[i] in _WHITESPACE:
            i += 1
        if i >= end or data[i] != _QUOTE:
            raise ParseError("Expected a quoted subsection", self._line)

        sub_start = i = i + 1
        escaped = False
        while True:
            if i >= end or data[i] == _NL:
                raise ParseError("Unterminated subsection", self._line)
            if data[i] == _BACKSLASH:
                if i + 1 >= end or data[i + 1] == _NL:
                    raise ParseError("Unterminated subsection", self._line)
                escaped = True
                i += 2
                continue
            if data[i] == _QUOTE:
                break
            i += 1
        sub_end = i
        i += 1
        if i >= end or data[i] != _CLOSE_BRACKET:
            raise ParseError("Expected ']' after subsection", self._line)

        if escaped:
            subsection = Owned(_unescape_subsection(data[sub_start:sub_end]))
        else:
            subsection = self._borrow(sub_start, sub_end)
        yield SectionHeader(
            self._borrow(name_start, name_end), subsection, separator=" "
        )
        self._pos = i + 1

    def _key(self, pos: int) -> Iterator[Event]:
        data = self.buffer
        end = len(data)
        i = pos + 1
        while i < end and data[i] in _KEY_CHARS:
            i += 1
        yield SectionKey(self._borrow(pos, i))

        ws_start = i
        while i < end and data[i] in _WHITESPACE:
            i += 1
        if i > ws_start:
            yield Whitespace(self._borrow(ws_start, i))

        if i >= end or self._newline_length(i) or data[i] in _COMMENT_CHARS:
            self._pos = i
            return
        if data[i] != _EQUALS:
            raise ParseError(f"Invalid character {chr(data[i])!r} in key", self._line)
        yield KeyValueSeparator()
        i += 1

        ws_start = i
        while i < end and data[i] in _WHITESPACE:
            i += 1
        if i > ws_start:
            yield Whitespace(self._borrow(ws_start, i))
        yield from self._value(i)

    def _value(self, pos: int) -> Iterator[Event]:
        data = self.buffer
        end = len(data)
        start = i = pos
        in_quote = False
        continued = False
        while i < end:
            c = data[i]
            if self._newline_length(i):
                if in_quote:
                    raise ParseError("Newline inside a quoted value", self._line)
                break
            if c == _BACKSLASH:
                length = self._newline_length(i + 1)
                if length:
                    yield ValueNotDone(self._borrow(start, i))
                    yield Newline(self._borrow(i + 1, i + 1 + length))
                    self._line += 1
                    start = i = i + 1 + length
                    continued = True
                    continue
                i += 2
                continue
            if c == _QUOTE:
                in_quote = not in_quote
            elif c in _COMMENT_CHARS and not in_quote:
                break
            i += 1
        if in_quote:
            raise ParseError("Unterminated quote in value", self._line)

        stop = min(i, end)
        trimmed = stop
        while trimmed > start and data[trimmed - 1] in _WHITESPACE:
            trimmed -= 1
        text = self._borrow(start, trimmed)
        yield ValueDone(text) if continued else Value(text)
        if trimmed < stop:
            yield Whitespace(self._borrow(trimmed, stop))
        self._pos = stop


def _unescape_subsection(raw: bytes) -> bytes:
    """Drop the backslash in front of every escaped subsection byte."""
    out = bytearray()
    i = 0
    while i < len(raw):
        if raw[i] == _BACKSLASH:
            i += 1
        out.append(raw[i])
        i += 1
    return bytes(out)


def parse_events(data: bytes | bytearray | memoryview) -> list[Event]:
    """Lex ``data`` completely and return the list of events."""
    return list(Lexer(data).events())
