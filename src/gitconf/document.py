"""Config documents: building from events and looking values up.

A document is an ordered list of sections exactly as they were declared.
Sections that repeat the same name and subsection are kept apart; lookups
treat them as one logical section, newest first, falling through to older
repetitions when a newer one lacks the key.
"""

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NoReturn, TypeVar

from gitconf.cow import Cow, Owned
from gitconf.exceptions import LookupNotFound, ParseError
from gitconf.names import ascii_eq, ascii_fold, to_bytes
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
from gitconf.parse.lexer import Lexer
from gitconf.values import (
    DEFAULT_TABLE,
    VALUE_KINDS,
    Boolean,
    BooleanTable,
    Color,
    Integer,
    Path,
    String,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", Boolean, Integer, Color, String, Path)

_LETTERS = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_KEY_CHARS = _LETTERS | frozenset(b"0123456789-")
_SECTION_NAME_CHARS = _KEY_CHARS | frozenset(b".")


@dataclass(frozen=True)
class Entry:
    """One key declaration inside a section.

    ``fragments`` holds the raw value pieces split by line continuations, or
    None when the key was declared without ``=`` (implicitly true).
    """

    key: Cow
    fragments: tuple[Cow, ...] | None
    position: int

    @property
    def implicit(self) -> bool:
        return self.fragments is None

    @property
    def value(self) -> Cow | None:
        """The raw value with continuation lines joined.

        A single fragment is returned as is; joining several makes a copy.
        """
        if self.fragments is None:
            return None
        if len(self.fragments) == 1:
            return self.fragments[0]
        return Owned(b"".join(fragment.tobytes() for fragment in self.fragments))

    def matches(self, key: bytes) -> bool:
        return ascii_eq(self.key.tobytes(), key)


@dataclass(frozen=True)
class Section:
    """A section header and the entries declared under it."""

    name: Cow
    subsection: Cow | None
    entries: tuple[Entry, ...] = ()

    @property
    def lookup_key(self) -> tuple[bytes, bytes | None]:
        """Identity used for grouping: folded name, exact subsection."""
        subsection = None if self.subsection is None else self.subsection.tobytes()
        return ascii_fold(self.name.tobytes()), subsection

    def matches(self, name: bytes, subsection: bytes | None) -> bool:
        return self.lookup_key == (ascii_fold(name), subsection)


def _valid(name: bytes, first: frozenset[int], rest: frozenset[int]) -> bool:
    return bool(name) and name[0] in first and all(c in rest for c in name[1:])


class _Builder:
    """Group a stream of events into sections and entries."""

    def __init__(self) -> None:
        self.sections: list[Section] = []
        self._header: SectionHeader | None = None
        self._entries: list[Entry] = []
        self._key: Cow | None = None
        self._separator = False
        self._fragments: list[Cow] | None = None
        self._position = 0
        self._line = 1

    def feed(self, event: Event) -> None:
        if self._fragments is not None and not isinstance(
            event, (ValueNotDone, ValueDone, Newline)
        ):
            self._fail("Continued value is missing its final line")

        if isinstance(event, SectionHeader):
            self._finish_entry()
            self._finish_section()
            name = event.name.tobytes()
            if not _valid(name, _SECTION_NAME_CHARS, _SECTION_NAME_CHARS):
                self._fail(f"Invalid section name {name!r}")
            self._header = event
        elif isinstance(event, SectionKey):
            self._finish_entry()
            if self._header is None:
                self._fail("Key outside of any section")
            if not _valid(event.name.tobytes(), _LETTERS, _KEY_CHARS):
                self._fail(f"Invalid key {event.name.tobytes()!r}")
            self._key = event.name
        elif isinstance(event, KeyValueSeparator):
            if self._key is None or self._separator:
                self._fail("Unexpected '='")
            self._separator = True
        elif isinstance(event, Value):
            self._expect_value()
            self._add_entry((event.text,))
        elif isinstance(event, ValueNotDone):
            if self._fragments is None:
                self._expect_value()
                self._fragments = []
            self._fragments.append(event.text)
        elif isinstance(event, ValueDone):
            if self._fragments is None:
                self._fail("Final value line without a continued value")
            self._fragments.append(event.text)
            fragments, self._fragments = tuple(self._fragments), None
            self._add_entry(fragments)
        elif isinstance(event, Newline):
            if self._fragments is None:
                self._finish_entry()
            self._line += 1
        elif isinstance(event, Comment):
            self._finish_entry()
        elif not isinstance(event, Whitespace):
            raise TypeError(f"Not a config event: {event!r}")

    def finish(self) -> list[Section]:
        if self._fragments is not None:
            self._fail("Continued value is missing its final line")
        self._finish_entry()
        self._finish_section()
        return self.sections

    def _fail(self, message: str) -> NoReturn:
        raise ParseError(message, self._line)

    def _expect_value(self) -> None:
        if self._key is None or not self._separator:
            self._fail("Value without a key")

    def _add_entry(self, fragments: tuple[Cow, ...] | None) -> None:
        assert self._key is not None
        self._entries.append(Entry(self._key, fragments, self._position))
        self._position += 1
        self._key = None
        self._separator = False

    def _finish_entry(self) -> None:
        """Close a pending key: bare keys are implicit, ``key =`` is empty."""
        if self._key is None:
            return
        self._add_entry((Owned(b""),) if self._separator else None)

    def _finish_section(self) -> None:
        if self._header is None:
            return
        self.sections.append(
            Section(self._header.name, self._header.subsection, tuple(self._entries))
        )
        self._header = None
        self._entries = []


def _display(name: str | bytes) -> str:
    if isinstance(name, str):
        return name
    return name.decode("utf-8", errors="replace")


def _not_found(
    section: str | bytes, subsection: str | bytes | None, key: str | bytes
) -> LookupNotFound:
    return LookupNotFound(
        _display(section),
        None if subsection is None else _display(subsection),
        _display(key),
    )


class Document:
    """An immutable, ordered config document.

    Args:
        sections: Sections in declaration order.
        buffers: The byte buffers borrowed values point into.
        boolean_table: Tokens accepted when decoding booleans.
    """

    def __init__(
        self,
        sections: Iterable[Section] = (),
        buffers: tuple[bytes, ...] = (),
        boolean_table: BooleanTable = DEFAULT_TABLE,
    ) -> None:
        self._sections = tuple(sections)
        self.buffers = buffers
        self.boolean_table = boolean_table
        self._index: dict[tuple[bytes, bytes | None], list[Section]] = {}
        for section in self._sections:
            self._index.setdefault(section.lookup_key, []).append(section)

    @classmethod
    def from_events(
        cls,
        events: Iterable[Event],
        buffer: bytes = b"",
        *,
        boolean_table: BooleanTable = DEFAULT_TABLE,
    ) -> "Document":
        """Build a document from a pre-lexed event sequence.

        Args:
            events: Events in input order.
            buffer: The buffer the events borrow from, kept alive by the
                document.
            boolean_table: Tokens accepted when decoding booleans.

        Raises:
            ParseError: If the events do not form a valid document.
        """
        builder = _Builder()
        for event in events:
            builder.feed(event)
        sections = builder.finish()
        logger.debug("Built document with %d sections", len(sections))
        return cls(sections, (buffer,) if buffer else (), boolean_table)

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        *,
        boolean_table: BooleanTable = DEFAULT_TABLE,
    ) -> "Document":
        """Parse a document from an in-memory buffer.

        Raises:
            ParseError: If ``data`` is not a valid config document.
        """
        lexer = Lexer(data)
        return cls.from_events(
            lexer.events(), lexer.buffer, boolean_table=boolean_table
        )

    @classmethod
    def from_str(cls, text: str, **kwargs) -> "Document":
        """Parse a document from text, encoded as UTF-8."""
        return cls.from_bytes(text.encode("utf-8"), **kwargs)

    @classmethod
    def concat(cls, *documents: "Document") -> "Document":
        """Stack documents; lookups see later documents first.

        The boolean table of the last document is used.
        """
        sections: list[Section] = []
        buffers: list[bytes] = []
        offset = 0
        for document in documents:
            for section in document:
                entries = tuple(
                    dataclasses.replace(entry, position=entry.position + offset)
                    for entry in section.entries
                )
                sections.append(dataclasses.replace(section, entries=entries))
            offset += sum(len(section.entries) for section in document)
            buffers.extend(document.buffers)
        table = documents[-1].boolean_table if documents else DEFAULT_TABLE
        return cls(sections, tuple(buffers), table)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"<Document with {len(self._sections)} sections>"

    def sections(self) -> tuple[Section, ...]:
        """All sections in declaration order."""
        return self._sections

    def sections_by_name(self, name: str | bytes) -> list[Section]:
        """All sections with the given name, any subsection, in order."""
        folded = ascii_fold(to_bytes(name))
        return [s for s in self._sections if s.lookup_key[0] == folded]

    def _matching_sections(
        self, section: str | bytes, subsection: str | bytes | None
    ) -> list[Section]:
        key = (
            ascii_fold(to_bytes(section)),
            None if subsection is None else to_bytes(subsection),
        )
        return self._index.get(key, [])

    # Raw lookups

    def try_entry(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Entry | None:
        """Find the entry that wins for ``key``, or None.

        Matching sections are searched newest first. Within a section the
        last declaration wins. A section without the key falls through to
        the previous repetition.
        """
        wanted = to_bytes(key)
        for candidate in reversed(self._matching_sections(section, subsection)):
            for entry in reversed(candidate.entries):
                if entry.matches(wanted):
                    return entry
        return None

    def entry(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Entry:
        """Like ``try_entry`` but raises ``LookupNotFound`` on absence."""
        found = self.try_entry(section, subsection, key)
        if found is None:
            raise _not_found(section, subsection, key)
        return found

    def entries(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> list[Entry]:
        """Every matching entry across matching sections, earliest first."""
        wanted = to_bytes(key)
        return [
            entry
            for candidate in self._matching_sections(section, subsection)
            for entry in candidate.entries
            if entry.matches(wanted)
        ]

    def raw_value(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Cow | None:
        """The winning raw value; None means the key is implicitly true.

        Raises:
            LookupNotFound: If nothing matches.
        """
        return self.entry(section, subsection, key).value

    def raw_values(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> list[Cow | None]:
        """All raw values in declaration order.

        Raises:
            LookupNotFound: If nothing matches.
        """
        found = self.entries(section, subsection, key)
        if not found:
            raise _not_found(section, subsection, key)
        return [entry.value for entry in found]

    # Typed lookups

    def _decode(self, kind: type[T], raw: Cow | None) -> T:
        if kind is Boolean:
            return Boolean.decode(raw, self.boolean_table)  # type: ignore[return-value]
        if kind not in VALUE_KINDS:
            raise TypeError(f"Unsupported value kind: {kind!r}")
        return kind.decode(raw)  # type: ignore[return-value]

    def value(
        self,
        kind: type[T],
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> T:
        """Look up ``key`` and decode it as ``kind``.

        Raises:
            LookupNotFound: If nothing matches.
            DecodeError: If the value does not fit ``kind``.
            TypeError: If ``kind`` is not one of the value kinds.
        """
        return self._decode(kind, self.raw_value(section, subsection, key))

    def try_value(
        self,
        kind: type[T],
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> T | None:
        """Like ``value`` but returns None when nothing matches."""
        found = self.try_entry(section, subsection, key)
        if found is None:
            return None
        return self._decode(kind, found.value)

    def multi_value(
        self,
        kind: type[T],
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> list[T]:
        """Decode every matching value, earliest declaration first.

        Raises:
            LookupNotFound: If nothing matches.
            DecodeError: If any value does not fit ``kind``.
        """
        raws = self.raw_values(section, subsection, key)
        return [self._decode(kind, raw) for raw in raws]

    # Convenience getters, returning None on absence

    def boolean(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> bool | None:
        found = self.try_value(Boolean, section, subsection, key)
        return None if found is None else found.value

    def integer(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> int | None:
        """The integer with its size suffix applied."""
        found = self.try_value(Integer, section, subsection, key)
        return None if found is None else found.to_decimal()

    def color(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Color | None:
        return self.try_value(Color, section, subsection, key)

    def string(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Cow | None:
        found = self.try_value(String, section, subsection, key)
        return None if found is None else found.value

    def strings(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> list[Cow] | None:
        found = self.entries(section, subsection, key)
        if not found:
            return None
        return [String.decode(entry.value).value for entry in found]

    def path(
        self,
        section: str | bytes,
        subsection: str | bytes | None,
        key: str | bytes,
    ) -> Path | None:
        """The uninterpolated path; see ``Path.interpolate``."""
        return self.try_value(Path, section, subsection, key)
