"""Structural events produced by the lexer and consumed by the document builder."""

from dataclasses import dataclass

from gitconf.cow import Cow, as_cow


@dataclass(frozen=True)
class SectionHeader:
    """``[name]``, ``[name "subsection"]`` or legacy ``[name.subsection]``.

    ``separator`` is ``" "`` for the quoted form, ``"."`` for the legacy form
    and ``None`` when there is no subsection.
    """

    name: Cow
    subsection: Cow | None = None
    separator: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_cow(self.name))
        if self.subsection is not None:
            object.__setattr__(self, "subsection", as_cow(self.subsection))


@dataclass(frozen=True)
class _TextEvent:
    text: Cow

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", as_cow(self.text))


@dataclass(frozen=True)
class SectionKey:
    """The key of an entry."""

    name: Cow

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", as_cow(self.name))


@dataclass(frozen=True)
class KeyValueSeparator:
    """The ``=`` between a key and its value."""


@dataclass(frozen=True)
class Value(_TextEvent):
    """A complete raw value on a single line."""


@dataclass(frozen=True)
class ValueNotDone(_TextEvent):
    """A value fragment followed by a line continuation."""


@dataclass(frozen=True)
class ValueDone(_TextEvent):
    """The final fragment of a continued value."""


@dataclass(frozen=True)
class Comment:
    """A ``#`` or ``;`` comment running to the end of the line."""

    tag: bytes
    text: Cow

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", as_cow(self.text))


@dataclass(frozen=True)
class Whitespace(_TextEvent):
    """Spaces and tabs without meaning for lookups."""


@dataclass(frozen=True)
class Newline(_TextEvent):
    """A single line terminator, ``\\n`` or ``\\r\\n``."""


Event = (
    SectionHeader
    | SectionKey
    | KeyValueSeparator
    | Value
    | ValueNotDone
    | ValueDone
    | Comment
    | Whitespace
    | Newline
)
