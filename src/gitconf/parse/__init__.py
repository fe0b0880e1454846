"""Lexing of config bytes into structural events."""

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
from gitconf.parse.lexer import Lexer, parse_events

__all__ = [
    "Comment",
    "Event",
    "KeyValueSeparator",
    "Lexer",
    "Newline",
    "SectionHeader",
    "SectionKey",
    "Value",
    "ValueDone",
    "ValueNotDone",
    "Whitespace",
    "parse_events",
]
