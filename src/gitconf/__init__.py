"""gitconf - Typed, order-aware lookups over git config files."""

from gitconf.cow import Borrowed, Cow, Owned
from gitconf.document import Document, Entry, Section
from gitconf.exceptions import (
    BooleanDecodeError,
    ColorDecodeError,
    ConfigError,
    ConfigFileNotFoundError,
    DecodeError,
    IntegerDecodeError,
    LookupNotFound,
    ParseError,
    PathInterpolationError,
    StringDecodeError,
)
from gitconf.values import (
    Boolean,
    BooleanTable,
    Color,
    Integer,
    Path,
    String,
)

__all__ = [
    # Values
    "Borrowed",
    "Cow",
    "Owned",
    # Document
    "Document",
    "Entry",
    "Section",
    # Value kinds
    "Boolean",
    "BooleanTable",
    "Color",
    "Integer",
    "Path",
    "String",
    # Exceptions
    "BooleanDecodeError",
    "ColorDecodeError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "DecodeError",
    "IntegerDecodeError",
    "LookupNotFound",
    "ParseError",
    "PathInterpolationError",
    "StringDecodeError",
]
