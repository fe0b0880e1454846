"""Typed decoding of raw config values."""

from gitconf.values.boolean import (
    DEFAULT_FALSE_TOKENS,
    DEFAULT_TABLE,
    DEFAULT_TRUE_TOKENS,
    Boolean,
    BooleanTable,
)
from gitconf.values.color import Ansi, Attribute, Color, ColorName, Name, Rgb
from gitconf.values.integer import Integer, Suffix
from gitconf.values.path import Path
from gitconf.values.string import String, normalize

# The closed set of kinds a lookup can decode into.
VALUE_KINDS = (Boolean, Integer, Color, String, Path)

__all__ = [
    "DEFAULT_FALSE_TOKENS",
    "DEFAULT_TABLE",
    "DEFAULT_TRUE_TOKENS",
    "VALUE_KINDS",
    "Ansi",
    "Attribute",
    "Boolean",
    "BooleanTable",
    "Color",
    "ColorName",
    "Integer",
    "Name",
    "Path",
    "Rgb",
    "String",
    "Suffix",
    "normalize",
]
