"""Color values: up to two colors followed by attributes.

``brightgreen red bold`` is a bright green foreground on a red background,
rendered bold. Tokens are whitespace separated and case-insensitive.
"""

from dataclasses import dataclass, field
from enum import Enum

from gitconf.cow import Cow
from gitconf.exceptions import ColorDecodeError
from gitconf.names import ascii_fold
from gitconf.values.string import normalize


class Name(Enum):
    """Named terminal colors."""

    NORMAL = "normal"
    DEFAULT = "default"
    BLACK = "black"
    BRIGHT_BLACK = "brightblack"
    RED = "red"
    BRIGHT_RED = "brightred"
    GREEN = "green"
    BRIGHT_GREEN = "brightgreen"
    YELLOW = "yellow"
    BRIGHT_YELLOW = "brightyellow"
    BLUE = "blue"
    BRIGHT_BLUE = "brightblue"
    MAGENTA = "magenta"
    BRIGHT_MAGENTA = "brightmagenta"
    CYAN = "cyan"
    BRIGHT_CYAN = "brightcyan"
    WHITE = "white"
    BRIGHT_WHITE = "brightwhite"


@dataclass(frozen=True)
class Ansi:
    """One of the 256 ANSI palette entries."""

    index: int


@dataclass(frozen=True)
class Rgb:
    """A 24-bit color written as ``#rrggbb``."""

    red: int
    green: int
    blue: int


ColorName = Name | Ansi | Rgb


class Attribute(Enum):
    """Text attributes; the ``NO_*`` members switch an attribute off."""

    BOLD = "bold"
    DIM = "dim"
    ITALIC = "italic"
    UL = "ul"
    BLINK = "blink"
    REVERSE = "reverse"
    STRIKE = "strike"
    NO_BOLD = "nobold"
    NO_DIM = "nodim"
    NO_ITALIC = "noitalic"
    NO_UL = "noul"
    NO_BLINK = "noblink"
    NO_REVERSE = "noreverse"
    NO_STRIKE = "nostrike"


_NAMES = {member.value.encode(): member for member in Name}
_ATTRIBUTES = {member.value.encode(): member for member in Attribute}
_HEX_DIGITS = frozenset(b"0123456789abcdef")


def parse_color_name(token: bytes) -> ColorName | None:
    """Parse a single color token, returning None if it is not a color."""
    folded = ascii_fold(token)
    if folded in _NAMES:
        return _NAMES[folded]
    if folded == b"-1":
        return Name.NORMAL
    if folded.isdigit():
        index = int(folded)
        return Ansi(index) if index <= 255 else None
    if len(folded) == 7 and folded[:1] == b"#" and _HEX_DIGITS.issuperset(folded[1:]):
        return Rgb(int(folded[1:3], 16), int(folded[3:5], 16), int(folded[5:7], 16))
    return None


def parse_attribute(token: bytes) -> Attribute | None:
    """Parse an attribute, accepting ``no`` and ``no-`` negation prefixes."""
    folded = ascii_fold(token)
    if folded.startswith(b"no-"):
        folded = b"no" + folded[3:]
    return _ATTRIBUTES.get(folded)


@dataclass(frozen=True)
class Color:
    """A decoded color specification."""

    foreground: ColorName | None = None
    background: ColorName | None = None
    attributes: tuple[Attribute, ...] = field(default_factory=tuple)

    @classmethod
    def decode(cls, raw: Cow | None) -> "Color":
        """Decode a whitespace separated list of colors and attributes.

        Continuation lines must already be joined.

        Raises:
            ColorDecodeError: On an implicit value, an unknown token or a
                third color.
        """
        if raw is None:
            raise ColorDecodeError(None, "missing value")
        text = normalize(raw).tobytes()
        colors: list[ColorName] = []
        attributes: list[Attribute] = []
        for token in text.split():
            color = parse_color_name(token)
            if color is not None:
                if len(colors) == 2:
                    raise ColorDecodeError(text, "more than two colors")
                colors.append(color)
                continue
            attribute = parse_attribute(token)
            if attribute is None:
                name = token.decode(errors="replace")
                raise ColorDecodeError(text, f"unknown token {name!r}")
            attributes.append(attribute)
        foreground = colors[0] if colors else None
        background = colors[1] if len(colors) > 1 else None
        return cls(foreground, background, tuple(attributes))
