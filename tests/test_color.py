"""Tests for values/color.py."""

import pytest

from gitconf import Color, ColorDecodeError, Owned
from gitconf.values import Ansi, Attribute, Name, Rgb


def decode(raw: bytes) -> Color:
    return Color.decode(Owned(raw))


class TestColorDecode:
    """Tests for Color.decode."""

    def test_foreground_only(self) -> None:
        assert decode(b"red") == Color(Name.RED)

    def test_foreground_and_background(self) -> None:
        """The second color is the background."""
        assert decode(b"brightgreen blue") == Color(Name.BRIGHT_GREEN, Name.BLUE)

    def test_attributes_in_order(self) -> None:
        """Attributes keep their declaration order."""
        color = decode(b"yellow bold ul no-dim")
        assert color.foreground == Name.YELLOW
        assert color.background is None
        assert color.attributes == (Attribute.BOLD, Attribute.UL, Attribute.NO_DIM)

    def test_attributes_only(self) -> None:
        assert decode(b"reverse") == Color(attributes=(Attribute.REVERSE,))

    def test_case_insensitive(self) -> None:
        assert decode(b"RED Bold") == Color(Name.RED, attributes=(Attribute.BOLD,))

    def test_interleaved_tokens(self) -> None:
        """Colors and attributes may be mixed."""
        assert decode(b"bold red italic green") == Color(
            Name.RED, Name.GREEN, (Attribute.BOLD, Attribute.ITALIC)
        )

    def test_numeric_colors(self) -> None:
        """-1 is normal, 0..255 are palette entries."""
        assert decode(b"-1 0") == Color(Name.NORMAL, Ansi(0))
        assert decode(b"255") == Color(Ansi(255))

    def test_rgb(self) -> None:
        """RGB colors are quoted since # starts a comment."""
        assert decode(b'"#ff0A10"') == Color(Rgb(255, 10, 16))

    def test_empty(self) -> None:
        """An empty value sets nothing."""
        assert decode(b"") == Color()

    @pytest.mark.parametrize(
        "raw", [b"purple", b"256", b'"#12345"', b'"#gg0000"', b"nope"]
    )
    def test_unknown_token(self, raw: bytes) -> None:
        with pytest.raises(ColorDecodeError, match="unknown token"):
            decode(raw)

    def test_third_color(self) -> None:
        with pytest.raises(ColorDecodeError, match="more than two colors"):
            decode(b"red green blue")

    def test_implicit(self) -> None:
        with pytest.raises(ColorDecodeError):
            Color.decode(None)
