"""Borrowed-or-owned byte values.

Lookups hand out ``Borrowed`` values that are ``memoryview`` slices of the
document's buffer whenever the raw bytes already have the requested shape.
Values that needed a transformation (quote removal, escapes, joining
continuation lines) are materialized as ``Owned`` copies. Both kinds compare
equal to each other and to ``bytes`` when their content is identical.
"""


class _CowBase:
    """Shared comparison and conversion behaviour."""

    __slots__ = ()

    is_borrowed: bool = False

    def tobytes(self) -> bytes:
        raise NotImplementedError

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __len__(self) -> int:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _CowBase):
            return self.tobytes() == other.tobytes()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.tobytes() == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.tobytes())

    def decode(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.tobytes().decode(encoding, errors)

    def __str__(self) -> str:
        return self.decode(errors="replace")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tobytes()!r})"


class Borrowed(_CowBase):
    """A zero-copy view into a document buffer."""

    __slots__ = ("view",)

    is_borrowed = True

    def __init__(self, view: memoryview) -> None:
        self.view = view

    def tobytes(self) -> bytes:
        return self.view.tobytes()

    def __len__(self) -> int:
        return len(self.view)

    def slice(self, start: int, end: int) -> "Borrowed":
        """Return a narrower view without copying."""
        return Borrowed(self.view[start:end])


class Owned(_CowBase):
    """A materialized copy of transformed bytes."""

    __slots__ = ("data",)

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def tobytes(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def slice(self, start: int, end: int) -> "Owned":
        return Owned(self.data[start:end])


Cow = Borrowed | Owned


def as_cow(value: Cow | bytes | bytearray | memoryview | str) -> Cow:
    """Coerce caller supplied text into a ``Cow``.

    ``memoryview`` input is borrowed, everything else is copied.
    """
    if isinstance(value, (Borrowed, Owned)):
        return value
    if isinstance(value, memoryview):
        return Borrowed(value)
    if isinstance(value, str):
        return Owned(value.encode("utf-8"))
    return Owned(bytes(value))
