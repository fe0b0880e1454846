"""Name matching for sections and keys.

Section names and keys compare with ASCII case folding. Subsection labels
compare byte for byte. Stored names are never rewritten.
"""

_FOLD = bytes.maketrans(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    b"abcdefghijklmnopqrstuvwxyz",
)


def to_bytes(name: str | bytes) -> bytes:
    """Encode a caller supplied name as UTF-8 bytes."""
    if isinstance(name, str):
        return name.encode("utf-8")
    return bytes(name)


def ascii_fold(name: bytes) -> bytes:
    """Lowercase ASCII letters only, leaving all other bytes untouched."""
    return name.translate(_FOLD)


def ascii_eq(a: bytes, b: bytes) -> bool:
    """Compare two names ignoring ASCII case."""
    return len(a) == len(b) and ascii_fold(a) == ascii_fold(b)


def subsection_eq(a: bytes | None, b: bytes | None) -> bool:
    """Compare two subsection labels exactly."""
    return a == b
