"""Exceptions for gitconf."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ParseError(ConfigError):
    """Raised when the input is not a structurally valid config document.

    No partial document is produced when this is raised.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class LookupNotFound(ConfigError):
    """Raised when no section or no entry matches a lookup.

    This is an absence signal, not a broken document.
    """

    def __init__(self, section: str, subsection: str | None, key: str) -> None:
        self.section = section
        self.subsection = subsection
        self.key = key
        name = section if subsection is None else f'{section} "{subsection}"'
        super().__init__(f"No value for key {key!r} in section [{name}]")


class DecodeError(ConfigError, ValueError):
    """Base exception for values that violate their type's grammar."""

    kind = "value"

    def __init__(self, value: bytes | None, reason: str | None = None) -> None:
        self.value = value
        message = f"Invalid {self.kind}: {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BooleanDecodeError(DecodeError):
    """Raised when a value is not a recognized boolean token."""

    kind = "boolean"


class IntegerDecodeError(DecodeError):
    """Raised when a value is not an integer with an optional size suffix."""

    kind = "integer"


class ColorDecodeError(DecodeError):
    """Raised when a value contains unknown or too many color tokens."""

    kind = "color"


class StringDecodeError(DecodeError):
    """Raised on malformed escape sequences or unbalanced quotes."""

    kind = "string"


class PathInterpolationError(DecodeError):
    """Raised when a path prefix cannot be resolved with the given inputs."""

    kind = "path"


class ConfigFileNotFoundError(ConfigError):
    """Raised when an explicitly specified config file is not found."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")
