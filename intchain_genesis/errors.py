"""Error types raised while decoding and validating genesis documents."""

from typing import Optional


class GenesisError(ValueError):
    """Base class for genesis document errors."""


class DecodeError(GenesisError):
    """Malformed JSON, wrong JSON type or invalid hex digits."""


class MissingFieldError(GenesisError):
    """A required field was absent or null."""

    def __init__(self, field: str, path: str):
        self.field = field
        self.path = path
        super().__init__(f"missing required field '{field}' for {path}")


class FormatError(GenesisError):
    """A field had the right JSON type but invalid content."""

    def __init__(self, message: str, field: Optional[str] = None, path: Optional[str] = None):
        self.field = field
        self.path = path
        super().__init__(message)


class UnknownFixtureError(GenesisError):
    """No built-in genesis fixture with the requested name."""
