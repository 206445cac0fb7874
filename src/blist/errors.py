"""Exception hierarchy for the playlist codec.

Every failure raised by loading, saving or building a playlist derives
from BlistError, so callers can catch the whole family in one place or
pick out the specific kind they care about.
"""

from typing import Any


class BlistError(Exception):
    """Base exception for all playlist codec errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message

    def __reduce__(self) -> tuple[Any, ...]:
        # Subclasses take different constructor arguments; rebuild from state
        return (_rebuild, (self.__class__, self.__dict__))


def _rebuild(cls: type[BlistError], state: dict[str, Any]) -> BlistError:
    error = cls.__new__(cls)
    Exception.__init__(error, state.get("message"))
    error.__dict__.update(state)
    return error


class InvalidIdentifier(BlistError, ValueError):
    """Raised when a key, hash or level ID does not match its pattern."""

    def __init__(self, variant: str, value: Any):
        super().__init__(f"Invalid {variant} identifier", repr(value))
        self.variant = variant
        self.value = value


class InvalidField(BlistError, ValueError):
    """Raised when a free-text field is empty or spans several lines."""

    def __init__(self, field: str, value: Any):
        super().__init__(f"Field `{field}` doesn't respect the schema", repr(value))
        self.field = field
        self.value = value


class UnsupportedCoverFormat(BlistError, ValueError):
    """Raised when cover bytes are neither PNG nor JPEG."""


class ArchiveCorrupt(BlistError):
    """Raised when the archive container cannot be read."""


class MissingManifest(BlistError):
    """Raised when the archive has no playlist.json entry."""


class MalformedManifest(BlistError):
    """Raised when the manifest text cannot be parsed or serialized."""


class SchemaViolation(BlistError):
    """Raised when a manifest does not conform to the playlist schema.

    Attributes:
        diagnostic: Human readable description produced by the validator
        path: Location of the offending value inside the manifest
    """

    def __init__(self, diagnostic: str, path: tuple[str | int, ...] = ()):
        super().__init__("Manifest validation failed", diagnostic)
        self.diagnostic = diagnostic
        self.path = path


class MissingCoverAsset(BlistError):
    """Raised when the manifest names a cover file the archive lacks."""

    def __init__(self, filename: str):
        super().__init__("Cover file missing from archive", filename)
        self.filename = filename
