"""Identifier variants for playlist entries.

A beatmap is referenced in exactly one of three ways: by its BeatSaver key,
by the SHA-1 hash of its content, or by the opaque level ID the game uses.
Each way is its own immutable type, and ``Identifier`` is the union of them,
so an entry can never carry a tag that disagrees with its value.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .core.types import EntryType
from .errors import InvalidIdentifier

KEY_PATTERN = re.compile(r"[0-9A-Fa-f]{1,8}")
HASH_PATTERN = re.compile(r"[0-9A-Fa-f]{40}")
LEVEL_ID_PATTERN = re.compile(r"[^\r\n]+")


@dataclass(frozen=True)
class _IdentifierBase:
    value: str

    tag: ClassVar[EntryType]
    pattern: ClassVar[re.Pattern[str]]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or self.pattern.fullmatch(self.value) is None:
            raise InvalidIdentifier(self.tag, self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Key(_IdentifierBase):
    """BeatSaver key, 1 to 8 hex digits."""

    tag: ClassVar[EntryType] = "key"
    pattern: ClassVar[re.Pattern[str]] = KEY_PATTERN


@dataclass(frozen=True)
class Hash(_IdentifierBase):
    """Hex-encoded 20-byte content hash."""

    tag: ClassVar[EntryType] = "hash"
    pattern: ClassVar[re.Pattern[str]] = HASH_PATTERN


@dataclass(frozen=True)
class LevelID(_IdentifierBase):
    """Level ID as reported by the game, any single line of text."""

    tag: ClassVar[EntryType] = "levelID"
    pattern: ClassVar[re.Pattern[str]] = LEVEL_ID_PATTERN


Identifier = Union[Key, Hash, LevelID]

IDENTIFIER_TYPES: dict[str, type[Identifier]] = {cls.tag: cls for cls in (Key, Hash, LevelID)}


def identifier_from_manifest(entry: dict[str, Any]) -> Identifier:
    """Build the identifier named by an entry's ``type`` tag.

    The value is read from the field named like the tag (``key``, ``hash``
    or ``levelID``).

    Raises:
        InvalidIdentifier: If the tag is unknown or the value is invalid
    """
    tag = entry.get("type")
    cls = IDENTIFIER_TYPES.get(tag) if isinstance(tag, str) else None
    if cls is None:
        raise InvalidIdentifier("type", tag)
    return cls(entry.get(cls.tag))  # type: ignore[arg-type]


def identifier_to_manifest(identifier: Identifier) -> dict[str, str]:
    """Flatten an identifier into its ``type`` tag and matching field."""
    return {"type": identifier.tag, identifier.tag: identifier.value}
