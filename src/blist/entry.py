"""Playlist entries and their recommended difficulties."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .core.timestamps import ensure_utc, format_rfc3339, parse_rfc3339
from .core.types import ManifestDifficulty, ManifestEntry
from .errors import InvalidField, MalformedManifest
from .identifiers import (
    Hash,
    Identifier,
    Key,
    LevelID,
    identifier_from_manifest,
    identifier_to_manifest,
)

SINGLE_LINE_PATTERN = re.compile(r"[^\r\n]+")


def check_single_line(field: str, value: Any) -> None:
    """Reject values that are empty, not strings, or contain CR/LF.

    Raises:
        InvalidField: If the value doesn't match
    """
    if not isinstance(value, str) or SINGLE_LINE_PATTERN.fullmatch(value) is None:
        raise InvalidField(field, value)


@dataclass(frozen=True)
class Difficulty:
    """Recommended difficulty, e.g. ``Difficulty("Standard", "ExpertPlus")``.

    Any characteristic and name are accepted as long as each is a single
    non-empty line; there is no check against the game's vocabulary.
    """

    characteristic: str
    name: str

    def __post_init__(self) -> None:
        check_single_line("characteristic", self.characteristic)
        check_single_line("name", self.name)

    def to_manifest(self) -> ManifestDifficulty:
        return {"characteristic": self.characteristic, "name": self.name}

    @classmethod
    def from_manifest(cls, data: ManifestDifficulty) -> "Difficulty":
        return cls(characteristic=data["characteristic"], name=data["name"])


class Entry:
    """One beatmap line item in a playlist.

    Entries built directly carry no timestamp. Use the ``new_*`` factories
    to create an entry stamped with the current time, the way a playlist
    editor adds a map.

    Attributes:
        identifier: How the beatmap is referenced (Key, Hash or LevelID)
        difficulties: Ordered recommended difficulties, freely mutable
        custom_data: Arbitrary JSON-compatible data, freely mutable
    """

    def __init__(
        self,
        identifier: Identifier,
        added_at: datetime | None = None,
        difficulties: list[Difficulty] | None = None,
        custom_data: dict[str, Any] | None = None,
    ):
        self.identifier = identifier
        self.added_at = added_at
        self.difficulties: list[Difficulty] = list(difficulties) if difficulties else []
        self.custom_data: dict[str, Any] = dict(custom_data) if custom_data else {}

    @classmethod
    def new(cls, identifier: Identifier) -> "Entry":
        """Create an entry added right now."""
        return cls(identifier, added_at=datetime.now(timezone.utc))

    @classmethod
    def new_key(cls, key: str) -> "Entry":
        """Create an entry identified by its BeatSaver key, added right now.

        Raises:
            InvalidIdentifier: If the key isn't 1 to 8 hex digits
        """
        return cls.new(Key(key))

    @classmethod
    def new_hash(cls, hash: str) -> "Entry":
        """Create an entry identified by its hash, added right now.

        Raises:
            InvalidIdentifier: If the hash isn't 40 hex digits
        """
        return cls.new(Hash(hash))

    @classmethod
    def new_level_id(cls, level_id: str) -> "Entry":
        """Create an entry identified by its level ID, added right now.

        Raises:
            InvalidIdentifier: If the level ID is empty or spans several lines
        """
        return cls.new(LevelID(level_id))

    @property
    def identifier(self) -> Identifier:
        return self._identifier

    @identifier.setter
    def identifier(self, value: Identifier) -> None:
        if not isinstance(value, (Key, Hash, LevelID)):
            raise TypeError(f"Expected Key, Hash or LevelID, got {type(value).__name__}")
        self._identifier = value

    @property
    def added_at(self) -> datetime | None:
        """When the entry was added, as an aware UTC datetime, or None."""
        return self._added_at

    @added_at.setter
    def added_at(self, value: datetime | None) -> None:
        self._added_at = ensure_utc(value) if value is not None else None

    def to_manifest(self) -> ManifestEntry:
        """Flatten the entry into its playlist.json representation."""
        data: dict[str, Any] = identifier_to_manifest(self.identifier)
        if self.added_at is not None:
            data["date"] = format_rfc3339(self.added_at)
        if self.difficulties:
            data["difficulties"] = [d.to_manifest() for d in self.difficulties]
        if self.custom_data:
            data["customData"] = self.custom_data
        return data  # type: ignore[return-value]

    @classmethod
    def from_manifest(cls, data: ManifestEntry) -> "Entry":
        """Lift a schema-valid manifest entry.

        The timestamp is taken verbatim from the document and left unset
        when the document has none.

        Raises:
            InvalidIdentifier: If the identifying field is invalid
            MalformedManifest: If the date is not valid RFC-3339
        """
        identifier = identifier_from_manifest(data)  # type: ignore[arg-type]

        added_at = None
        if "date" in data:
            try:
                added_at = parse_rfc3339(data["date"])
            except ValueError as e:
                raise MalformedManifest("Invalid entry date", str(e)) from e

        return cls(
            identifier,
            added_at=added_at,
            difficulties=[Difficulty.from_manifest(d) for d in data.get("difficulties", [])],
            custom_data=data.get("customData"),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return (
            self.identifier == other.identifier
            and self.added_at == other.added_at
            and self.difficulties == other.difficulties
            and self.custom_data == other.custom_data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Entry({self.identifier!r}, added_at={self.added_at!r}, "
            f"difficulties={self.difficulties!r}, custom_data={self.custom_data!r})"
        )
