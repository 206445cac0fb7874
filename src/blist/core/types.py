"""Type definitions for playlist manifests.

This module defines TypedDict classes that mirror the JSON schema structure
defined in schemas/playlist.schema.json. They describe the loosely-typed
form a playlist takes inside playlist.json, before it is lifted into the
typed model.
"""

from typing import Any, Literal, NotRequired, TypedDict

EntryType = Literal["key", "hash", "levelID"]


class ManifestDifficulty(TypedDict):
    """Recommended difficulty for a playlist entry."""

    characteristic: str  # e.g. "Standard", "OneSaber"
    name: str  # e.g. "Expert", "ExpertPlus"


# "levelID" is not a valid identifier, hence the functional syntax
ManifestEntry = TypedDict(
    "ManifestEntry",
    {
        "type": EntryType,
        "date": NotRequired[str],  # RFC-3339 timestamp
        "difficulties": NotRequired[list[ManifestDifficulty]],
        "key": NotRequired[str],
        "hash": NotRequired[str],
        "levelID": NotRequired[str],
        "customData": NotRequired[dict[str, Any]],
    },
)


class Manifest(TypedDict):
    """Complete playlist.json document."""

    title: str
    author: NotRequired[str]
    description: NotRequired[str]
    cover: NotRequired[str]  # Archive entry holding the cover image
    maps: list[ManifestEntry]
    customData: NotRequired[dict[str, Any]]
