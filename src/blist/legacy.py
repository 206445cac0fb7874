"""Conversion from legacy JSON playlists.

Legacy playlists are plain JSON files (usually ``.bplist`` or ``.json``)
with the cover embedded as base64. They are converted into Playlist
objects which can then be saved as .blist archives.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .core.timestamps import parse_rfc3339
from .cover import sniff_cover_kind
from .entry import Entry
from .errors import MalformedManifest, UnsupportedCoverFormat
from .identifiers import Hash, Identifier, Key
from .playlist import Playlist

logger = logging.getLogger(__name__)

LEGACY_PLAYLIST_FIELDS = {"playlistTitle", "playlistAuthor", "playlistDescription", "songs", "image"}
LEGACY_SONG_FIELDS = {"key", "hash", "dateAdded"}


def decode_image(image: str) -> bytes:
    """Decode a base64 cover, with or without a ``data:...;base64,`` header.

    Raises:
        binascii.Error: If the payload isn't valid base64
    """
    _, sep, payload = image.partition("base64,")
    return base64.b64decode(payload if sep else image, validate=False)


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedManifest(f"Legacy field `{key}` must be a string")
    return value


@dataclass
class LegacySong:
    """Song entry of a legacy playlist."""

    key: str | None = None
    hash: str | None = None
    date: datetime | None = None
    custom_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "LegacySong":
        if not isinstance(data, dict):
            raise MalformedManifest("Legacy song must be an object")

        date = None
        date_text = _optional_str(data, "dateAdded")
        if date_text is not None:
            try:
                date = parse_rfc3339(date_text)
            except ValueError as e:
                raise MalformedManifest("Invalid legacy song date", str(e)) from e

        return cls(
            key=_optional_str(data, "key"),
            hash=_optional_str(data, "hash"),
            date=date,
            custom_data={k: v for k, v in data.items() if k not in LEGACY_SONG_FIELDS},
        )

    def to_entry(self, preserve_custom_data: bool = True) -> Entry:
        """Convert to an entry, preferring the key over the hash.

        Raises:
            MalformedManifest: If the song has neither key nor hash
            InvalidIdentifier: If the key or hash is invalid
        """
        identifier: Identifier
        if self.key is not None:
            identifier = Key(self.key)
        elif self.hash is not None:
            identifier = Hash(self.hash)
        else:
            raise MalformedManifest("Legacy song has neither key nor hash")

        return Entry(
            identifier,
            added_at=self.date,
            custom_data=self.custom_data if preserve_custom_data else None,
        )


@dataclass
class LegacyPlaylist:
    """Legacy JSON playlist.

    Attributes:
        title: ``playlistTitle``
        author: ``playlistAuthor``
        description: ``playlistDescription``
        songs: ``songs``
        image: ``image``, the base64 encoded cover
        custom_data: Every other top-level field
    """

    title: str
    author: str | None = None
    description: str | None = None
    songs: list[LegacySong] = field(default_factory=list)
    image: str | None = None
    custom_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "LegacyPlaylist":
        """Parse a decoded legacy playlist document.

        Raises:
            MalformedManifest: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise MalformedManifest("Legacy playlist must be an object")

        title = data.get("playlistTitle")
        if not isinstance(title, str):
            raise MalformedManifest("Legacy playlist has no `playlistTitle`")

        songs = data.get("songs") or []
        if not isinstance(songs, list):
            raise MalformedManifest("Legacy field `songs` must be an array")

        return cls(
            title=title,
            author=_optional_str(data, "playlistAuthor"),
            description=_optional_str(data, "playlistDescription"),
            songs=[LegacySong.from_json(s) for s in songs],
            image=_optional_str(data, "image"),
            custom_data={k: v for k, v in data.items() if k not in LEGACY_PLAYLIST_FIELDS},
        )

    @classmethod
    def read(cls, path: Path) -> "LegacyPlaylist":
        """Read a legacy playlist file.

        Raises:
            MalformedManifest: If the file isn't a valid legacy playlist
            OSError: If the file can't be read
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedManifest(f"Could not parse {path}", str(e)) from e
        return cls.from_json(data)

    def to_playlist(self, preserve_custom_data: bool = True) -> Playlist:
        """Convert to a playlist.

        A cover that doesn't decode to PNG or JPEG is dropped.

        Args:
            preserve_custom_data: Keep unknown legacy fields as custom data

        Raises:
            MalformedManifest: If a song has neither key nor hash, or the image isn't base64
            InvalidIdentifier: If a key or hash is invalid
        """
        playlist = Playlist(
            self.title,
            author=self.author,
            description=self.description or None,
            entries=[song.to_entry(preserve_custom_data) for song in self.songs],
            custom_data=self.custom_data if preserve_custom_data else None,
        )

        if self.image:
            try:
                cover = decode_image(self.image)
            except (binascii.Error, ValueError) as e:
                raise MalformedManifest("Legacy image isn't valid base64", str(e)) from e
            try:
                sniff_cover_kind(cover)
            except UnsupportedCoverFormat:
                logger.debug("Dropping legacy cover of playlist %r: not PNG or JPEG", self.title)
            else:
                playlist.cover = cover

        return playlist
