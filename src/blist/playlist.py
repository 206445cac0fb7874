"""Playlist documents and the .blist archive codec.

A .blist file is a zip archive holding a ``playlist.json`` manifest and,
optionally, a cover image referenced by the manifest. Loading validates the
manifest against the schema before lifting it into typed objects; saving
projects the objects back into a manifest and validates it again before
anything is written.

Example:
    >>> playlist = Playlist("My List", author="me")
    >>> playlist.entries.append(Entry.new_key("1a2b"))
    >>> playlist.cover = Path("cover.png").read_bytes()
    >>> playlist.save("my-list.blist")
    >>> Playlist.load("my-list.blist").title
    'My List'
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .archive import ArchiveStore, ZipArchiveStore
from .core.types import Manifest
from .core.validator import ManifestValidator, get_default_validator
from .cover import CoverAsset
from .entry import Entry
from .errors import MalformedManifest, MissingCoverAsset, MissingManifest

logger = logging.getLogger(__name__)

MANIFEST_NAME = "playlist.json"

_NO_DATE = datetime.min.replace(tzinfo=timezone.utc)

Source = bytes | bytearray | memoryview | str | os.PathLike[str]


class Playlist:
    """A playlist of beatmaps, with an optional cover image.

    The playlist owns the in-memory archive it was loaded from, so archive
    entries it doesn't understand are written back untouched on save.
    Instances are not safe for concurrent use; callers sharing one across
    threads must serialize access themselves.

    Attributes:
        title: Title of the playlist, a single non-empty line
        author: Optional author, a single line
        description: Optional non-empty description
        entries: Ordered beatmap entries
        custom_data: Arbitrary JSON-compatible data
        validator: Structural check applied on load and save
    """

    def __init__(
        self,
        title: str,
        author: str | None = None,
        description: str | None = None,
        entries: list[Entry] | None = None,
        custom_data: dict[str, Any] | None = None,
        *,
        validator: ManifestValidator | None = None,
        archive: ArchiveStore | None = None,
    ):
        self.title = title
        self.author = author
        self.description = description
        self.entries: list[Entry] = list(entries) if entries else []
        self.custom_data: dict[str, Any] = dict(custom_data) if custom_data else {}
        self.validator = validator if validator is not None else get_default_validator()

        self._archive = archive if archive is not None else ZipArchiveStore()
        self._cover: CoverAsset | None = None
        # Archive entry currently holding the cover; may be non-canonical after a load
        self._cover_path: str | None = None

    # ------------------------------------------------------------------
    # Cover
    # ------------------------------------------------------------------

    @property
    def cover(self) -> bytes | None:
        """Cover image bytes, or None.

        Assigning bytes sniffs their format and raises UnsupportedCoverFormat
        for anything but PNG or JPEG. Assigning None removes the cover.
        """
        return self._cover.data if self._cover is not None else None

    @cover.setter
    def cover(self, data: bytes | None) -> None:
        self.set_cover(data)

    @property
    def cover_asset(self) -> CoverAsset | None:
        return self._cover

    @property
    def cover_filename(self) -> str | None:
        """Canonical filename the cover is saved under, or None."""
        return self._cover.filename if self._cover is not None else None

    def set_cover(self, data: bytes | None) -> None:
        """Replace or clear the cover image.

        The archive entry holding the previous cover is dropped straight
        away, so switching between PNG and JPEG, or clearing the cover,
        never leaves a stale image behind. The new image is written to the
        archive on the next save.

        Args:
            data: PNG or JPEG bytes, or None to remove the cover

        Raises:
            UnsupportedCoverFormat: If the data is neither PNG nor JPEG
        """
        if data is None:
            self._release_cover_entry()
            self._cover = None
            logger.debug("Cleared cover of playlist %r", self.title)
            return

        cover = CoverAsset.from_bytes(data)
        self._release_cover_entry()
        self._cover = cover
        logger.debug("Set %s cover (%d bytes) on playlist %r", cover.kind.name, len(cover.data), self.title)

    def _release_cover_entry(self) -> None:
        if self._cover_path is not None:
            self._archive.delete(self._cover_path)
            self._cover_path = None

    # ------------------------------------------------------------------
    # Manifest projection
    # ------------------------------------------------------------------

    def to_manifest(self) -> Manifest:
        """Project the playlist into its playlist.json representation.

        Optional fields that are unset, and empty custom data, are omitted.
        """
        manifest: dict[str, Any] = {"title": self.title}
        if self.author is not None:
            manifest["author"] = self.author
        if self.description is not None:
            manifest["description"] = self.description
        if self._cover is not None:
            manifest["cover"] = self._cover.filename
        manifest["maps"] = [entry.to_manifest() for entry in self.entries]
        if self.custom_data:
            manifest["customData"] = self.custom_data
        return manifest  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        source: Source,
        *,
        validator: ManifestValidator | None = None,
        archive_type: type[ArchiveStore] = ZipArchiveStore,
    ) -> "Playlist":
        """Read a playlist from a path or from in-memory archive bytes.

        Args:
            source: Path to a .blist file, or its raw bytes
            validator: Structural check for the manifest (JSON Schema by default)
            archive_type: Container implementation used to open the bytes

        Returns:
            The loaded playlist

        Raises:
            ArchiveCorrupt: If the archive is unreadable
            MissingManifest: If the archive has no playlist.json
            MalformedManifest: If playlist.json isn't valid JSON or a date is invalid
            SchemaViolation: If playlist.json doesn't conform to the schema
            InvalidIdentifier: If an entry's identifier is invalid
            MissingCoverAsset: If the manifest names a cover the archive lacks
            OSError: If the path can't be read
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
        else:
            data = Path(source).read_bytes()

        validator = validator if validator is not None else get_default_validator()
        archive = archive_type.from_bytes(data)

        raw = archive.read(MANIFEST_NAME)
        if raw is None:
            raise MissingManifest(f"Archive has no {MANIFEST_NAME}")

        try:
            manifest = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedManifest(f"Could not parse {MANIFEST_NAME}", str(e)) from e

        validator.validate(manifest)

        playlist = cls(
            manifest["title"],
            author=manifest.get("author"),
            description=manifest.get("description"),
            entries=[Entry.from_manifest(m) for m in manifest["maps"]],
            custom_data=manifest.get("customData"),
            validator=validator,
            archive=archive,
        )

        cover_path = manifest.get("cover")
        if cover_path is not None:
            cover_data = archive.read(cover_path)
            if cover_data is None:
                raise MissingCoverAsset(cover_path)
            playlist._cover = CoverAsset.from_archive(cover_path, cover_data)
            playlist._cover_path = cover_path

        logger.debug("Loaded playlist %r with %d entries", playlist.title, len(playlist.entries))
        return playlist

    def save(self, destination: str | os.PathLike[str] | None = None) -> bytes | None:
        """Write the playlist as a .blist archive.

        The in-memory archive is updated to mirror what was written, even
        when only bytes are requested: the cover is stored under its
        canonical filename and the manifest is rewritten.

        Args:
            destination: Path to write to, overwriting any existing file.
                         When omitted the archive bytes are returned instead.

        Returns:
            The archive bytes if no destination was given, otherwise None

        Raises:
            SchemaViolation: If the projected manifest doesn't conform
            MalformedManifest: If custom data isn't JSON-serializable
            OSError: If the destination can't be written
        """
        manifest = self.to_manifest()
        self.validator.validate(manifest)

        try:
            text = json.dumps(manifest, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise MalformedManifest(f"Could not serialize {MANIFEST_NAME}", str(e)) from e

        if self._cover is not None:
            if self._cover_path is not None and self._cover_path != self._cover.filename:
                self._archive.delete(self._cover_path)
            self._archive.write(self._cover.filename, self._cover.data)
            self._cover_path = self._cover.filename

        self._archive.write(MANIFEST_NAME, text.encode("utf-8"))
        data = self._archive.serialize()

        if destination is None:
            logger.debug("Serialized playlist %r (%d bytes)", self.title, len(data))
            return data

        Path(destination).write_bytes(data)
        logger.debug("Saved playlist %r to %s", self.title, destination)
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def sort_entries(self) -> None:
        """Sort entries by the time they were added, undated entries first.

        The sort is stable, so entries added at the same instant keep
        their relative order.
        """
        self.entries.sort(key=lambda e: (e.added_at is not None, e.added_at or _NO_DATE))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Playlist):
            return NotImplemented
        return (
            self.title == other.title
            and self.author == other.author
            and self.description == other.description
            and self.entries == other.entries
            and self._cover == other._cover
            and self.custom_data == other.custom_data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Playlist(title={self.title!r}, author={self.author!r}, "
            f"entries={len(self.entries)}, cover={self.cover_filename!r})"
        )
