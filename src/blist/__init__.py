"""blist - playlist archives for rhythm games.

This package reads and writes .blist files: zip archives bundling a
validated ``playlist.json`` manifest of beatmap references with an
optional cover image. It also converts legacy JSON playlists.
"""

# Core library interface
from .playlist import MANIFEST_NAME, Playlist
from .entry import Difficulty, Entry
from .identifiers import Hash, Identifier, Key, LevelID
from .cover import CoverAsset, CoverKind

# Pluggable collaborators
from .archive import ArchiveStore, ZipArchiveStore
from .core import JsonSchemaValidator, Manifest, ManifestValidator
from .core import validate_manifest, validate_manifest_with_error_details

# Errors
from .errors import (
    ArchiveCorrupt,
    BlistError,
    InvalidField,
    InvalidIdentifier,
    MalformedManifest,
    MissingCoverAsset,
    MissingManifest,
    SchemaViolation,
    UnsupportedCoverFormat,
)

# Legacy conversion
from .legacy import LegacyPlaylist

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "MANIFEST_NAME",
    "Playlist",
    "Entry",
    "Difficulty",
    "Identifier",
    "Key",
    "Hash",
    "LevelID",
    "CoverAsset",
    "CoverKind",
    # Pluggable collaborators
    "ArchiveStore",
    "ZipArchiveStore",
    "ManifestValidator",
    "JsonSchemaValidator",
    "Manifest",
    "validate_manifest",
    "validate_manifest_with_error_details",
    # Errors
    "BlistError",
    "InvalidIdentifier",
    "InvalidField",
    "UnsupportedCoverFormat",
    "ArchiveCorrupt",
    "MissingManifest",
    "MalformedManifest",
    "SchemaViolation",
    "MissingCoverAsset",
    # Legacy conversion
    "LegacyPlaylist",
]
