"""Core utilities for playlist manifests.

This package contains schema validation, type definitions and the
timestamp helpers shared by the model and the codec.
"""

from .timestamps import format_rfc3339, parse_rfc3339
from .types import EntryType, Manifest, ManifestDifficulty, ManifestEntry
from .validator import (
    JsonSchemaValidator,
    ManifestValidator,
    load_schema,
    validate_manifest,
    validate_manifest_with_error_details,
)

__all__ = [
    "EntryType",
    "JsonSchemaValidator",
    "Manifest",
    "ManifestDifficulty",
    "ManifestEntry",
    "ManifestValidator",
    "format_rfc3339",
    "load_schema",
    "parse_rfc3339",
    "validate_manifest",
    "validate_manifest_with_error_details",
]
