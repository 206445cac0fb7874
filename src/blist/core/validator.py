"""JSON Schema validation for playlist manifests.

This module loads the formal JSON Schema and validates manifests both when
they are read from an archive and before they are written to one.
"""

import json
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from ..errors import SchemaViolation

# Path to the schema file shipped inside the package
# src/blist/core/validator.py -> src/blist/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "playlist.schema.json"


@lru_cache(maxsize=None)
def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def format_error(error: jsonschema.ValidationError) -> str:
    """Build a user-facing message pointing at the offending value."""
    error_path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
    return f"Validation error at {error_path}: {error.message}"


class ManifestValidator(ABC):
    """Structural check applied to a manifest before it is accepted or emitted.

    Implementations only decide whether the loosely-typed document has the
    right shape. The playlist codec never depends on how they do it, so a
    hand-written validator can replace the JSON Schema one.
    """

    @abstractmethod
    def validate(self, manifest: Any) -> None:
        """Validate a manifest.

        Args:
            manifest: The decoded playlist.json document

        Raises:
            SchemaViolation: If the manifest doesn't conform
        """
        pass

    def validate_with_error_details(self, manifest: Any) -> tuple[bool, str | None]:
        """Validate a manifest and return detailed error information.

        Args:
            manifest: The decoded playlist.json document

        Returns:
            Tuple of (is_valid, error_message). error_message is None if valid.
        """
        try:
            self.validate(manifest)
            return True, None
        except SchemaViolation as e:
            return False, e.diagnostic


class JsonSchemaValidator(ManifestValidator):
    """Validator backed by the packaged playlist JSON Schema."""

    def __init__(self, schema: dict[str, Any] | None = None):
        self.schema = schema if schema is not None else load_schema()
        jsonschema.Draft7Validator.check_schema(self.schema)
        self._validator = jsonschema.Draft7Validator(self.schema)

    def validate(self, manifest: Any) -> None:
        error = best_match(self._validator.iter_errors(manifest))
        if error is None:
            return

        raise SchemaViolation(format_error(error), tuple(error.absolute_path)) from error


_default_validator: JsonSchemaValidator | None = None


def get_default_validator() -> JsonSchemaValidator:
    """Return the shared validator built from the packaged schema."""
    global _default_validator
    if _default_validator is None:
        _default_validator = JsonSchemaValidator()
    return _default_validator


def validate_manifest(manifest: Any) -> None:
    """Validate a manifest against the JSON Schema.

    Args:
        manifest: The manifest dictionary to validate

    Raises:
        SchemaViolation: If the manifest doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    get_default_validator().validate(manifest)


def validate_manifest_with_error_details(manifest: Any) -> tuple[bool, str | None]:
    """Validate a manifest and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Args:
        manifest: The manifest dictionary to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validator = get_default_validator()
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
    return validator.validate_with_error_details(manifest)
