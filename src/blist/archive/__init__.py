"""Archive containers backing playlist files.

This package contains the keyed byte store interface used by the codec
and its zip implementation.
"""

from .base import ArchiveStore
from .zip_store import ZipArchiveStore

__all__ = ["ArchiveStore", "ZipArchiveStore"]
