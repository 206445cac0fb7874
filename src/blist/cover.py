"""Cover image handling.

The kind of a cover is never stored on its own: it is sniffed from the
image's magic number when a cover is assigned, and taken from the file
extension when a cover is read back from an archive. The archive filename
is always derived from the kind.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from .errors import UnsupportedCoverFormat

PNG_MAGIC_NUMBER = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])
JPEG_MAGIC_NUMBER = bytes([0xFF, 0xD8, 0xFF])


class CoverKind(Enum):
    """Supported cover image formats."""

    PNG = "png"
    JPEG = "jpg"

    @property
    def filename(self) -> str:
        """Canonical archive filename for this kind."""
        return f"cover.{self.value}"


EXTENSION_KINDS = {
    "png": CoverKind.PNG,
    "jpg": CoverKind.JPEG,
    "jpeg": CoverKind.JPEG,
}


def sniff_cover_kind(data: bytes) -> CoverKind:
    """Detect the image format from its leading bytes.

    Raises:
        UnsupportedCoverFormat: If the data is neither PNG nor JPEG
    """
    if data[: len(PNG_MAGIC_NUMBER)] == PNG_MAGIC_NUMBER:
        return CoverKind.PNG
    if data[: len(JPEG_MAGIC_NUMBER)] == JPEG_MAGIC_NUMBER:
        return CoverKind.JPEG
    raise UnsupportedCoverFormat("Cover data is neither PNG nor JPEG")


def kind_from_filename(filename: str) -> CoverKind:
    """Derive the image format from a cover filename's extension.

    Raises:
        UnsupportedCoverFormat: If the extension is not png, jpg or jpeg
    """
    extension = PurePosixPath(filename).suffix.lstrip(".").lower()
    try:
        return EXTENSION_KINDS[extension]
    except KeyError:
        raise UnsupportedCoverFormat("Unsupported cover file extension", filename) from None


@dataclass(frozen=True)
class CoverAsset:
    """Cover image bytes together with their format."""

    data: bytes
    kind: CoverKind

    @property
    def filename(self) -> str:
        return self.kind.filename

    @classmethod
    def from_bytes(cls, data: bytes) -> "CoverAsset":
        """Build a cover from raw image bytes, sniffing the format.

        Raises:
            UnsupportedCoverFormat: If the data is neither PNG nor JPEG
        """
        data = bytes(data)
        return cls(data, sniff_cover_kind(data))

    @classmethod
    def from_archive(cls, filename: str, data: bytes) -> "CoverAsset":
        """Build a cover read from an archive, trusting the filename extension.

        The bytes are not re-sniffed, so a cover accepted when the archive
        was written is never rejected on read.
        """
        return cls(bytes(data), kind_from_filename(filename))
