"""Zip-backed archive store."""

import io
import logging
import time
import zipfile
import zlib

from ..errors import ArchiveCorrupt
from .base import ArchiveStore

logger = logging.getLogger(__name__)


def _copy_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    """Fresh ZipInfo carrying the metadata worth preserving.

    ZipFile.writestr fills in sizes and offsets on the object it is given,
    so a stored info is never handed to it directly.
    """
    copy = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    copy.compress_type = info.compress_type
    copy.external_attr = info.external_attr
    copy.create_system = info.create_system
    copy.comment = info.comment
    return copy


class ZipArchiveStore(ArchiveStore):
    """In-memory zip archive.

    Entries are decompressed once when the archive is opened and kept with
    their original zip metadata. Entries that are never written again are
    re-emitted with the same timestamp, compression method and attributes.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[zipfile.ZipInfo, bytes]] = {}
        self.comment = b""

    @classmethod
    def from_bytes(cls, data: bytes) -> "ZipArchiveStore":
        store = cls()
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                store.comment = zf.comment
                for info in zf.infolist():
                    store._entries[info.filename] = (info, zf.read(info))
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            EOFError,
            NotImplementedError,  # unsupported compression method
            RuntimeError,  # encrypted entry
            ValueError,  # bad offsets, undecodable entry names
            OSError,
        ) as e:
            raise ArchiveCorrupt("Unreadable zip archive", str(e)) from e

        logger.debug("Opened zip archive with %d entries", len(store._entries))
        return store

    def read(self, name: str) -> bytes | None:
        entry = self._entries.get(name)
        return entry[1] if entry is not None else None

    def write(self, name: str, data: bytes) -> None:
        info = zipfile.ZipInfo(name, date_time=time.localtime()[:6])
        info.compress_type = zipfile.ZIP_DEFLATED
        # -rw-r--r--
        info.external_attr = 0o644 << 16
        self._entries[name] = (info, bytes(data))

    def delete(self, name: str) -> None:
        self._entries.pop(name, None)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def serialize(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.comment = self.comment
            for info, data in self._entries.values():
                zf.writestr(_copy_info(info), data)
        return buffer.getvalue()
