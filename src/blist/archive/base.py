"""Base abstraction for archive containers.

A playlist archive is treated as a keyed byte store: named entries that can
be read, written and deleted, then serialized back into a single blob. The
playlist codec only talks to this interface, so any container format that
can offer it may back a playlist.
"""

from abc import ABC, abstractmethod


class ArchiveStore(ABC):
    """Abstract base class for in-memory archive containers.

    Implementations hold every entry they were loaded with, so entries the
    codec never reads survive a load-modify-save round trip unchanged.
    Instances are not safe for concurrent use.
    """

    @classmethod
    @abstractmethod
    def from_bytes(cls, data: bytes) -> "ArchiveStore":
        """Open a serialized archive.

        Args:
            data: Serialized archive contents

        Returns:
            Store holding every entry of the archive

        Raises:
            ArchiveCorrupt: If the container structure is unreadable
        """
        pass

    @abstractmethod
    def read(self, name: str) -> bytes | None:
        """Read an entry.

        Args:
            name: Entry name inside the archive

        Returns:
            The entry's bytes, or None if there is no such entry
        """
        pass

    @abstractmethod
    def write(self, name: str, data: bytes) -> None:
        """Create or replace an entry.

        Args:
            name: Entry name inside the archive
            data: New contents of the entry
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove an entry. Removing a missing entry does nothing.

        Args:
            name: Entry name inside the archive
        """
        pass

    @abstractmethod
    def names(self) -> list[str]:
        """List entry names in archive order."""
        pass

    @abstractmethod
    def serialize(self) -> bytes:
        """Serialize every entry into a single archive blob."""
        pass

    def __contains__(self, name: object) -> bool:
        return name in self.names()
