"""Application ports (interfaces). Implemented by infrastructure adapters."""

from pathlib import Path
from typing import Protocol

from addressbook.application.dto import Snapshot


class SnapshotStorage(Protocol):
    """Reads and writes whole-store snapshots at a location."""

    def load(self, location: Path) -> Snapshot | None:
        """Return the snapshot at location, or None if nothing exists there yet.

        Raises CorruptStore for unparseable content, StoreIOError for read failures.
        """
        ...

    def save(self, location: Path, snapshot: Snapshot) -> None:
        """Overwrite location with snapshot. Raises StoreIOError on failure."""
        ...
