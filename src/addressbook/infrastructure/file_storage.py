"""File-backed SnapshotStorage. One JSON snapshot per file, replaced atomically."""

import logging
import os
import tempfile
from pathlib import Path

from addressbook.application import ContactStore, CorruptStore, Snapshot, StoreIOError
from addressbook.config import DEFAULT_FILE
from addressbook.infrastructure.snapshot_codec import (
    SnapshotFormatError,
    decode_snapshot,
    encode_snapshot,
)

logger = logging.getLogger(__name__)


class FileSnapshotStorage:
    """Reads and writes snapshots as files.

    Each save writes its own temp file in the target directory and renames it
    over the target, so a reader never sees a half-written snapshot and two
    saves never share a temp file. No locking across stores: two stores bound
    to the same file will overwrite each other.
    """

    def load(self, location: Path) -> Snapshot | None:
        if not location.exists():
            return None
        try:
            raw = location.read_bytes()
        except OSError as e:
            raise StoreIOError(location, "read") from e
        try:
            return decode_snapshot(raw)
        except SnapshotFormatError as e:
            raise CorruptStore(location, str(e)) from e

    def save(self, location: Path, snapshot: Snapshot) -> None:
        tmp: str | None = None
        try:
            location.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=location.parent, prefix=f".{location.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(encode_snapshot(snapshot))
            os.replace(tmp, location)
        except OSError as e:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
            raise StoreIOError(location, "write") from e
        logger.debug("Wrote %d contacts to %s", len(snapshot.contacts), location)


def open_file_store(location: str | Path = DEFAULT_FILE) -> ContactStore:
    """ContactStore persisting to a file, loaded from it if present."""
    return ContactStore(FileSnapshotStorage(), location)
