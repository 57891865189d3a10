"""In-memory implementation of SnapshotStorage (no files)."""

from pathlib import Path

from addressbook.application import Snapshot


class InMemorySnapshotStorage:
    """Keeps one snapshot per location in a dict. Snapshots are immutable, so no copying."""

    def __init__(self) -> None:
        self._by_location: dict[Path, Snapshot] = {}
        self.writes = 0

    def load(self, location: Path) -> Snapshot | None:
        return self._by_location.get(Path(location))

    def save(self, location: Path, snapshot: Snapshot) -> None:
        self._by_location[Path(location)] = snapshot
        self.writes += 1
