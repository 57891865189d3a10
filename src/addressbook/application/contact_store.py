"""Contact store: ordered records, monotonic ids, whole-snapshot persistence."""

import logging
from pathlib import Path

from addressbook.application.binding import StorageBinding
from addressbook.application.dto import ContactRow, Snapshot
from addressbook.application.errors import (
    AddressBookError,
    CorruptStore,
    NotFound,
    StoreIOError,
    ValidationError,
)
from addressbook.application.ports import SnapshotStorage
from addressbook.config import DEFAULT_FILE
from addressbook.domain import ContactRecord

logger = logging.getLogger(__name__)


def search_records(
    records: list[ContactRecord], keyword: str | None
) -> list[ContactRecord]:
    """Records whose name, company or memo contains keyword (case-insensitive).

    An empty or missing keyword matches everything. Order is preserved.
    """
    needle = (keyword or "").strip().lower()
    if not needle:
        return list(records)
    return [
        r
        for r in records
        if needle in r.name.lower()
        or needle in r.company.lower()
        or needle in r.memo.lower()
    ]


class ContactStore:
    """Owns the contact list and its id counter; persists after every mutation.

    Each successful add/update/remove/rebind writes the whole snapshot. When a
    write fails the in-memory change stays applied and StoreIOError is raised,
    so memory and disk differ until the next successful write.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        location: str | Path = DEFAULT_FILE,
    ) -> None:
        self._storage = storage
        self._records: list[ContactRecord] = []
        self._next_id = 1
        self.load_error: AddressBookError | None = None
        self._binding = StorageBinding(location)
        self._reload(self._binding.current)

    @property
    def location(self) -> Path:
        return self._binding.current

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._records)

    def add(self, draft: ContactRecord) -> int:
        """Assign the next id, append and persist. Returns the new id."""
        self._validate(draft)
        record_id = self._next_id
        self._next_id += 1
        self._records.append(draft.with_id(record_id))
        self._persist()
        return record_id

    def remove(self, record_id: int) -> None:
        index = self._index_of(record_id)
        del self._records[index]
        self._persist()

    def update(self, record: ContactRecord) -> None:
        """Replace the record with the same id, keeping its position."""
        self._validate(record)
        index = self._index_of(record.id)
        self._records[index] = record
        self._persist()

    def get(self, record_id: int) -> ContactRecord:
        return self._records[self._index_of(record_id)]

    def list_all(self) -> list[ContactRecord]:
        return list(self._records)

    def search(self, keyword: str | None) -> list[ContactRecord]:
        return search_records(self._records, keyword)

    def rows(self) -> list[ContactRow]:
        return [ContactRow.from_record(r) for r in self._records]

    def search_rows(self, keyword: str | None) -> list[ContactRow]:
        return [ContactRow.from_record(r) for r in self.search(keyword)]

    def rebind(self, location: str | Path) -> None:
        """Persist to location from now on, replacing memory with what is there.

        A missing location gives an empty store (next id 1) and writes it out.
        On CorruptStore or StoreIOError the store is left empty and the error
        is raised.
        """
        if not self._binding.swap(location, self._reload):
            raise self.load_error
        logger.info("Rebound contact store to %s (%d contacts)", location, len(self))
        self._persist()

    def snapshot(self) -> Snapshot:
        return Snapshot(contacts=tuple(self._records), next_id=self._next_id)

    def _reload(self, location: Path) -> bool:
        self._records = []
        self._next_id = 1
        self.load_error = None
        try:
            loaded = self._storage.load(location)
        except (CorruptStore, StoreIOError) as e:
            logger.error("Loading contacts from %s failed: %s", location, e)
            self.load_error = e
            return False
        if loaded is None:
            logger.info("No snapshot at %s; starting empty", location)
            return True
        self._records = list(loaded.contacts)
        self._next_id = loaded.next_id
        logger.info("Loaded %d contacts from %s", len(self._records), location)
        return True

    def _persist(self) -> None:
        try:
            self._storage.save(self.location, self.snapshot())
        except StoreIOError:
            logger.warning(
                "Snapshot write to %s failed; in-memory state is ahead of disk",
                self.location,
            )
            raise

    def _index_of(self, record_id: int) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        raise NotFound(record_id)

    @staticmethod
    def _validate(record: ContactRecord) -> None:
        if not record.name or not record.name.strip():
            raise ValidationError("Contact name must be non-empty.")
