"""Application layer: the contact store, its port, errors and DTOs. Depends on domain and config only."""

from addressbook.application.binding import StorageBinding
from addressbook.application.contact_store import ContactStore, search_records
from addressbook.application.dto import ContactRow, Snapshot
from addressbook.application.errors import (
    AddressBookError,
    CorruptStore,
    NotFound,
    StoreIOError,
    ValidationError,
)
from addressbook.application.ports import SnapshotStorage

__all__ = [
    "AddressBookError",
    "ContactRow",
    "ContactStore",
    "CorruptStore",
    "NotFound",
    "Snapshot",
    "SnapshotStorage",
    "StorageBinding",
    "StoreIOError",
    "ValidationError",
    "search_records",
]
