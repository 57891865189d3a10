"""
Address book core: clean-architecture layout.

- domain: entities (ContactRecord, Sex). No outer dependencies.
- application: ContactStore, StorageBinding, SnapshotStorage port, errors, DTOs.
- infrastructure: adapters (FileSnapshotStorage, InMemorySnapshotStorage), snapshot codec.
"""

from addressbook.application import (
    AddressBookError,
    ContactRow,
    ContactStore,
    CorruptStore,
    NotFound,
    Snapshot,
    SnapshotStorage,
    StorageBinding,
    StoreIOError,
    ValidationError,
)
from addressbook.domain import ContactRecord, Sex
from addressbook.infrastructure import (
    FileSnapshotStorage,
    InMemorySnapshotStorage,
    open_file_store,
)

__all__ = [
    "AddressBookError",
    "ContactRecord",
    "ContactRow",
    "ContactStore",
    "CorruptStore",
    "FileSnapshotStorage",
    "InMemorySnapshotStorage",
    "NotFound",
    "Sex",
    "Snapshot",
    "SnapshotStorage",
    "StorageBinding",
    "StoreIOError",
    "ValidationError",
    "open_file_store",
]
