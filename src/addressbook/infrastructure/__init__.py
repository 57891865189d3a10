"""Infrastructure layer: concrete implementations of application ports and field helpers."""

from addressbook.infrastructure.dates import parse_birthday
from addressbook.infrastructure.file_storage import FileSnapshotStorage, open_file_store
from addressbook.infrastructure.memory_storage import InMemorySnapshotStorage
from addressbook.infrastructure.phone import normalize_phone_columns, normalize_phone_field
from addressbook.infrastructure.snapshot_codec import (
    FORMAT_VERSION,
    SnapshotFormatError,
    decode_snapshot,
    encode_snapshot,
)

__all__ = [
    "FORMAT_VERSION",
    "FileSnapshotStorage",
    "InMemorySnapshotStorage",
    "SnapshotFormatError",
    "decode_snapshot",
    "encode_snapshot",
    "normalize_phone_columns",
    "normalize_phone_field",
    "open_file_store",
    "parse_birthday",
]
