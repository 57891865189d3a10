"""Versioned JSON encoding of store snapshots.

Layout: {"format": "addressbook", "version": 1, "next_id": N, "contacts": [...]}.
Each contact is an object of named fields; missing optional fields decode to
empty values and unknown fields are ignored, so older and newer writers of the
same version can read each other.
"""

import json
from datetime import date
from typing import Any

from addressbook.application.dto import Snapshot
from addressbook.domain import TEXT_FIELDS, ContactRecord, Sex

FORMAT_NAME = "addressbook"
FORMAT_VERSION = 1


class SnapshotFormatError(ValueError):
    """Content is not a snapshot this version can read."""


def encode_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(
        {
            "format": FORMAT_NAME,
            "version": FORMAT_VERSION,
            "next_id": snapshot.next_id,
            "contacts": [_record_to_dict(r) for r in snapshot.contacts],
        },
        ensure_ascii=False,
        indent=2,
    )


def decode_snapshot(raw: bytes | str) -> Snapshot:
    """Parse and validate a snapshot. Raises SnapshotFormatError."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        obj = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise SnapshotFormatError(f"not valid UTF-8 JSON ({e})") from e
    if not isinstance(obj, dict) or obj.get("format") != FORMAT_NAME:
        raise SnapshotFormatError("not an address book snapshot")
    version = obj.get("version")
    if version != FORMAT_VERSION:
        raise SnapshotFormatError(f"unsupported snapshot version {version!r}")

    items = obj.get("contacts")
    if not isinstance(items, list):
        raise SnapshotFormatError("contacts must be a list")
    records = [_record_from_dict(item) for item in items]

    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise SnapshotFormatError(f"duplicate contact id {record.id}")
        seen.add(record.id)

    next_id = obj.get("next_id")
    if not _is_int(next_id) or next_id < 1:
        raise SnapshotFormatError("next_id must be a positive integer")
    if seen and next_id <= max(seen):
        raise SnapshotFormatError(
            f"next_id {next_id} is not greater than every contact id"
        )
    return Snapshot(contacts=tuple(records), next_id=next_id)


def _record_to_dict(record: ContactRecord) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": record.id,
        "name": record.name,
        "sex": record.sex.value,
    }
    for name in TEXT_FIELDS:
        out[name] = getattr(record, name)
    out["birthday"] = record.birthday.isoformat() if record.birthday else None
    out["memo"] = record.memo
    return out


def _record_from_dict(item: Any) -> ContactRecord:
    if not isinstance(item, dict):
        raise SnapshotFormatError("contact entry must be an object")
    record_id = item.get("id")
    if not _is_int(record_id) or record_id < 1:
        raise SnapshotFormatError(f"invalid contact id {record_id!r}")
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SnapshotFormatError(f"contact {record_id} has no name")
    try:
        sex = Sex(item.get("sex", Sex.MALE.value))
    except ValueError as e:
        raise SnapshotFormatError(f"contact {record_id} has unknown sex") from e

    text = {n: _text(item, n, record_id) for n in TEXT_FIELDS}
    birthday = item.get("birthday")
    if birthday in (None, ""):
        birthday = None
    else:
        try:
            birthday = date.fromisoformat(birthday)
        except (TypeError, ValueError) as e:
            raise SnapshotFormatError(
                f"contact {record_id} has invalid birthday {birthday!r}"
            ) from e
    return ContactRecord(
        id=record_id,
        name=name,
        sex=sex,
        birthday=birthday,
        memo=_text(item, "memo", record_id),
        **text,
    )


def _text(item: dict, name: str, record_id: int) -> str:
    value = item.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SnapshotFormatError(f"contact {record_id} field {name} must be text")
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
