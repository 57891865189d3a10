"""Unit tests for ContactStore. In-memory storage only; no files."""

from pathlib import Path

import pytest

from addressbook.application import (
    ContactStore,
    CorruptStore,
    NotFound,
    Snapshot,
    StoreIOError,
    ValidationError,
)
from addressbook.domain import ContactRecord, Sex
from addressbook.infrastructure import InMemorySnapshotStorage

BOOK = Path("book.dat")


def _store(storage: InMemorySnapshotStorage | None = None) -> ContactStore:
    return ContactStore(storage or InMemorySnapshotStorage(), BOOK)


class FailingWrites(InMemorySnapshotStorage):
    """Loads normally; every save raises StoreIOError while fail is set."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def save(self, location: Path, snapshot: Snapshot) -> None:
        if self.fail:
            raise StoreIOError(location, "write")
        super().save(location, snapshot)


class CorruptAt(InMemorySnapshotStorage):
    def __init__(self, bad: Path) -> None:
        super().__init__()
        self.bad = bad

    def load(self, location: Path) -> Snapshot | None:
        if location == self.bad:
            raise CorruptStore(location, "garbage")
        return super().load(location)


def test_fresh_store_is_empty_with_next_id_one() -> None:
    store = _store()
    assert store.list_all() == []
    assert store.next_id == 1
    assert store.location == BOOK
    assert store.load_error is None


def test_scenario_ids_never_reused() -> None:
    store = _store()
    assert store.add(ContactRecord(name="Alice", sex=Sex.FEMALE)) == 1
    assert store.add(ContactRecord(name="Bob", sex=Sex.MALE)) == 2
    store.remove(1)
    assert store.add(ContactRecord(name="Carol", sex=Sex.FEMALE)) == 3

    listed = store.list_all()
    assert [(r.name, r.id) for r in listed] == [("Bob", 2), ("Carol", 3)]
    assert store.next_id == 4


def test_ids_strictly_increasing_across_removals() -> None:
    store = _store()
    ids = []
    for i in range(5):
        ids.append(store.add(ContactRecord(name=f"P{i}")))
        if i % 2 == 0:
            store.remove(ids[-1])
    ids.append(store.add(ContactRecord(name="last")))
    assert ids == sorted(set(ids))
    assert store.next_id > max(ids)


def test_add_ignores_draft_id() -> None:
    store = _store()
    new_id = store.add(ContactRecord(name="Dave", id=99))
    assert new_id == 1
    assert store.get(1).name == "Dave"


def test_add_empty_name_raises_and_does_not_mutate() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    with pytest.raises(ValidationError):
        store.add(ContactRecord(name=""))
    with pytest.raises(ValidationError):
        store.add(ContactRecord(name="   "))
    assert store.list_all() == []
    assert store.next_id == 1
    assert storage.writes == 0


def test_every_mutation_persists_full_snapshot() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))
    store.add(ContactRecord(name="Bob"))
    store.update(ContactRecord(name="Bobby", id=2))
    store.remove(1)
    assert storage.writes == 4
    saved = storage.load(BOOK)
    assert [r.name for r in saved.contacts] == ["Bobby"]
    assert saved.next_id == 3


def test_update_preserves_position() -> None:
    store = _store()
    store.add(ContactRecord(name="Alice"))
    store.add(ContactRecord(name="Bob"))
    store.add(ContactRecord(name="Carol"))
    store.update(ContactRecord(name="Robert", company="Acme", id=2))
    assert [r.name for r in store.list_all()] == ["Alice", "Robert", "Carol"]
    assert store.get(2).company == "Acme"


def test_update_missing_id_raises_not_found() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))
    before = storage.load(BOOK)
    with pytest.raises(NotFound) as exc:
        store.update(ContactRecord(name="Ghost", id=42))
    assert exc.value.record_id == 42
    assert storage.load(BOOK) is before
    assert storage.writes == 1


def test_update_empty_name_raises_validation_error() -> None:
    store = _store()
    store.add(ContactRecord(name="Alice"))
    with pytest.raises(ValidationError):
        store.update(ContactRecord(name="", id=1))
    assert store.get(1).name == "Alice"


def test_remove_missing_id_raises_not_found() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))
    with pytest.raises(NotFound):
        store.remove(7)
    assert [r.name for r in store.list_all()] == ["Alice"]
    assert storage.writes == 1


def test_get_missing_raises_not_found() -> None:
    with pytest.raises(NotFound):
        _store().get(1)


def test_list_all_returns_independent_copy() -> None:
    store = _store()
    store.add(ContactRecord(name="Alice"))
    listed = store.list_all()
    listed.clear()
    assert len(store.list_all()) == 1


def test_search_matches_name_company_memo_case_insensitive() -> None:
    store = _store()
    store.add(ContactRecord(name="Alice", company="Acme Corp"))
    store.add(ContactRecord(name="Bob", memo="met at ACME party"))
    store.add(ContactRecord(name="Carol", address="Acme street"))
    store.add(ContactRecord(name="acmeson"))

    assert [r.name for r in store.search("acme")] == ["Alice", "Bob", "acmeson"]
    assert [r.name for r in store.search("ALICE")] == ["Alice"]
    assert store.search("nobody") == []


def test_search_empty_keyword_returns_everything() -> None:
    store = _store()
    store.add(ContactRecord(name="Alice"))
    store.add(ContactRecord(name="Bob"))
    assert store.search("") == store.list_all()
    assert store.search(None) == store.list_all()
    assert store.search("   ") == store.list_all()


def test_rows_render_table_columns() -> None:
    from datetime import date

    store = _store()
    store.add(
        ContactRecord(
            name="Alice",
            sex=Sex.FEMALE,
            cell_phone="+8613800000000",
            birthday=date(1990, 5, 1),
        )
    )
    store.add(ContactRecord(name="Bob"))
    rows = store.rows()
    assert rows[0].id == 1
    assert rows[0].sex == "Female"
    assert rows[0].birthday == "1990-05-01"
    assert rows[0].cell_phone == "+8613800000000"
    assert rows[1].sex == "Male"
    assert rows[1].birthday == ""
    assert [r.name for r in store.search_rows("bob")] == ["Bob"]


def test_new_store_on_same_storage_restores_state() -> None:
    storage = InMemorySnapshotStorage()
    first = _store(storage)
    first.add(ContactRecord(name="Alice"))
    first.add(ContactRecord(name="Bob"))
    first.remove(2)

    second = _store(storage)
    assert second.list_all() == first.list_all()
    assert second.next_id == 3
    assert second.add(ContactRecord(name="Carol")) == 3


def test_rebind_to_missing_location_gives_empty_store() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))

    store.rebind("other.dat")
    assert store.location == Path("other.dat")
    assert store.list_all() == []
    assert store.next_id == 1
    assert storage.load(Path("other.dat")) == Snapshot()
    assert len(storage.load(BOOK).contacts) == 1


def test_rebind_back_reloads_previous_contacts() -> None:
    storage = InMemorySnapshotStorage()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))
    store.rebind("other.dat")
    store.add(ContactRecord(name="Zed"))

    store.rebind(BOOK)
    assert [r.name for r in store.list_all()] == ["Alice"]
    assert store.next_id == 2


def test_rebind_corrupt_location_empties_store_and_raises() -> None:
    storage = CorruptAt(Path("bad.dat"))
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))

    with pytest.raises(CorruptStore):
        store.rebind("bad.dat")
    assert store.list_all() == []
    assert store.next_id == 1
    assert store.location == Path("bad.dat")
    assert isinstance(store.load_error, CorruptStore)


def test_construction_on_corrupt_location_records_error() -> None:
    store = ContactStore(CorruptAt(BOOK), BOOK)
    assert store.list_all() == []
    assert isinstance(store.load_error, CorruptStore)


def test_write_failure_raises_and_keeps_memory_ahead_of_disk() -> None:
    storage = FailingWrites()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))

    storage.fail = True
    with pytest.raises(StoreIOError):
        store.add(ContactRecord(name="Bob"))
    assert [r.name for r in store.list_all()] == ["Alice", "Bob"]
    assert store.next_id == 3
    assert [r.name for r in storage.load(BOOK).contacts] == ["Alice"]

    storage.fail = False
    store.add(ContactRecord(name="Carol"))
    assert [r.name for r in storage.load(BOOK).contacts] == ["Alice", "Bob", "Carol"]


def test_write_failure_on_remove_is_not_rolled_back() -> None:
    storage = FailingWrites()
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))
    storage.fail = True
    with pytest.raises(StoreIOError):
        store.remove(1)
    assert store.list_all() == []


class UnreadableAt(InMemorySnapshotStorage):
    def __init__(self, bad: Path) -> None:
        super().__init__()
        self.bad = bad

    def load(self, location: Path) -> Snapshot | None:
        if location == self.bad:
            raise StoreIOError(location, "read")
        return super().load(location)


def test_rebind_write_failure_keeps_reloaded_state() -> None:
    storage = FailingWrites()
    other = Path("other.dat")
    storage.save(
        other,
        Snapshot(contacts=(ContactRecord(name="Zed", id=4),), next_id=6),
    )
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))

    storage.fail = True
    with pytest.raises(StoreIOError):
        store.rebind(other)
    assert store.location == other
    assert [(r.name, r.id) for r in store.list_all()] == [("Zed", 4)]
    assert store.next_id == 6
    assert store.load_error is None

    storage.fail = False
    assert store.add(ContactRecord(name="Yan")) == 6
    assert [r.name for r in storage.load(other).contacts] == ["Zed", "Yan"]


def test_rebind_read_failure_raises_and_empties_store() -> None:
    storage = UnreadableAt(Path("locked.dat"))
    store = _store(storage)
    store.add(ContactRecord(name="Alice"))

    with pytest.raises(StoreIOError) as exc:
        store.rebind("locked.dat")
    assert exc.value is store.load_error
    assert store.location == Path("locked.dat")
    assert store.list_all() == []
    assert store.next_id == 1
    assert storage.load(BOOK).contacts[0].name == "Alice"
