"""Snapshot and table-row types exchanged with adapters and the UI."""

from dataclasses import dataclass

from addressbook.domain import ContactRecord


@dataclass(frozen=True)
class Snapshot:
    """Complete persisted state: ordered records plus the id counter."""

    contacts: tuple[ContactRecord, ...] = ()
    next_id: int = 1


@dataclass(frozen=True)
class ContactRow:
    """One contact rendered for tabular display. Every column is text except id."""

    id: int
    name: str
    sex: str
    address: str
    company: str
    postal_code: str
    home_phone: str
    office_phone: str
    fax: str
    cell_phone: str
    email: str
    instant_messenger: str
    birthday: str
    memo: str

    @classmethod
    def from_record(cls, record: ContactRecord) -> "ContactRow":
        return cls(
            id=record.id,
            name=record.name,
            sex=record.sex.label,
            address=record.address,
            company=record.company,
            postal_code=record.postal_code,
            home_phone=record.home_phone,
            office_phone=record.office_phone,
            fax=record.fax,
            cell_phone=record.cell_phone,
            email=record.email,
            instant_messenger=record.instant_messenger,
            birthday=record.birthday.isoformat() if record.birthday else "",
            memo=record.memo,
        )
