"""Domain entities: Sex and ContactRecord."""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


class Sex(Enum):
    MALE = "male"
    FEMALE = "female"

    @property
    def label(self) -> str:
        return "Male" if self is Sex.MALE else "Female"


@dataclass(frozen=True)
class ContactRecord:
    """
    One entry of the address book.
    Only name is required; validation belongs to the store, not the record.
    id is 0 for a draft and assigned exactly once when the store adds it.
    """

    name: str
    sex: Sex = Sex.MALE
    id: int = 0
    address: str = ""
    company: str = ""
    postal_code: str = ""
    home_phone: str = ""
    office_phone: str = ""
    fax: str = ""
    cell_phone: str = ""
    email: str = ""
    instant_messenger: str = ""
    birthday: date | None = None
    memo: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} ({self.sex.label})"

    def with_id(self, record_id: int) -> "ContactRecord":
        return replace(self, id=record_id)


# Optional free-text fields, in table column order.
TEXT_FIELDS = (
    "address",
    "company",
    "postal_code",
    "home_phone",
    "office_phone",
    "fax",
    "cell_phone",
    "email",
    "instant_messenger",
)

PHONE_FIELDS = ("home_phone", "office_phone", "fax", "cell_phone")
