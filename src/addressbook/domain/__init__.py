"""Domain layer: entities and value objects. No dependencies on outer layers."""

from addressbook.domain.entities import PHONE_FIELDS, TEXT_FIELDS, ContactRecord, Sex

__all__ = ["PHONE_FIELDS", "TEXT_FIELDS", "ContactRecord", "Sex"]
