"""Errors raised by the contact store. The caller (UI) decides how to report them."""

from pathlib import Path


class AddressBookError(Exception):
    """Base class for every classified address book failure."""


class ValidationError(AddressBookError):
    """A required field is missing. No mutation happened."""


class NotFound(AddressBookError):
    """No contact with the given id. No mutation happened."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"No contact with id {record_id}.")
        self.record_id = record_id


class CorruptStore(AddressBookError):
    """The bound location holds content that is not a valid snapshot."""

    def __init__(self, location: Path, reason: str) -> None:
        super().__init__(f"Snapshot at {location} is unreadable: {reason}")
        self.location = location
        self.reason = reason


class StoreIOError(AddressBookError):
    """Reading or writing the bound location failed at the OS level."""

    def __init__(self, location: Path, action: str) -> None:
        super().__init__(f"Could not {action} snapshot at {location}.")
        self.location = location
        self.action = action
