"""Normalization of the address book's phone columns (home, office, fax, cell)."""

import phonenumbers

from addressbook.domain import PHONE_FIELDS


def normalize_phone_field(raw: str | None, default_region: str | None = None) -> str:
    """E.164 form of a phone column when it parses as a valid number.

    Anything else (extensions, internal short numbers, free text) is kept as
    typed, only stripped. Numbers without a leading + need default_region.
    """
    value = (raw or "").strip()
    if not value:
        return ""
    try:
        parsed = phonenumbers.parse(value, default_region)
    except phonenumbers.NumberParseException:
        return value
    if not phonenumbers.is_valid_number(parsed):
        return value
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def normalize_phone_columns(
    fields: dict[str, str], default_region: str | None = None
) -> dict[str, str]:
    """Copy of fields with every phone column normalized; other columns untouched."""
    out = dict(fields)
    for name in PHONE_FIELDS:
        if name in out:
            out[name] = normalize_phone_field(out[name], default_region)
    return out
