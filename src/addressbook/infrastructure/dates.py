"""Birthday field parsing for UI input."""

from datetime import date


def parse_birthday(text: str | None) -> date | None:
    """YYYY-MM-DD to date; blank input means no birthday. Raises ValueError otherwise."""
    value = (text or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Birthday must be YYYY-MM-DD, got {value!r}.") from e

