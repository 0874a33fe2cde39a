from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _stored_date(value: Any) -> Any:
    """Parse the date part of stored text; keep legacy text that is not a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return text
    return value


# Optional text with surrounding whitespace removed; blank becomes None.
Text = Annotated[str | None, BeforeValidator(_blank_to_none)]

# Date column as written by older clients: ISO dates, timestamps or free text.
StoredDate = Annotated[date | str | None, BeforeValidator(_stored_date)]
