"""Identifier and timestamp helpers."""

import secrets
import string
from datetime import datetime, timezone

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 12


def random_string(length: int = _ID_LENGTH) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def new_note_id() -> str:
    return random_string()


def new_branch_id() -> str:
    return random_string()


def new_note_revision_id() -> str:
    return random_string()


def new_note_image_id() -> str:
    return random_string()


def new_label_id() -> str:
    return random_string()


def now() -> datetime:
    return datetime.now(timezone.utc)


def date_str(date: datetime) -> str:
    """Format a datetime as a fixed-width UTC timestamp.

    The format is ``YYYY-MM-DDTHH:MM:SS.mmmZ``. Every value has the same width,
    so comparing two formatted timestamps as strings agrees with comparing
    the instants they represent.

    Args:
        date: Timezone-aware datetime. Naive datetimes are assumed to be UTC.

    Returns:
        Formatted timestamp string.
    """
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    date = date.astimezone(timezone.utc)
    return date.strftime("%Y-%m-%dT%H:%M:%S.") + f"{date.microsecond // 1000:03d}Z"


def now_date() -> str:
    return date_str(now())


def parse_date_time(value: str) -> datetime:
    """Parse a timestamp produced by :func:`date_str`."""
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc)
