"""
String format validators.

Each validator applies an exact rule: no flexible parsing, any lexical
deviation is a format error. Calendar checks run after the lexical match
so that ``2025-13-40T99:99`` fails even though its shape is right.
"""

import re
from collections.abc import Callable
from datetime import datetime

from schema_form.models.data_schema import StringFormat

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")
DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")

# Recognized URI scheme prefixes
URI_SCHEMES = ("http://", "https://", "ftp://", "ftps://", "mailto:", "tel:", "webcal://")


def _matches_calendar(value: str, pattern: re.Pattern, layout: str) -> bool:
    if not pattern.match(value):
        return False
    try:
        datetime.strptime(value, layout)
    except ValueError:
        return False
    return True


def is_date(value: str) -> bool:
    """``YYYY-MM-DD`` naming a real calendar day."""
    return _matches_calendar(value, DATE_PATTERN, "%Y-%m-%d")


def is_time(value: str) -> bool:
    """``HH:MM`` on a 24-hour clock."""
    return _matches_calendar(value, TIME_PATTERN, "%H:%M")


def is_datetime(value: str) -> bool:
    """``YYYY-MM-DDTHH:MM`` (the HTML datetime-local shape)."""
    return _matches_calendar(value, DATETIME_PATTERN, "%Y-%m-%dT%H:%M")


def is_email(value: str) -> bool:
    """Exactly one ``@`` with non-empty local and domain parts."""
    if value.count("@") != 1:
        return False
    local, domain = value.split("@")
    return bool(local) and bool(domain)


def is_uri(value: str) -> bool:
    """A recognized scheme prefix followed by something."""
    lowered = value.lower()
    for scheme in URI_SCHEMES:
        if lowered.startswith(scheme):
            return len(value) > len(scheme)
    return False


FORMAT_VALIDATORS: dict[StringFormat, Callable[[str], bool]] = {
    StringFormat.DATE: is_date,
    StringFormat.TIME: is_time,
    StringFormat.DATETIME: is_datetime,
    StringFormat.EMAIL: is_email,
    StringFormat.URI: is_uri,
}


def check_format(value: str, fmt: StringFormat | None) -> bool:
    """Whether ``value`` satisfies ``fmt``. Plain and unset formats always pass."""
    if fmt is None or fmt is StringFormat.PLAIN:
        return True
    return FORMAT_VALIDATORS[fmt](value)
