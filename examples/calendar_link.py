"""
Google Calendar link generator for the calendar example form.

Turns a valid calendar submission into an "add to calendar" URL:

    https://calendar.google.com/calendar/render?action=TEMPLATE&dates=...&text=...

The form layer has already validated the tree, so this only reshapes it.
Times are the HTML datetime-local shape (``2025-10-28T10:00``) and are
treated as UTC.
"""

from datetime import datetime, timedelta
from urllib.parse import urlencode

from schema_form import ValueTree
from schema_form.validation import coerce_boolean

BASE_URL = "https://calendar.google.com/calendar/render"
ACTION = "TEMPLATE"

INPUT_FORMAT = "%Y-%m-%dT%H:%M"
TIME_FORMAT = "%Y%m%dT%H%M%SZ"
DATE_FORMAT = "%Y%m%d"

# Form field -> URL parameter
FIELD_MAPPING = {
    "title": "text",
    "location": "location",
    "description": "details",
}

RECURRENCE_RULES = {
    "daily": "RRULE:FREQ=DAILY",
    "weekly": "RRULE:FREQ=WEEKLY",
    "monthly": "RRULE:FREQ=MONTHLY",
}


def calendar_link(tree: ValueTree) -> str:
    """
    Build a Google Calendar event URL.

    Raises:
        ValueError: If title, start or end is missing or unparseable.
    """
    title = tree.get("title")
    if not isinstance(title, str) or not title:
        raise ValueError("missing or invalid title field")

    start = _parse_time(tree, "start")
    end = _parse_time(tree, "end")

    if coerce_boolean(tree.get("all_day")):
        # All-day events use an exclusive end date
        dates = f"{start:{DATE_FORMAT}}/{end.date() + timedelta(days=1):{DATE_FORMAT}}"
    else:
        dates = f"{start:{TIME_FORMAT}}/{end:{TIME_FORMAT}}"

    params = {"action": ACTION, "dates": dates}
    for field_name, param in FIELD_MAPPING.items():
        value = tree.get(field_name)
        if isinstance(value, str) and value:
            params[param] = value

    rule = RECURRENCE_RULES.get(tree.get("recurrence"))
    if rule:
        params["recur"] = rule

    attendees = [
        attendee["email"]
        for attendee in tree.get("attendees", [])
        if isinstance(attendee, dict) and attendee.get("email")
    ]
    if attendees:
        params["add"] = ",".join(attendees)

    return BASE_URL + "?" + urlencode(sorted(params.items()))


def _parse_time(tree: ValueTree, field_name: str) -> datetime:
    value = tree.get(field_name)
    if not isinstance(value, str) or not value:
        raise ValueError(f"missing or invalid {field_name} field")
    try:
        return datetime.strptime(value, INPUT_FORMAT)
    except ValueError as e:
        raise ValueError(f"invalid {field_name} time format: {e}") from e
