# saarthi/helpers.py
from datetime import date, datetime


def is_number(value) -> bool:
    # bool is an int subclass; JSON true/false is never a score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_datetime(value) -> datetime:
    """
    Parse an ISO-8601 string into a naive local datetime.

    Offsets (including a trailing "Z") are converted to the server's local zone
    so stored dates share one calendar. Raises ValueError on bad input.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid date: {value!r}")
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_date(value) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_datetime(value).date()
