from datetime import datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Accept either a datetime or its ISO-8601 rendering from the JSON API."""
    if isinstance(value, datetime):
        return to_naive_utc(value)
    return to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def format_submission_time(value: Union[str, datetime]) -> str:
    return parse_timestamp(value).strftime("%Y-%m-%d %H:%M:%S")
