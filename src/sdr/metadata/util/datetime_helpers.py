import datetime
from typing import overload

import dateutil.parser
import pytz


def from_timestamp(ts: float) -> datetime.datetime:
    """Return a UTC datetime object from a timestamp.

    :return: datetime object
    """
    return datetime.datetime.fromtimestamp(ts, tz=pytz.UTC)


@overload
def to_utc(dt: datetime.datetime) -> datetime.datetime: ...


@overload
def to_utc(dt: datetime.datetime | None) -> datetime.datetime | None: ...


def to_utc(dt: datetime.datetime | None) -> datetime.datetime | None:
    """This converts a naive datetime object that represents UTC into
    an aware datetime object.

    :return: datetime object, or None if `dt` was None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=pytz.UTC)
    if dt.tzinfo == pytz.UTC:
        # Already UTC.
        return dt
    return dt.astimezone(pytz.UTC)


def parse_utc(value: str) -> datetime.datetime:
    """Parse a timestamp as found in legacy XML (ISO 8601 with or without
    an offset) into an aware UTC datetime.

    :raise ValueError: If the value is not a recognizable timestamp.
    """
    try:
        parsed = dateutil.parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"'{value}' is not an ISO 8601 timestamp") from e
    return to_utc(parsed)


def format_utc(dt: datetime.datetime) -> str:
    """Format a datetime the way legacy XML stores it: 2021-05-01T10:00:00Z"""
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")
