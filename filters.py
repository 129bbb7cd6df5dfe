from __future__ import annotations
import datetime
from dateutil import parser as date_parser

def _utc(value) -> datetime.datetime:
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("empty date string")
        try:
            value = date_parser.isoparse(raw)
        except (ValueError, OverflowError):
            try:
                value = date_parser.parse(raw)
            except (ValueError, OverflowError) as e:
                raise ValueError(f"unparsable date: {value!r}") from e
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, datetime.date):
        dt = datetime.datetime.combine(value, datetime.time.min)
    else:
        raise ValueError(f"not a date: {value!r}")
    # naive values are taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)

def date_iso(value) -> str:
    return _utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def date_readable(value) -> str:
    dt = _utc(value)
    return f"{dt:%B} {dt.day}, {dt.year}"  # e.g. May 31, 2019
