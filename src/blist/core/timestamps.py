"""RFC-3339 conversion for entry timestamps."""

import re
from datetime import datetime, timedelta, timezone

RFC3339_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC-3339 timestamp into an aware UTC datetime.

    Only the RFC-3339 profile of ISO 8601 is accepted: extended date and
    time with seconds and an explicit offset. A leap second (``:60``) is
    clamped to ``:59`` since datetime cannot represent it. Fractions
    beyond microseconds are truncated.

    Raises:
        ValueError: If the text is not a valid RFC-3339 timestamp
    """
    match = RFC3339_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"Not an RFC-3339 timestamp: {text!r}")

    year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
    fraction, zulu, sign, offset_hours, offset_minutes = match.group(7, 8, 9, 10, 11)

    if second == 60:
        second = 59
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    if zulu:
        tz = timezone.utc
    else:
        if int(offset_minutes) > 59:
            raise ValueError(f"Invalid UTC offset in timestamp: {text!r}")
        offset = timedelta(hours=int(offset_hours), minutes=int(offset_minutes))
        tz = timezone(-offset if sign == "-" else offset)

    # Out-of-range fields raise ValueError here
    parsed = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {text!r}") from e


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC-3339 text with second precision, e.g. 2021-03-04T05:06:07Z."""
    return ensure_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")
