from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """
    Convert a datetime to aware UTC.

    Naive values are taken to be UTC already; SQLite hands stored timestamps
    back without an offset.

    Raises:
        OverflowError: If the instant falls outside the representable range
            once shifted to UTC (e.g. 9999-12-31T23:00:00-05:00).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
