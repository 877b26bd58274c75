from datetime import datetime, timezone


def as_utc(dt: datetime | None) -> datetime | None:
    """
    Return the datetime as an aware UTC value.

    Naive values are taken to be UTC already, which is what SQLite hands back
    for columns written as UTC. Aware values are converted.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
