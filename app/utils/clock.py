from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.
    pymongo hands back naive UTC datetimes, so everything compared against
    stored timestamps stays naive.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
