from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns of the schema"""
    return datetime.now(UTC).replace(tzinfo=None)
