from datetime import UTC, datetime, time


def as_utc(value, end_of_day=False):
    """Normalise a date or datetime filter bound to an aware UTC datetime.

    A bare date covers the whole day, so an upper bound moves to its last instant.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max if end_of_day else time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value
