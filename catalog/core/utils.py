from datetime import date, datetime


def utc_now() -> datetime:
    return datetime.utcnow()


def utc_today() -> date:
    """Calendar date used to stamp history observations."""
    return datetime.utcnow().date()
