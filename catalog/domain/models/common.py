from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BeforeValidator


def as_utc(dt: datetime) -> datetime:
    """Mongo hands back naive datetimes unless the client is tz-aware; they are UTC."""
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


ObjectIdStr = Annotated[str, BeforeValidator(str)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def to_bson_millis(dt: datetime) -> datetime:
    """BSON dates keep milliseconds only; trim so what we return is what gets stored."""
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)
