from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps in the data file are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Base(BaseModel):
    # Persisted and wire names are camelCase (posterId, createdAt, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
