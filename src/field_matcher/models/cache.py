"""
Mapping cache entry model.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class CacheEntry(BaseModel):
    """
    Remembered label -> field association.

    Keyed externally by the trimmed raw label.
    """
    field: str
    confidence: float = Field(ge=0.0, le=1.0)
    timestamp: datetime

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_epoch_millis(cls, v):
        """Older blobs store the timestamp as epoch milliseconds."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v

    @field_validator("timestamp")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
