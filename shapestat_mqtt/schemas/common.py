"""
Common Schema Types
===================

Bounded Context: Shared Data Structures

Timestamp: ISO 8601 string, always timezone-aware, validated on creation.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable ISO 8601 timestamp carried on every message.

    Example:
        >>> Timestamp.now().value
        '2025-10-24T15:30:45.123456+00:00'
    """
    value: str

    def __post_init__(self):
        try:
            datetime.fromisoformat(self.value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ISO timestamp: {self.value!r}") from e

    @classmethod
    def now(cls) -> 'Timestamp':
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, dt: datetime) -> 'Timestamp':
        """Wrap a datetime; naive values are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(value=dt.isoformat())

    def to_datetime(self) -> datetime:
        return datetime.fromisoformat(self.value)

    def to_dict(self) -> str:
        """JSON form (the bare string)."""
        return self.value
