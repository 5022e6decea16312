"""Event timestamp value type.

This module defines the immutable UTC instant carried in ``@timestamp``
and the coercion rules that turn decoded values into it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from core.errors import EnrichTimestampError


@dataclass(frozen=True, order=True)
class EventTimestamp:
    """Timezone-aware UTC instant.

    Attributes:
        instant: Aware datetime normalized to UTC.
    """

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            object.__setattr__(self, "instant", self.instant.replace(tzinfo=timezone.utc))
        else:
            object.__setattr__(self, "instant", self.instant.astimezone(timezone.utc))

    @classmethod
    def now(cls) -> "EventTimestamp":
        """Return the current wall-clock time."""
        return cls(datetime.now(timezone.utc))

    @classmethod
    def coerce(cls, value: object) -> "EventTimestamp":
        """Coerce a decoded value into an event timestamp.

        Args:
            value: Timestamp, datetime, date, or ISO-8601 string.

        Returns:
            Parsed timestamp.

        Raises:
            EnrichTimestampError: If the value type or format is unsupported.
        """
        if isinstance(value, EventTimestamp):
            return value
        if isinstance(value, datetime):
            instant = value
        elif isinstance(value, date):
            instant = datetime.combine(value, time.min)
        elif isinstance(value, str):
            instant = _parse_iso8601(value)
        else:
            raise EnrichTimestampError(
                f"Unsupported timestamp value of type {type(value).__name__}: {value!r}."
            )
        try:
            return cls(instant)
        except (OverflowError, ValueError) as error:
            raise EnrichTimestampError(
                f"Timestamp {value!r} is outside the representable UTC range."
            ) from error

    def to_iso(self) -> str:
        """Render as ISO-8601 with millisecond precision and a ``Z`` suffix."""
        return self.instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def __str__(self) -> str:
        return self.to_iso()


def _parse_iso8601(raw_value: str) -> datetime:
    text = raw_value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as error:
        raise EnrichTimestampError(
            f"Unrecognized timestamp format: {raw_value!r}. Use ISO-8601 like "
            "'2013-10-19T00:14:32.996Z'."
        ) from error
