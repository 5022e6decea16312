"""Unit tests for event timestamp coercion."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from core.errors import EnrichTimestampError
from core.timestamp import EventTimestamp


def test_coerce_parses_zulu_string_with_milliseconds() -> None:
    """ISO-8601 strings with a Z suffix should round to the same rendering."""
    timestamp = EventTimestamp.coerce("2013-10-19T00:14:32.996Z")

    assert timestamp.to_iso() == "2013-10-19T00:14:32.996Z"


def test_coerce_normalizes_offsets_to_utc() -> None:
    """Offset timestamps should be converted to UTC."""
    timestamp = EventTimestamp.coerce("2013-10-19T02:14:32+02:00")

    assert str(timestamp) == "2013-10-19T00:14:32.000Z"


def test_coerce_treats_naive_datetime_as_utc() -> None:
    """Naive datetimes should be interpreted as UTC."""
    timestamp = EventTimestamp.coerce(datetime(2020, 1, 2, 3, 4, 5))

    assert timestamp.instant == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_coerce_accepts_date_as_midnight() -> None:
    """Dates should map to midnight UTC."""
    timestamp = EventTimestamp.coerce(date(2020, 1, 2))

    assert timestamp.to_iso() == "2020-01-02T00:00:00.000Z"


def test_coerce_returns_existing_timestamp_unchanged() -> None:
    """Coercing a timestamp should be the identity."""
    timestamp = EventTimestamp.now()

    assert EventTimestamp.coerce(timestamp) is timestamp


@pytest.mark.parametrize("value", ["not-a-date", "", 1382141672, ["2013-10-19"], None])
def test_coerce_rejects_unsupported_values(value: object) -> None:
    """Unrecognized formats and types should raise a timestamp error."""
    with pytest.raises(EnrichTimestampError):
        EventTimestamp.coerce(value)


def test_now_is_close_to_wall_clock() -> None:
    """now() should return the current UTC time."""
    before = datetime.now(timezone.utc)
    timestamp = EventTimestamp.now()

    assert before <= timestamp.instant <= before + timedelta(seconds=5)


@pytest.mark.parametrize(
    "value",
    [
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:59:59-01:00",
        datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-1))),
    ],
)
def test_coerce_rejects_instants_outside_utc_range(value: object) -> None:
    """Offsets that push the instant past the calendar bounds are timestamp errors."""
    with pytest.raises(EnrichTimestampError):
        EventTimestamp.coerce(value)


def test_to_iso_pads_early_years() -> None:
    """Years below 1000 should render with four digits."""
    timestamp = EventTimestamp.coerce("0001-01-01T00:00:00Z")

    assert timestamp.to_iso() == "0001-01-01T00:00:00.000Z"
