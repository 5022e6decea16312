"""Unit tests for JSON Lines event input and output."""

from __future__ import annotations

from datetime import date, datetime, timezone
import io
import json
from pathlib import Path

import pytest

from core.errors import EnrichIngestError
from core.event import Event
from ingest.event_io import event_to_payload, read_events, write_events
from tests.fixture_paths import fixture_path


def test_read_events_skips_blank_lines() -> None:
    """Reader should load one event per non-blank line."""
    events = read_events(str(fixture_path("events/messages.jsonl")))

    assert [event.get("type") for event in events] == ["greeting", "broken", "audit", "no-source"]


def test_read_events_raises_for_invalid_json() -> None:
    """Reader should fail with the offending line number."""
    with pytest.raises(EnrichIngestError, match="bad_line.jsonl:2"):
        read_events(str(fixture_path("events/bad_line.jsonl")))


def test_read_events_raises_for_non_object_rows() -> None:
    """Each JSONL row must be an object."""
    with pytest.raises(EnrichIngestError):
        read_events(str(fixture_path("events/not_an_object.jsonl")))


def test_read_events_raises_for_missing_path(tmp_path: Path) -> None:
    """Reader should fail when the input file is missing."""
    missing_path = tmp_path / "does-not-exist.jsonl"

    with pytest.raises(EnrichIngestError):
        read_events(str(missing_path))

    assert missing_path.exists() is False


def test_read_events_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """A '-' source should read JSONL from stdin."""
    monkeypatch.setattr("sys.stdin", io.StringIO('{"message": "a: 1"}\n'))

    events = read_events("-")

    assert len(events) == 1 and events[0].get("message") == "a: 1"


def test_event_to_payload_renders_temporal_values_as_text() -> None:
    """Timestamps, datetimes, and dates should serialize as ISO strings."""
    event = Event(
        {
            "@timestamp": "2013-10-19T00:14:32.996Z",
            "doc": {
                "at": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
                "day": date(2020, 1, 2),
            },
        }
    )

    payload = event_to_payload(event)

    assert payload == {
        "@timestamp": "2013-10-19T00:14:32.996Z",
        "doc": {"at": "2020-01-02T03:04:05.000Z", "day": "2020-01-02"},
    }
    assert json.loads(json.dumps(payload)) == payload


def test_write_events_creates_parent_directories(tmp_path: Path) -> None:
    """Writer should create the output directory and one line per event."""
    output_path = tmp_path / "nested" / "out.jsonl"

    count = write_events([Event({"a": 1}), Event({"b": 2})], str(output_path))

    rows = [json.loads(line) for line in output_path.read_text(encoding="utf-8").splitlines()]
    assert count == 2 and [row.get("a", row.get("b")) for row in rows] == [1, 2]
