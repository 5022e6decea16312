"""JSON Lines readers and writers for events.

This module loads events from local JSONL files or stdin and serializes
processed events back to JSON-safe payloads.
"""

from __future__ import annotations

from datetime import date, datetime
import json
from pathlib import Path
import sys
from typing import Any, Iterable, TextIO

from core.constants import STDIO_PATH
from core.errors import EnrichIngestError
from core.event import Event
from core.timestamp import EventTimestamp


def read_events(source: str) -> list[Event]:
    """Load events from a JSONL file, or stdin for ``-``.

    Args:
        source: Local JSONL path or ``-``.

    Returns:
        Ordered list of events.

    Raises:
        EnrichIngestError: If the source is missing or has invalid lines.
    """
    if source == STDIO_PATH:
        return _parse_event_lines("<stdin>", sys.stdin.read().splitlines())
    source_path = Path(source).expanduser()
    if not source_path.is_file():
        raise EnrichIngestError(
            f"Failed to read events at {source_path}: file does not exist. "
            "Provide an existing JSONL file or '-' for stdin."
        )
    try:
        lines = source_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as error:
        raise EnrichIngestError(f"Failed to read events at {source_path}: {error}.") from error
    return _parse_event_lines(str(source_path), lines)


def write_events(events: Iterable[Event], destination: str) -> int:
    """Write events as JSON Lines to a file, or stdout for ``-``.

    Args:
        events: Events to serialize.
        destination: Output path or ``-``.

    Returns:
        Number of events written.

    Raises:
        EnrichIngestError: If the destination cannot be written.
    """
    if destination == STDIO_PATH:
        return _write_lines(events, sys.stdout)
    output_path = Path(destination).expanduser()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as handle:
            return _write_lines(events, handle)
    except OSError as error:
        raise EnrichIngestError(f"Failed to write events to {output_path}: {error}.") from error


def event_to_payload(event: Event) -> dict[str, Any]:
    """Serialize an event into a JSON-safe payload.

    Args:
        event: Event instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return _to_json_safe(event.to_dict())


def event_to_json_line(event: Event) -> str:
    """Render one event as a compact JSON line."""
    return json.dumps(event_to_payload(event), ensure_ascii=False)


def _parse_event_lines(origin: str, lines: list[str]) -> list[Event]:
    events: list[Event] = []
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        events.append(Event(_parse_jsonl_line(origin, line, line_number)))
    return events


def _parse_jsonl_line(origin: str, line: str, line_number: int) -> dict[str, Any]:
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise EnrichIngestError(
            f"Failed to parse JSONL event at {origin}:{line_number}: "
            f"{error.msg}. Fix the JSON syntax and retry."
        ) from error
    if not isinstance(payload, dict):
        raise EnrichIngestError(
            f"Invalid JSONL event at {origin}:{line_number}: "
            f"expected a JSON object, got {type(payload).__name__}."
        )
    return payload


def _write_lines(events: Iterable[Event], handle: TextIO) -> int:
    count = 0
    for event in events:
        handle.write(event_to_json_line(event) + "\n")
        count += 1
    return count


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, EventTimestamp):
        return value.to_iso()
    if isinstance(value, datetime):
        return EventTimestamp(value).to_iso()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): _to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json_safe(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
