"""Mutable event model for pipeline stages.

An event is an ordered mapping of fields plus a distinguished
``@timestamp`` and a ``tags`` list. Stages receive one event per call
and mutate it in place through the accessors defined here.
"""

from __future__ import annotations

import copy
import json
import re
from typing import Any, Mapping

from core.constants import (
    TAGS_FIELD,
    TIMESTAMP_FAILURE_FIELD,
    TIMESTAMP_FAILURE_TAG,
    TIMESTAMP_FIELD,
)
from core.errors import EnrichFieldReferenceError, EnrichTimestampError
from core.field_reference import parse_field_reference
from core.timestamp import EventTimestamp

_MISSING = object()
_SPRINTF_REFERENCE = re.compile(r"%\{([^}]+)\}")


class Event:
    """One structured record flowing through the pipeline."""

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        data = copy.deepcopy(dict(fields or {}))
        raw_timestamp = data.pop(TIMESTAMP_FIELD, None)
        self._fields: dict[str, Any] = data
        if raw_timestamp is None:
            self._timestamp = EventTimestamp.now()
            return
        try:
            self._timestamp = EventTimestamp.coerce(raw_timestamp)
        except EnrichTimestampError:
            self.fallback_timestamp(raw_timestamp)

    @property
    def timestamp(self) -> EventTimestamp:
        """Event timestamp."""
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: object) -> None:
        self._timestamp = EventTimestamp.coerce(value)

    @property
    def tags(self) -> tuple[str, ...]:
        """Current tags in insertion order."""
        raw_tags = self._fields.get(TAGS_FIELD)
        if raw_tags is None:
            return ()
        if isinstance(raw_tags, list):
            return tuple(raw_tags)
        return (raw_tags,)

    def get(self, reference: str) -> Any:
        """Read a field value, or None when the path is absent."""
        value = self._lookup(parse_field_reference(reference))
        return None if value is _MISSING else value

    def includes(self, reference: str) -> bool:
        """Return True when the path resolves to a field, even a null one."""
        return self._lookup(parse_field_reference(reference)) is not _MISSING

    def set(self, reference: str, value: Any) -> None:
        """Write a field value, creating intermediate mappings.

        Args:
            reference: Dot path or bracket reference.
            value: Value to store; replaces any previous value wholesale.

        Raises:
            EnrichFieldReferenceError: If an intermediate value is not a mapping.
            EnrichTimestampError: If writing ``@timestamp`` with an uncoercible value.
        """
        keys = parse_field_reference(reference)
        if keys == (TIMESTAMP_FIELD,):
            self.timestamp = value
            return
        container = self._fields
        for depth, key in enumerate(keys[:-1]):
            child = container.get(key)
            if child is None:
                child = {}
                container[key] = child
            elif not isinstance(child, dict):
                parent_path = ".".join(keys[: depth + 1])
                raise EnrichFieldReferenceError(
                    f"Cannot write '{reference}': field '{parent_path}' holds "
                    f"{type(child).__name__}, not a mapping."
                )
            container = child
        container[keys[-1]] = value

    def set_root(self, key: str, value: Any) -> None:
        """Write a top-level field by literal name, never splitting on dots."""
        if key == TIMESTAMP_FIELD:
            self.timestamp = value
            return
        self._fields[key] = value

    def remove(self, reference: str) -> Any:
        """Delete a field and return its previous value, or None if absent."""
        keys = parse_field_reference(reference)
        if keys == (TIMESTAMP_FIELD,):
            raise EnrichFieldReferenceError(f"Field '{TIMESTAMP_FIELD}' cannot be removed.")
        parent = self._lookup(keys[:-1]) if len(keys) > 1 else self._fields
        if not isinstance(parent, dict):
            return None
        return parent.pop(keys[-1], None)

    def tag(self, name: str) -> None:
        """Append a tag if it is not already present."""
        raw_tags = self._fields.get(TAGS_FIELD)
        if raw_tags is None:
            self._fields[TAGS_FIELD] = [name]
            return
        if not isinstance(raw_tags, list):
            raw_tags = [raw_tags]
            self._fields[TAGS_FIELD] = raw_tags
        if name not in raw_tags:
            raw_tags.append(name)

    def untag(self, name: str) -> None:
        """Remove a tag if present."""
        raw_tags = self._fields.get(TAGS_FIELD)
        if isinstance(raw_tags, list):
            self._fields[TAGS_FIELD] = [tag for tag in raw_tags if tag != name]
        elif raw_tags == name:
            del self._fields[TAGS_FIELD]

    def fallback_timestamp(self, raw_value: object) -> None:
        """Stamp current time and keep an unparsable timestamp value aside."""
        self._timestamp = EventTimestamp.now()
        self.tag(TIMESTAMP_FAILURE_TAG)
        self._fields[TIMESTAMP_FAILURE_FIELD] = str(raw_value)

    def sprintf(self, template: str) -> str:
        """Interpolate ``%{field}`` references; unknown fields stay literal."""

        def _replace(match: re.Match[str]) -> str:
            reference = match.group(1)
            try:
                value = self._lookup(parse_field_reference(reference))
            except EnrichFieldReferenceError:
                return match.group(0)
            if value is _MISSING or value is None:
                return match.group(0)
            return _render_value(value)

        return _SPRINTF_REFERENCE.sub(_replace, template)

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of all fields including ``@timestamp``."""
        return {TIMESTAMP_FIELD: self._timestamp, **copy.deepcopy(self._fields)}

    def copy(self) -> "Event":
        """Return an independent deep copy."""
        clone = Event.__new__(Event)
        clone._fields = copy.deepcopy(self._fields)
        clone._timestamp = self._timestamp
        return clone

    def __repr__(self) -> str:
        return f"Event({self.to_dict()!r})"

    def _lookup(self, keys: tuple[str, ...]) -> Any:
        if keys == (TIMESTAMP_FIELD,):
            return self._timestamp
        current: Any = self._fields
        for key in keys:
            if isinstance(current, dict):
                if key not in current:
                    return _MISSING
                current = current[key]
            elif isinstance(current, list) and _is_index(key):
                index = int(key)
                if not -len(current) <= index < len(current):
                    return _MISSING
                current = current[index]
            else:
                return _MISSING
        return current


def _is_index(key: str) -> bool:
    return key.lstrip("-").isdigit()


def _render_value(value: Any) -> str:
    if isinstance(value, EventTimestamp):
        return value.to_iso()
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, default=str)
    if isinstance(value, list):
        return ",".join(_render_value(item) for item in value)
    return str(value)
