"""YAML enrichment stage.

This module decodes a YAML string held in one event field and merges
the result into the event, either under a target field or at the root.
Merges are two-phase: the decoded payload is validated and the reserved
``@timestamp`` entry is resolved on a scratch copy before any field of
the live event is written, so a failed invocation leaves only a tag.
"""

from __future__ import annotations

from typing import Any

from core.constants import TIMESTAMP_FIELD, YAML_FILTER_KIND, YAML_PARSE_FAILURE_TAG
from core.errors import (
    EnrichEventError,
    EnrichFieldReferenceError,
    EnrichPipelineSpecError,
    EnrichTimestampError,
)
from core.event import Event
from core.field_reference import parse_field_reference
from core.logging_config import get_logger
from core.timestamp import EventTimestamp
from core.types import (
    MATCHED_STATUSES,
    FilterOutcome,
    FilterStatus,
    StageCommonOptions,
    YamlFilterOptions,
)
from transforms.filter_common import apply_match_decorations, condition_matches
from transforms.yaml_decoding import DecodeFailure, DecodedPayload, MappingPayload, decode_yaml

_LOGGER = get_logger(__name__)


class YamlFilter:
    """Stateless YAML enrichment stage.

    Holds only immutable options and an injected logger, so one instance
    may be shared by concurrent workers that each own their events.
    """

    kind = YAML_FILTER_KIND

    def __init__(
        self,
        options: YamlFilterOptions,
        common: StageCommonOptions | None = None,
        logger: Any | None = None,
    ) -> None:
        _validate_reference(options.source, "source")
        if options.target is not None:
            _validate_reference(options.target, "target")
        if common is not None and common.when is not None:
            for reference in common.when.fields:
                _validate_reference(reference, "when.fields")
        self._options = options
        self._common = common if common is not None else StageCommonOptions()
        self._logger = logger if logger is not None else _LOGGER

    @property
    def options(self) -> YamlFilterOptions:
        """Stage options."""
        return self._options

    @property
    def common(self) -> StageCommonOptions:
        """Host-level common options."""
        return self._common

    def process(self, event: Event) -> FilterOutcome:
        """Decode the source field and merge it into the event.

        Never raises for event content: decode, shape, write, and timestamp
        problems are reported through tags and the returned status.

        Args:
            event: Event to enrich in place.

        Returns:
            Outcome carrying the event and the terminal status.
        """
        if not condition_matches(event, self._common.when):
            return FilterOutcome(event=event, status="skipped_condition")
        self._logger.debug("yaml_filter_running", id=self._common.id, source=self._options.source)
        if not event.includes(self._options.source):
            return FilterOutcome(event=event, status="skipped_missing_source")
        raw_value = event.get(self._options.source)
        payload = decode_yaml(raw_value)
        if isinstance(payload, DecodeFailure):
            status = self._fail(
                event,
                "parse_failure",
                "yaml_parse_failure",
                raw=raw_value,
                exception=payload.reason,
            )
        elif self._options.target is not None:
            status = self._write_target(event, self._options.target, payload.value)
        else:
            status = self._merge_root(event, payload, raw_value)
        if status in MATCHED_STATUSES:
            apply_match_decorations(event, self._common, self._logger)
            self._logger.debug("yaml_filter_event_after", id=self._common.id, event=event)
        return FilterOutcome(event=event, status=status)

    def _write_target(self, event: Event, target: str, value: object) -> FilterStatus:
        try:
            event.set(target, value)
        except EnrichEventError as error:
            return self._fail(
                event,
                "target_write_failure",
                "yaml_target_write_failure",
                target=target,
                exception=str(error),
            )
        return "enriched"

    def _merge_root(
        self, event: Event, payload: DecodedPayload, raw_value: object
    ) -> FilterStatus:
        if not isinstance(payload, MappingPayload):
            return self._fail(event, "invalid_root_shape", "yaml_target_required", raw=raw_value)
        fields = dict(payload.value)
        raw_timestamp = fields.pop(TIMESTAMP_FIELD, None)
        if raw_timestamp is False:
            raw_timestamp = None
        timestamp = _coerce_timestamp(raw_timestamp)
        for key, value in fields.items():
            event.set_root(key, value)
        if raw_timestamp is None:
            return "enriched"
        if timestamp is not None:
            event.timestamp = timestamp
            return "enriched"
        event.fallback_timestamp(raw_timestamp)
        self._logger.warning(
            "yaml_timestamp_fallback",
            id=self._common.id,
            source=self._options.source,
            value=repr(raw_timestamp),
            timestamp=event.timestamp.to_iso(),
        )
        return "timestamp_fallback"

    def _fail(
        self, event: Event, status: FilterStatus, log_event: str, **fields: object
    ) -> FilterStatus:
        event.tag(YAML_PARSE_FAILURE_TAG)
        self._logger.warning(log_event, id=self._common.id, source=self._options.source, **fields)
        return status


def _coerce_timestamp(raw_timestamp: object) -> EventTimestamp | None:
    if raw_timestamp is None:
        return None
    try:
        return EventTimestamp.coerce(raw_timestamp)
    except EnrichTimestampError:
        return None


def _validate_reference(reference: object, option_name: str) -> None:
    if not isinstance(reference, str):
        raise EnrichPipelineSpecError(
            f"YAML filter option '{option_name}' must be a string, got {type(reference).__name__}."
        )
    try:
        parse_field_reference(reference)
    except EnrichFieldReferenceError as error:
        raise EnrichPipelineSpecError(
            f"YAML filter option '{option_name}' is invalid: {error}"
        ) from error
