"""Shared typed models.

This module defines immutable option and result models used by the
filter, pipeline runner, pipeline spec loader, and CLI layers to keep
interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Mapping

if TYPE_CHECKING:
    from core.event import Event

FilterStatus = Literal[
    "skipped_condition",
    "skipped_missing_source",
    "parse_failure",
    "invalid_root_shape",
    "target_write_failure",
    "enriched",
    "timestamp_fallback",
]
MATCHED_STATUSES: tuple[FilterStatus, ...] = ("enriched", "timestamp_fallback")
FAILURE_STATUSES: tuple[FilterStatus, ...] = (
    "parse_failure",
    "invalid_root_shape",
    "target_write_failure",
)


@dataclass(frozen=True)
class YamlFilterOptions:
    """Options owned by the YAML enrichment stage.

    Attributes:
        source: Field holding the YAML string to decode.
        target: Optional field receiving the decoded value; root merge if omitted.
    """

    source: str
    target: str | None = None


@dataclass(frozen=True)
class FilterCondition:
    """Applicability gate evaluated before a stage runs.

    Attributes:
        tags: Tags that must all be present.
        fields: Field references that must all be present.
        exclude_tags: Tags that must all be absent.
    """

    tags: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class StageCommonOptions:
    """Host-level options shared by every stage.

    Attributes:
        id: Optional stage identifier used in logs.
        when: Optional applicability gate.
        add_tag: Tags appended when the stage matches.
        remove_tag: Tags removed when the stage matches.
        add_field: Fields written when the stage matches.
        remove_field: Fields deleted when the stage matches.
    """

    id: str | None = None
    when: FilterCondition | None = None
    add_tag: tuple[str, ...] = ()
    remove_tag: tuple[str, ...] = ()
    add_field: Mapping[str, object] = field(default_factory=dict)
    remove_field: tuple[str, ...] = ()


@dataclass(frozen=True)
class FilterOutcome:
    """Result of one stage invocation.

    Attributes:
        event: The processed event, mutated in place.
        status: Terminal state reached by the invocation.
    """

    event: "Event"
    status: FilterStatus

    @property
    def matched(self) -> bool:
        """Whether the stage matched, for routing and metrics."""
        return self.status in MATCHED_STATUSES


@dataclass(frozen=True)
class PipelineSummary:
    """Aggregate counts for one pipeline run.

    Attributes:
        event_count: Number of events processed.
        matched_count: Number of stage invocations that matched.
        status_counts: Stage invocation count per terminal status.
    """

    event_count: int
    matched_count: int
    status_counts: Mapping[str, int] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        """Number of stage invocations that tagged a failure."""
        return sum(self.status_counts.get(status, 0) for status in FAILURE_STATUSES)


@dataclass(frozen=True)
class PipelineRunResult:
    """Pipeline run output.

    Attributes:
        events: Processed events in input order.
        summary: Aggregate outcome counts.
    """

    events: tuple["Event", ...]
    summary: PipelineSummary
