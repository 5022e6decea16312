"""Event pipeline orchestration.

This module runs events through an ordered chain of stages and
aggregates per-stage outcomes for metrics and CLI summaries.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Protocol, Sequence

from core.event import Event
from core.logging_config import get_logger
from core.pipeline_spec import PipelineSpec, load_pipeline_spec
from core.types import FilterOutcome, PipelineRunResult, PipelineSummary
from transforms.yaml_filter import YamlFilter

_LOGGER = get_logger(__name__)


class PipelineStage(Protocol):
    """Stage contract required by the pipeline runner."""

    def process(self, event: Event) -> FilterOutcome: ...


class EventPipeline:
    """Sequential runner for an ordered chain of stateless stages."""

    def __init__(self, stages: Sequence[PipelineStage]) -> None:
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[PipelineStage, ...]:
        """Configured stages in execution order."""
        return self._stages

    def run(self, events: Iterable[Event]) -> PipelineRunResult:
        """Process events through every stage in order.

        Args:
            events: Events to process; each is mutated in place.

        Returns:
            Processed events and aggregate outcome counts.
        """
        processed: list[Event] = []
        status_counts: Counter[str] = Counter()
        matched_count = 0
        for event in events:
            for stage in self._stages:
                outcome = stage.process(event)
                status_counts[outcome.status] += 1
                matched_count += int(outcome.matched)
            processed.append(event)
        summary = PipelineSummary(
            event_count=len(processed),
            matched_count=matched_count,
            status_counts=dict(status_counts),
        )
        _log_pipeline_completion(len(self._stages), summary)
        return PipelineRunResult(events=tuple(processed), summary=summary)


def build_pipeline(spec: PipelineSpec) -> EventPipeline:
    """Instantiate stages for a validated pipeline spec."""
    return EventPipeline(
        [YamlFilter(filter_spec.options, filter_spec.common) for filter_spec in spec.filters]
    )


def load_pipeline(spec_path: str) -> EventPipeline:
    """Load a YAML pipeline spec and instantiate its stages."""
    return build_pipeline(load_pipeline_spec(spec_path))


def _log_pipeline_completion(stage_count: int, summary: PipelineSummary) -> None:
    """Log pipeline completion with aggregate counts."""
    _LOGGER.info(
        "pipeline_completed",
        stage_count=stage_count,
        event_count=summary.event_count,
        matched_count=summary.matched_count,
        failure_count=summary.failure_count,
        status_counts=dict(summary.status_counts),
    )
