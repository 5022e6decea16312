"""Public SDK surface for yaml-enrich.

This module provides a stable import path for library users.
It re-exports the enrichment stage, event model, and pipeline helpers.
"""

from __future__ import annotations

from core.config import EnrichConfig
from core.event import Event
from core.logging_config import configure_logging
from core.pipeline_spec import PipelineSpec, build_filter_options, load_pipeline_spec
from core.timestamp import EventTimestamp
from core.types import (
    FilterCondition,
    FilterOutcome,
    PipelineRunResult,
    PipelineSummary,
    StageCommonOptions,
    YamlFilterOptions,
)
from ingest.event_io import event_to_payload, read_events, write_events
from ingest.pipeline import EventPipeline, build_pipeline, load_pipeline
from transforms.yaml_filter import YamlFilter

__all__ = [
    "EnrichConfig",
    "Event",
    "EventPipeline",
    "EventTimestamp",
    "FilterCondition",
    "FilterOutcome",
    "PipelineRunResult",
    "PipelineSpec",
    "PipelineSummary",
    "StageCommonOptions",
    "YamlFilter",
    "YamlFilterOptions",
    "build_filter_options",
    "build_pipeline",
    "configure_logging",
    "event_to_payload",
    "load_pipeline",
    "load_pipeline_spec",
    "read_events",
    "write_events",
]
