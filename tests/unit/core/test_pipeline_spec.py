"""Unit tests for pipeline-spec parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import EnrichPipelineSpecError
from core.pipeline_spec import build_filter_options, load_pipeline_spec
from core.types import FilterCondition
from tests.fixture_paths import fixture_path


def test_load_pipeline_spec_valid_pipeline_parses_filters() -> None:
    """Valid pipeline spec should parse filters in order with their options."""
    spec = load_pipeline_spec(str(fixture_path("pipeline_spec/valid_pipeline.yaml")))

    first, second = spec.filters
    assert (
        spec.version == 1
        and (first.kind, first.options.source, first.options.target) == ("yaml", "message", "doc")
        and first.common.id == "parse-message"
        and first.common.when == FilterCondition(fields=("message",), exclude_tags=("skip",))
        and first.common.add_tag == ("parsed_%{type}",)
        and dict(first.common.add_field) == {"parsed_by": "yaml-enrich"}
        and (second.options.source, second.options.target) == ("doc.inner", "[doc][inner]")
    )


def test_load_pipeline_spec_root_merge_has_no_target() -> None:
    """Omitting target should leave root merge configured."""
    spec = load_pipeline_spec(str(fixture_path("pipeline_spec/root_merge.yaml")))

    assert spec.filters[0].options.target is None
    assert spec.filters[0].common.remove_field == ("message",)


@pytest.mark.parametrize(
    "fixture_name",
    [
        "invalid_kind.yaml",
        "unknown_option.yaml",
        "missing_source.yaml",
        "invalid_version.yaml",
        "empty_filters.yaml",
        "malformed.yaml",
        "bad_target.yaml",
    ],
)
def test_load_pipeline_spec_rejects_invalid_files(fixture_name: str) -> None:
    """Schema violations should raise pipeline spec errors."""
    with pytest.raises(EnrichPipelineSpecError):
        load_pipeline_spec(str(fixture_path(f"pipeline_spec/{fixture_name}")))


def test_load_pipeline_spec_missing_file_raises(tmp_path: Path) -> None:
    """A missing spec path should raise a pipeline spec error."""
    with pytest.raises(EnrichPipelineSpecError):
        load_pipeline_spec(str(tmp_path / "missing.yaml"))


def test_load_pipeline_spec_empty_file_raises(tmp_path: Path) -> None:
    """An empty spec file should be rejected."""
    spec_file = tmp_path / "empty.yaml"
    spec_file.write_text("", encoding="utf-8")

    with pytest.raises(EnrichPipelineSpecError):
        load_pipeline_spec(str(spec_file))


def test_build_filter_options_accepts_single_string_tags() -> None:
    """A scalar tag option should be treated as a one-element list."""
    options, common = build_filter_options({"source": "message", "add_tag": "parsed"})

    assert options.target is None and common.add_tag == ("parsed",)


def test_build_filter_options_rejects_non_string_tags() -> None:
    """Tag lists should only contain strings."""
    with pytest.raises(EnrichPipelineSpecError):
        build_filter_options({"source": "message", "add_tag": ["ok", 3]})


def test_build_filter_options_rejects_unknown_condition_keys() -> None:
    """Unknown keys inside 'when' should be rejected."""
    with pytest.raises(EnrichPipelineSpecError):
        build_filter_options({"source": "message", "when": {"tag": ["x"]}})


def test_build_filter_options_rejects_malformed_condition_fields() -> None:
    """Field references inside 'when' are validated up front."""
    with pytest.raises(EnrichPipelineSpecError):
        build_filter_options({"source": "message", "when": {"fields": ["a..b"]}})
