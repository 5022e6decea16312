"""yaml-enrich CLI entry points.

This module exposes commands that decode YAML event fields from JSON
Lines input. It maps argparse commands onto the pipeline SDK.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from cli.summary_output import print_run_summary
from core.config import EnrichConfig, parse_log_format, parse_log_level
from core.constants import STDIO_PATH
from core.errors import EnrichError, EnrichPipelineSpecError
from core.logging_config import configure_logging
from core.pipeline_spec import build_filter_options
from ingest.event_io import read_events, write_events
from ingest.pipeline import EventPipeline
from transforms.yaml_filter import YamlFilter


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="yaml-enrich",
        description="Decode YAML event fields and merge them into JSON Lines events",
    )
    parser.add_argument("--log-level", help="Override YAML_ENRICH_LOG_LEVEL for this command")
    parser.add_argument("--log-format", help="Override YAML_ENRICH_LOG_FORMAT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_run_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the yaml-enrich CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args.log_level, args.log_format)
    configure_logging(config.log_level, config.log_format)
    if args.command == "run":
        return _run_single_stage_command(args)
    if args.command == "run-spec":
        return run_run_spec_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def console_main() -> int:
    """Console script entry point that reports domain errors as exit code 1."""
    try:
        return main()
    except EnrichError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _build_config(log_level: str | None, log_format: str | None) -> EnrichConfig:
    """Build runtime config with optional CLI overrides.

    Args:
        log_level: Optional level override.
        log_format: Optional renderer override.

    Returns:
        Validated config.
    """
    config = EnrichConfig.from_env()
    if log_level:
        config = replace(config, log_level=parse_log_level(log_level))
    if log_format:
        config = replace(config, log_format=parse_log_format(log_format))
    return config


def _add_run_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("run", help="Run one YAML enrichment stage over events")
    parser.add_argument("input", help="Input JSONL path, or '-' for stdin")
    parser.add_argument("--source", required=True, help="Field holding the YAML string")
    parser.add_argument("--target", help="Field receiving decoded YAML; root merge if omitted")
    parser.add_argument("--id", dest="stage_id", help="Stage identifier used in logs")
    parser.add_argument("--add-tag", action="append", default=[], help="Tag added on match")
    parser.add_argument("--remove-tag", action="append", default=[], help="Tag removed on match")
    parser.add_argument(
        "--add-field",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Field written on match",
    )
    parser.add_argument(
        "--remove-field", action="append", default=[], help="Field removed on match"
    )
    parser.add_argument("--when-tag", action="append", default=[], help="Require tag to run")
    parser.add_argument("--when-field", action="append", default=[], help="Require field to run")
    parser.add_argument("--output", "-o", default=STDIO_PATH, help="Output JSONL path")


def _run_single_stage_command(args: argparse.Namespace) -> int:
    """Handle run command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options_mapping: dict[str, object] = {
        "source": args.source,
        "target": args.target,
        "id": args.stage_id,
        "add_tag": args.add_tag,
        "remove_tag": args.remove_tag,
        "add_field": _parse_add_field_flags(args.add_field),
        "remove_field": args.remove_field,
    }
    if args.when_tag or args.when_field:
        options_mapping["when"] = {"tags": args.when_tag, "fields": args.when_field}
    options, common = build_filter_options(options_mapping, "run command options")
    pipeline = EventPipeline([YamlFilter(options, common)])
    result = pipeline.run(read_events(args.input))
    write_events(result.events, args.output)
    print_run_summary(result.summary, args.output)
    return 0


def _parse_add_field_flags(raw_flags: list[str]) -> dict[str, object]:
    fields: dict[str, object] = {}
    for raw_flag in raw_flags:
        name, separator, value = raw_flag.partition("=")
        if not separator or not name.strip():
            raise EnrichPipelineSpecError(
                f"Invalid --add-field value '{raw_flag}': expected FIELD=VALUE."
            )
        fields[name.strip()] = value
    return fields
