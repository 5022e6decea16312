"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and delegates execution to
the shared pipeline loader used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from cli.summary_output import print_run_summary
from core.constants import STDIO_PATH
from ingest.event_io import read_events, write_events
from ingest.pipeline import load_pipeline


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run the filters of a declarative YAML pipeline spec",
    )
    parser.add_argument("spec_file", help="Path to YAML pipeline spec file")
    parser.add_argument("input", help="Input JSONL path, or '-' for stdin")
    parser.add_argument("--output", "-o", default=STDIO_PATH, help="Output JSONL path")


def run_run_spec_command(args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    pipeline = load_pipeline(args.spec_file)
    result = pipeline.run(read_events(args.input))
    write_events(result.events, args.output)
    print_run_summary(result.summary, args.output)
    return 0
