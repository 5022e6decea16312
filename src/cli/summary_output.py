"""Run summary rendering shared by CLI commands."""

from __future__ import annotations

from core.constants import STDIO_PATH
from core.types import PipelineSummary


def print_run_summary(summary: PipelineSummary, output: str) -> None:
    """Print a one-line summary unless events already occupy stdout."""
    if output == STDIO_PATH:
        return
    print(
        f"events={summary.event_count} "
        f"matched={summary.matched_count} "
        f"failed={summary.failure_count}"
    )
