"""Module entry point for ``python -m cli``."""

from __future__ import annotations

from cli.main import console_main


if __name__ == "__main__":
    raise SystemExit(console_main())
