"""Event input, output, and pipeline execution.

This package reads JSON Lines events, runs them through configured
stages, and writes processed events back out.
"""
