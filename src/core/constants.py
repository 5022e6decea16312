"""Core constants used across yaml-enrich modules.

This module centralizes reserved event field names and failure tags.
Keeping values here avoids magic literals in filter logic.
"""

from __future__ import annotations

TIMESTAMP_FIELD = "@timestamp"
TAGS_FIELD = "tags"
YAML_PARSE_FAILURE_TAG = "_yamlparsefailure"
TIMESTAMP_FAILURE_TAG = "_timestampparsefailure"
TIMESTAMP_FAILURE_FIELD = "_@timestamp"
YAML_FILTER_KIND = "yaml"
SUPPORTED_FILTER_KINDS = (YAML_FILTER_KIND,)
PIPELINE_SPEC_VERSION = 1
STDIO_PATH = "-"
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
DEFAULT_LOG_FORMAT = "json"
SUPPORTED_LOG_FORMATS = ("json", "console")
