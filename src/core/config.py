"""Runtime configuration model for yaml-enrich.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    SUPPORTED_LOG_FORMATS,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import EnrichConfigError


@dataclass(frozen=True)
class EnrichConfig:
    """Validated runtime configuration.

    Attributes:
        log_level: Minimum level emitted by structured logging.
        log_format: Renderer used for log lines, ``json`` or ``console``.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> "EnrichConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            EnrichConfigError: If environment values are invalid.
        """
        log_level = parse_log_level(os.getenv("YAML_ENRICH_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        log_format = parse_log_format(os.getenv("YAML_ENRICH_LOG_FORMAT", DEFAULT_LOG_FORMAT))
        return cls(log_level=log_level, log_format=log_format)


def parse_log_level(raw_value: str) -> str:
    """Parse a log level name.

    Args:
        raw_value: Raw level string from environment or CLI.

    Returns:
        Lowercase supported level name.

    Raises:
        EnrichConfigError: If the level is not supported.
    """
    normalized = raw_value.strip().lower()
    if normalized == "warn":
        normalized = "warning"
    if normalized in SUPPORTED_LOG_LEVELS:
        return normalized
    raise EnrichConfigError(
        "Invalid YAML_ENRICH_LOG_LEVEL value: "
        f"expected one of {', '.join(SUPPORTED_LOG_LEVELS)}, got '{raw_value}'."
    )


def parse_log_format(raw_value: str) -> str:
    """Parse a log renderer name.

    Raises:
        EnrichConfigError: If the format is not supported.
    """
    normalized = raw_value.strip().lower()
    if normalized in SUPPORTED_LOG_FORMATS:
        return normalized
    raise EnrichConfigError(
        "Invalid YAML_ENRICH_LOG_FORMAT value: "
        f"expected one of {', '.join(SUPPORTED_LOG_FORMATS)}, got '{raw_value}'."
    )
