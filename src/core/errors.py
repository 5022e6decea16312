"""yaml-enrich exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Filter stages never raise these past ``process``; they surface at
configuration, input, and output boundaries only.
"""

from __future__ import annotations


class EnrichError(Exception):
    """Base exception for all yaml-enrich failures."""


class EnrichConfigError(EnrichError):
    """Raised for invalid runtime configuration."""


class EnrichPipelineSpecError(EnrichError):
    """Raised for invalid pipeline files or filter options."""


class EnrichIngestError(EnrichError):
    """Raised for event input and output failures."""


class EnrichEventError(EnrichError):
    """Raised for invalid event field access."""


class EnrichFieldReferenceError(EnrichEventError):
    """Raised for malformed field paths or writes through non-mapping values."""


class EnrichTimestampError(EnrichEventError):
    """Raised when a value cannot be coerced into an event timestamp."""
