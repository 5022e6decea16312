"""YAML decoding into a tagged payload variant.

This module turns a raw source value into exactly one of four payload
cases so merge logic can branch exhaustively instead of probing types.
Decoding never raises; every decoder error becomes ``DecodeFailure``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import yaml


@dataclass(frozen=True)
class MappingPayload:
    """Decoded YAML mapping with string keys."""

    value: dict[str, Any]


@dataclass(frozen=True)
class SequencePayload:
    """Decoded YAML sequence."""

    value: list[Any]


@dataclass(frozen=True)
class ScalarPayload:
    """Decoded YAML scalar, including None for an empty document."""

    value: Any


@dataclass(frozen=True)
class DecodeFailure:
    """Decoder rejected the input.

    Attributes:
        reason: Human-readable decoder error message.
    """

    reason: str


DecodedPayload = Union[MappingPayload, SequencePayload, ScalarPayload, DecodeFailure]


class _EventLoader(yaml.SafeLoader):
    """Safe loader that keeps impossible timestamp scalars as plain strings."""


def _construct_timestamp(loader: _EventLoader, node: yaml.ScalarNode) -> Any:
    try:
        return loader.construct_yaml_timestamp(node)
    except (OverflowError, ValueError):
        return loader.construct_scalar(node)


_EventLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_timestamp)


def decode_yaml(raw_value: object) -> DecodedPayload:
    """Decode a YAML document into a tagged payload.

    Args:
        raw_value: Source field value; must be ``str`` or UTF-8 ``bytes``.

    Returns:
        One payload case. Never raises.
    """
    if isinstance(raw_value, bytes):
        try:
            raw_value = raw_value.decode("utf-8")
        except UnicodeDecodeError as error:
            return DecodeFailure(reason=f"source bytes are not valid UTF-8: {error}")
    if not isinstance(raw_value, str):
        return DecodeFailure(
            reason=f"expected a YAML string, got {type(raw_value).__name__}"
        )
    try:
        document = _normalize(yaml.load(raw_value, Loader=_EventLoader))
    except Exception as error:
        return DecodeFailure(reason=str(error) or type(error).__name__)
    return _classify(document)


def _classify(document: Any) -> DecodedPayload:
    if isinstance(document, dict):
        return MappingPayload(value=document)
    if isinstance(document, list):
        return SequencePayload(value=document)
    return ScalarPayload(value=document)


def _normalize(value: Any) -> Any:
    """Convert decoder output into plain event values.

    Mapping keys become strings, sets become lists sorted by repr.
    """
    if isinstance(value, dict):
        return {
            key if isinstance(key, str) else str(key): _normalize(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [_normalize(item) for item in sorted(value, key=repr)]
    return value
