"""Field reference parsing for event paths.

Event fields are addressed either with dot paths (``doc.user.name``) or
bracket references (``[doc][user][name]``). Both parse into the same
tuple of keys.
"""

from __future__ import annotations

from functools import lru_cache
import re

from core.errors import EnrichFieldReferenceError

_BRACKET_PART = re.compile(r"\[([^\[\]]+)\]")


@lru_cache(maxsize=1024)
def parse_field_reference(reference: str) -> tuple[str, ...]:
    """Split a field reference into its path keys.

    Args:
        reference: Dot path or bracket reference.

    Returns:
        Non-empty tuple of keys from outermost to innermost.

    Raises:
        EnrichFieldReferenceError: If the reference is empty or malformed.
    """
    if not reference or not reference.strip():
        raise EnrichFieldReferenceError(
            "Invalid field reference: expected a non-empty field name."
        )
    if reference.startswith("["):
        return _parse_bracket_reference(reference)
    parts = tuple(reference.split("."))
    if any(part == "" for part in parts):
        raise EnrichFieldReferenceError(
            f"Invalid field reference '{reference}': empty path segment. "
            "Use names like 'doc.user' or '[doc][user]'."
        )
    return parts


def _parse_bracket_reference(reference: str) -> tuple[str, ...]:
    parts = _BRACKET_PART.findall(reference)
    if not parts or "".join(f"[{part}]" for part in parts) != reference:
        raise EnrichFieldReferenceError(
            f"Invalid field reference '{reference}': unbalanced brackets. "
            "Use names like '[doc][user]'."
        )
    return tuple(parts)
