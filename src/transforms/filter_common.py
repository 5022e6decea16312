"""Gate and decoration behavior shared by every stage.

The host decides whether a stage applies to an event through a
``FilterCondition`` and decorates matched events with the common
``add_*``/``remove_*`` options.
"""

from __future__ import annotations

from typing import Any

from core.errors import EnrichEventError
from core.event import Event
from core.types import FilterCondition, StageCommonOptions


def condition_matches(event: Event, condition: FilterCondition | None) -> bool:
    """Evaluate a stage applicability gate.

    Args:
        event: Event under evaluation.
        condition: Gate to evaluate; None always applies.

    Returns:
        True when the stage should run for this event.
    """
    if condition is None:
        return True
    event_tags = event.tags
    if any(tag not in event_tags for tag in condition.tags):
        return False
    if any(tag in event_tags for tag in condition.exclude_tags):
        return False
    return all(event.includes(reference) for reference in condition.fields)


def apply_match_decorations(event: Event, common: StageCommonOptions, logger: Any) -> None:
    """Apply on-match field and tag edits in a fixed order.

    Field edits run before tag edits. A decoration that cannot be applied
    is logged and skipped so the stage stays non-throwing.

    Args:
        event: Matched event to decorate.
        common: Stage common options.
        logger: Structured logger for skipped decorations.
    """
    for raw_name, raw_value in common.add_field.items():
        name = event.sprintf(raw_name)
        value = event.sprintf(raw_value) if isinstance(raw_value, str) else raw_value
        try:
            _add_field_value(event, name, value)
        except EnrichEventError as error:
            logger.warning("stage_decoration_skipped", id=common.id, field=name, reason=str(error))
    for raw_name in common.remove_field:
        name = event.sprintf(raw_name)
        try:
            event.remove(name)
        except EnrichEventError as error:
            logger.warning("stage_decoration_skipped", id=common.id, field=name, reason=str(error))
    for raw_tag in common.add_tag:
        event.tag(event.sprintf(raw_tag))
    for raw_tag in common.remove_tag:
        event.untag(event.sprintf(raw_tag))


def _add_field_value(event: Event, name: str, value: object) -> None:
    # An existing field becomes a list with the new value appended.
    if not event.includes(name):
        event.set(name, value)
        return
    current = event.get(name)
    merged = list(current) if isinstance(current, list) else [current]
    merged.append(value)
    event.set(name, merged)
