"""
Type predicates over deserialized entities.
"""

from __future__ import annotations

from typing import Any

from activity_vocab.vocabulary._constants import ACTIVITY_TYPES


def has_type(entity: Any, name: str) -> bool:
    """Whether *entity* carries *name* among its ``type`` values.

    The entity's own canonical type counts even when it was never
    written to the type sequence explicitly.
    """
    if getattr(entity, "type_name", None) == name:
        return True
    return any(entity.get_type(i) == name for i in range(entity.type_len()))


def is_activity_type(entity: Any) -> bool:
    """Whether any of *entity*'s types is an ActivityStreams activity."""
    return any(has_type(entity, name) for name in ACTIVITY_TYPES)
