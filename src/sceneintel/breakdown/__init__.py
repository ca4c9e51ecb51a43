"""Scene breakdown model and tolerant record parsing."""

from .base import (
    Breakdown,
    CharacterMention,
    EntityCategory,
    Scene,
    as_string_list,
    parse_breakdown,
    scenes_from_records,
)

__all__ = [
    "Breakdown",
    "CharacterMention",
    "EntityCategory",
    "Scene",
    "as_string_list",
    "parse_breakdown",
    "scenes_from_records",
]
