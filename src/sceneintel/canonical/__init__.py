"""Canonicalization of raw character, location and element mentions."""

from .canonicalizer import (
    canonicalize,
    canonicalize_character,
    canonicalize_location,
    character_key,
)
from .vehicles import is_likely_vehicle_location

__all__ = [
    "canonicalize",
    "canonicalize_character",
    "canonicalize_location",
    "character_key",
    "is_likely_vehicle_location",
]
