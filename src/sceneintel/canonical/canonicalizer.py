"""Canonicalization of raw mentions into display names.

Rules
-----
Character names:

1. Parenthetical annotations are removed wherever they occur
   (``"HOWARD WELLS (40s)"`` → ``"HOWARD WELLS"``).
2. The name is truncated at the earliest of ``" - "``, ``": "`` and ``", "``
   when that marker sits at a positive index
   (``"JOHN - a tired detective"`` → ``"JOHN"``).

Locations:

1. A trailing free-text clause introduced by a dash is dropped.
2. A leading ``INT``/``EXT``/``INT/EXT``/``I/E`` scene-type prefix is dropped.
3. A trailing dash-introduced time of day (``DAY``, ``NIGHT`` …) is dropped.

Wardrobe, props and visual motifs are only whitespace-trimmed here; wardrobe
owner parsing belongs to :mod:`sceneintel.link.wardrobe`.

Every rule chain is applied until the value stops changing, which makes the
canonical form idempotent (``canonicalize(canonicalize(x)) == canonicalize(x)``)
even for stacked prefixes such as ``"EXT. INT. GARAGE"``.  The functions never
raise: unusable input canonicalizes to ``""`` and callers drop empty results.
"""

from __future__ import annotations

from typing import Callable

from sceneintel.breakdown.base import EntityCategory

from . import rules

__all__ = [
    "canonicalize_character",
    "canonicalize_location",
    "canonicalize",
    "character_key",
]


def _until_stable(value: str, step: Callable[[str], str]) -> str:
    # Every effective pass shortens the value, so this terminates.
    while True:
        nxt = step(value)
        if nxt == value:
            return nxt
        value = nxt


def _character_pass(value: str) -> str:
    name = rules.strip_parentheticals(value)
    cut = rules.earliest_cut_index(name)
    if cut is not None:
        name = name[:cut]
    return name.strip()


def _location_pass(value: str) -> str:
    name = rules.strip_dash_descriptor(value)
    name = rules.strip_heading_prefix(name)
    name = rules.strip_time_of_day(name)
    return name.strip()


def canonicalize_character(raw: object) -> str:
    """Return the display form of a raw character mention."""

    if not isinstance(raw, str):
        return ""
    return _until_stable(raw.strip(), _character_pass)


def character_key(raw: object) -> str:
    """Return the upper-cased canonical form used as a dedup key."""

    return canonicalize_character(raw).upper()


def canonicalize_location(raw: object) -> str:
    """Return the slugline location name of a raw location mention."""

    if not isinstance(raw, str):
        return ""
    return _until_stable(raw.strip(), _location_pass)


def canonicalize(raw: object, category: EntityCategory) -> str:
    """Return the canonical form of ``raw`` for ``category``."""

    if category is EntityCategory.CHARACTER:
        return canonicalize_character(raw)
    if category is EntityCategory.LOCATION:
        return canonicalize_location(raw)
    if not isinstance(raw, str):
        return ""
    return raw.strip()
