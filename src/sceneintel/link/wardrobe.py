"""Wardrobe-by-character clustering.

Each distinct raw wardrobe phrase is tried against two owner patterns, in
order:

1. ``NAME`` followed by a dash or colon separator (``"JOHN - blue suit"``);
   the captured name is kept verbatim.
2. A possessive ``NAME's description`` (``"John's lab coat"``); the captured
   name is upper-cased.

Phrases with an owner longer than one character land in that owner's bucket
(case-insensitive); everything else is ungrouped.  Each bucket becomes one
:class:`~sceneintel.link.base.ElementGroup` whose ``parent_name`` is the owner
in title case and whose variants are the original phrases in discovery order.
"""

from __future__ import annotations

from typing import Iterable

from sceneintel.canonical import rules
from sceneintel.utils.logging import get_logger

from .base import CategoryData, ElementGroup
from .ids import GroupIdGenerator

__all__ = ["extract_wardrobe_owner", "cluster_wardrobe"]

_LOG = get_logger(__name__)


def extract_wardrobe_owner(phrase: str) -> str | None:
    """Return the owning character name of ``phrase`` or ``None``."""

    text = rules.normalize_apostrophes(phrase)
    dash = rules.RX_WARDROBE_OWNER_DASH.match(text)
    if dash and dash.group(1).strip():
        return dash.group(1).strip()
    possessive = rules.RX_WARDROBE_OWNER_POSSESSIVE.match(text)
    if possessive and possessive.group(1).strip():
        return possessive.group(1).strip().upper()
    return None


def cluster_wardrobe(
    phrases: Iterable[str],
    ids: GroupIdGenerator | None = None,
) -> CategoryData:
    """Group raw wardrobe ``phrases`` by owning character."""

    ids = ids or GroupIdGenerator()
    buckets: dict[str, list[str]] = {}
    ungrouped: list[str] = []
    for phrase in dict.fromkeys(p for p in phrases if isinstance(p, str) and p):
        owner = extract_wardrobe_owner(phrase)
        if owner is not None and len(owner) > 1:
            buckets.setdefault(owner.upper(), []).append(phrase)
        else:
            ungrouped.append(phrase)

    groups = tuple(
        ElementGroup(id=ids.next_id(), parent_name=rules.title_word(owner), variants=tuple(items))
        for owner, items in buckets.items()
    )
    _LOG.debug("wardrobe: %d groups, %d ungrouped", len(groups), len(ungrouped))
    return CategoryData(ungrouped=tuple(ungrouped), groups=groups)
