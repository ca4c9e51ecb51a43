"""Narrative-weight tiers and the guardrails that correct them.

The base tier follows rank alone: the first ``lead_count`` ranks are ``LEAD``,
the next ``strong_support_count`` are ``STRONG_SUPPORT``, the next
``feature_count`` are ``FEATURE`` and everything after is ``UNDER_5``.  Two
guardrails then adjust it, in order:

* **Monologue cap** – a character ranked within ``monologue_cap_rank`` with at
  most one dialogue scene and at most one appearance owes the rank to a single
  standout scene and is capped at ``FEATURE``.
* **Recurring-but-quiet bump** – a ``FEATURE`` or ``UNDER_5`` character present
  in at least ``recurring_scene_fraction`` of the scenes, or touching at least
  ``recurring_page_fraction`` of the pages, moves one tier up.

A character with no words and no dialogue scenes is ``BACKGROUND`` regardless
of rank; that override wins over everything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from sceneintel.config.schema import TierSettings

__all__ = [
    "CharacterTier",
    "TIER_SCALE",
    "TIER_DISPLAY_ORDER",
    "TierInputs",
    "tier_for_rank",
    "bump_up",
    "cap_at_feature",
    "assign_tier",
    "summarize_tiers",
]


class CharacterTier(Enum):
    """Discrete narrative-weight buckets."""

    LEAD = "LEAD"
    STRONG_SUPPORT = "STRONG_SUPPORT"
    FEATURE = "FEATURE"
    UNDER_5 = "UNDER_5"
    BACKGROUND = "BACKGROUND"


# Weakest to strongest.
TIER_SCALE: tuple[CharacterTier, ...] = (
    CharacterTier.BACKGROUND,
    CharacterTier.UNDER_5,
    CharacterTier.FEATURE,
    CharacterTier.STRONG_SUPPORT,
    CharacterTier.LEAD,
)
TIER_DISPLAY_ORDER: tuple[CharacterTier, ...] = tuple(reversed(TIER_SCALE))


@dataclass(slots=True, frozen=True)
class TierInputs:
    """The per-character figures tier assignment looks at."""

    rank: int
    words: int
    dialogue_scenes: int
    appearance_scenes: int
    pages: int
    total_scenes: int
    total_pages: int


def tier_for_rank(rank: int, settings: TierSettings) -> CharacterTier:
    """Return the rank-only base tier."""

    lead = settings.lead_count
    strong = lead + settings.strong_support_count
    feature = strong + settings.feature_count
    if rank <= lead:
        return CharacterTier.LEAD
    if rank <= strong:
        return CharacterTier.STRONG_SUPPORT
    if rank <= feature:
        return CharacterTier.FEATURE
    return CharacterTier.UNDER_5


def bump_up(tier: CharacterTier) -> CharacterTier:
    """Return the next stronger tier; ``LEAD`` stays ``LEAD``."""

    idx = TIER_SCALE.index(tier)
    return TIER_SCALE[min(idx + 1, len(TIER_SCALE) - 1)]


def cap_at_feature(tier: CharacterTier) -> CharacterTier:
    if tier in (CharacterTier.LEAD, CharacterTier.STRONG_SUPPORT):
        return CharacterTier.FEATURE
    return tier


def _is_recurring(inputs: TierInputs, settings: TierSettings) -> bool:
    by_scenes = (
        inputs.total_scenes > 0
        and inputs.appearance_scenes / inputs.total_scenes >= settings.recurring_scene_fraction
    )
    by_pages = (
        inputs.total_pages > 0
        and inputs.pages / inputs.total_pages >= settings.recurring_page_fraction
    )
    return by_scenes or by_pages


def assign_tier(inputs: TierInputs, settings: TierSettings) -> CharacterTier:
    """Return the final tier for one ranked character."""

    if inputs.words <= 0 and inputs.dialogue_scenes <= 0:
        return CharacterTier.BACKGROUND

    tier = tier_for_rank(inputs.rank, settings)

    if (
        inputs.rank <= settings.monologue_cap_rank
        and inputs.dialogue_scenes <= 1
        and inputs.appearance_scenes <= 1
    ):
        tier = cap_at_feature(tier)

    if tier in (CharacterTier.UNDER_5, CharacterTier.FEATURE) and _is_recurring(inputs, settings):
        tier = bump_up(tier)

    return tier


def summarize_tiers(tiers: Iterable[CharacterTier]) -> dict[str, int]:
    """Return counts per tier in display order (``LEAD`` first)."""

    counts = {t.value: 0 for t in TIER_DISPLAY_ORDER}
    for tier in tiers:
        counts[tier.value] += 1
    return counts
