"""Character salience ranking and tiering."""

from .salience import (
    CharacterRanking,
    accumulate,
    rank_characters,
    rankings_to_dicts,
    word_count_proxy,
)
from .tiers import CharacterTier, assign_tier, summarize_tiers, tier_for_rank

__all__ = [
    "CharacterRanking",
    "CharacterTier",
    "accumulate",
    "assign_tier",
    "rank_characters",
    "rankings_to_dicts",
    "summarize_tiers",
    "tier_for_rank",
    "word_count_proxy",
]
