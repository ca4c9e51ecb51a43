"""Tests for tier bands and guardrails."""

from __future__ import annotations

import pytest

from sceneintel.config import load_config
from sceneintel.config.schema import TierSettings
from sceneintel.rank import CharacterTier, assign_tier, summarize_tiers, tier_for_rank
from sceneintel.rank.tiers import TierInputs, bump_up, cap_at_feature


def _settings() -> TierSettings:
    return load_config(env={}).ranking.tiers


def _inputs(**overrides: int) -> TierInputs:
    values = dict(
        rank=1,
        words=20,
        dialogue_scenes=5,
        appearance_scenes=5,
        pages=5,
        total_scenes=50,
        total_pages=50,
    )
    values.update(overrides)
    return TierInputs(**values)


@pytest.mark.parametrize(
    "rank,tier",
    [
        (1, CharacterTier.LEAD),
        (2, CharacterTier.LEAD),
        (3, CharacterTier.STRONG_SUPPORT),
        (8, CharacterTier.STRONG_SUPPORT),
        (9, CharacterTier.FEATURE),
        (18, CharacterTier.FEATURE),
        (19, CharacterTier.UNDER_5),
        (400, CharacterTier.UNDER_5),
    ],
)
def test_rank_bands(rank: int, tier: CharacterTier) -> None:
    assert tier_for_rank(rank, _settings()) is tier


def test_bump_and_cap_helpers() -> None:
    assert bump_up(CharacterTier.UNDER_5) is CharacterTier.FEATURE
    assert bump_up(CharacterTier.FEATURE) is CharacterTier.STRONG_SUPPORT
    assert bump_up(CharacterTier.LEAD) is CharacterTier.LEAD
    assert cap_at_feature(CharacterTier.LEAD) is CharacterTier.FEATURE
    assert cap_at_feature(CharacterTier.STRONG_SUPPORT) is CharacterTier.FEATURE
    assert cap_at_feature(CharacterTier.UNDER_5) is CharacterTier.UNDER_5


def test_background_override_wins() -> None:
    inputs = _inputs(rank=1, words=0, dialogue_scenes=0, appearance_scenes=40)
    tier = assign_tier(inputs, _settings())
    assert tier is CharacterTier.BACKGROUND


def test_words_without_dialogue_scene_is_not_background() -> None:
    inputs = _inputs(rank=30, words=3, dialogue_scenes=0, appearance_scenes=1, pages=1)
    tier = assign_tier(inputs, _settings())
    assert tier is CharacterTier.UNDER_5


def test_monologue_cap() -> None:
    inputs = _inputs(rank=1, dialogue_scenes=1, appearance_scenes=1, pages=1)
    assert assign_tier(inputs, _settings()) is CharacterTier.FEATURE


def test_monologue_cap_only_within_cap_rank() -> None:
    inputs = _inputs(rank=9, dialogue_scenes=1, appearance_scenes=1, pages=1)
    assert assign_tier(inputs, _settings()) is CharacterTier.FEATURE
    inputs = _inputs(rank=3, dialogue_scenes=2, appearance_scenes=1, pages=1)
    assert assign_tier(inputs, _settings()) is CharacterTier.STRONG_SUPPORT


def test_cap_then_recurring_bump_in_short_scripts() -> None:
    inputs = _inputs(
        rank=1, dialogue_scenes=1, appearance_scenes=1, pages=1, total_scenes=5, total_pages=5
    )
    assert assign_tier(inputs, _settings()) is CharacterTier.STRONG_SUPPORT


def test_recurring_by_scenes() -> None:
    by_scenes = assign_tier(_inputs(rank=12, appearance_scenes=10), _settings())
    assert by_scenes is CharacterTier.STRONG_SUPPORT
    low_rank = assign_tier(_inputs(rank=25, appearance_scenes=6, pages=2), _settings())
    assert low_rank is CharacterTier.FEATURE


def test_recurring_by_pages() -> None:
    inputs = _inputs(rank=25, appearance_scenes=5, pages=5)
    assert assign_tier(inputs, _settings()) is CharacterTier.FEATURE


def test_not_recurring_stays() -> None:
    inputs = _inputs(rank=25, appearance_scenes=2, pages=2)
    assert assign_tier(inputs, _settings()) is CharacterTier.UNDER_5


def test_recurring_does_not_bump_strong_tiers() -> None:
    inputs = _inputs(rank=3, appearance_scenes=50, pages=50)
    assert assign_tier(inputs, _settings()) is CharacterTier.STRONG_SUPPORT


def test_summarize_tiers_order() -> None:
    counts = summarize_tiers(
        [CharacterTier.FEATURE, CharacterTier.LEAD, CharacterTier.FEATURE, CharacterTier.BACKGROUND]
    )
    assert list(counts) == ["LEAD", "STRONG_SUPPORT", "FEATURE", "UNDER_5", "BACKGROUND"]
    assert counts == {
        "LEAD": 1,
        "STRONG_SUPPORT": 0,
        "FEATURE": 2,
        "UNDER_5": 0,
        "BACKGROUND": 1,
    }
