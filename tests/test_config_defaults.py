import pytest

from sceneintel.config import load_config


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.schema_version == 1
    assert cfg.locations.strategy == "seed"
    assert cfg.locations.min_shared_root == 4
    assert cfg.locations.drop_vehicles is False
    assert "ROOM" in {w.upper() for w in cfg.locations.stop_words}
    assert len(cfg.locations.stop_words) == 40
    assert cfg.ranking.crowd_roles[:3] == ["COP", "WAITER", "WAITRESS"]
    assert cfg.ranking.mention_fields.mood_field == "emotional_tone"


def test_default_weights_sum_to_one() -> None:
    w = load_config(env={}).ranking.weights
    total = w.dialogue_volume + w.appearance_frequency + w.page_spread + w.salience_bonus
    assert total == pytest.approx(1.0)
    assert w.dialogue_words + w.dialogue_scenes == pytest.approx(1.0)
    assert w.appearance_scenes + w.appearance_pages == pytest.approx(1.0)
    assert w.spread_density + w.spread_span == pytest.approx(1.0)


def test_default_tier_bands() -> None:
    tiers = load_config(env={}).ranking.tiers
    assert (tiers.lead_count, tiers.strong_support_count, tiers.feature_count) == (2, 6, 10)
    assert tiers.monologue_cap_rank == 8
    assert tiers.recurring_scene_fraction == 0.12
    assert tiers.recurring_page_fraction == 0.10
