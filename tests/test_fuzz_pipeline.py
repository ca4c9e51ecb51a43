"""Seeded fuzz tests for the whole analysis.

Noisy synthetic breakdowns from :mod:`evaluation.synthetic` are analysed end
to end.  The invariants cover the partition of every category, canonical
fixed points, determinism and the independence of the two layers.
"""

from __future__ import annotations

import os

import pytest

from evaluation.synthetic import LOCATION_FAMILIES, synthetic_breakdown
from sceneintel.breakdown import EntityCategory, parse_breakdown
from sceneintel.canonical import canonicalize
from sceneintel.config import ConfigModel, load_config
from sceneintel.link import GroupIdGenerator, build_global_elements, elements_to_dict
from sceneintel.rank import CharacterTier, rank_characters, rankings_to_dicts
from sceneintel.report import analyze

_SEEDS = range(int(os.getenv("FUZZ_SEEDS", "8")))


@pytest.fixture(scope="module")
def cfg() -> ConfigModel:
    return load_config(env={})


@pytest.mark.parametrize("seed", _SEEDS)
def test_partition_and_fixed_points(seed: int, cfg: ConfigModel) -> None:
    breakdown = parse_breakdown(synthetic_breakdown(60, seed=seed))
    elements = build_global_elements(breakdown, cfg)
    for category in EntityCategory:
        data = elements[category.value]
        entities = data.entities
        assert len(entities) == len(set(entities))
        for group in data.groups:
            assert group.variants
            assert group.parent_name
        if category is not EntityCategory.WARDROBE:
            for entity in entities:
                assert canonicalize(entity, category) == entity


@pytest.mark.parametrize("seed", _SEEDS)
def test_noise_does_not_change_locations(seed: int, cfg: ConfigModel) -> None:
    noisy = build_global_elements(parse_breakdown(synthetic_breakdown(60, seed=seed)), cfg)
    clean = build_global_elements(
        parse_breakdown(synthetic_breakdown(60, seed=seed, noisy=False)), cfg
    )
    pool = {loc for family in LOCATION_FAMILIES for loc in family}
    assert set(noisy["locations"].entities) <= pool
    assert set(clean["locations"].entities) <= pool


@pytest.mark.parametrize("seed", _SEEDS)
def test_deterministic_outputs(seed: int, cfg: ConfigModel) -> None:
    document = synthetic_breakdown(40, seed=seed)

    def _run() -> tuple[object, object]:
        breakdown = parse_breakdown(document)
        ids = GroupIdGenerator(clock=lambda: 0.0)
        return (
            elements_to_dict(build_global_elements(breakdown, cfg, ids=ids)),
            rankings_to_dicts(rank_characters(breakdown.scenes, cfg)),
        )

    assert _run() == _run()


@pytest.mark.parametrize("seed", _SEEDS)
def test_ranking_invariants(seed: int, cfg: ConfigModel) -> None:
    breakdown = parse_breakdown(synthetic_breakdown(50, seed=seed))
    rankings = rank_characters(breakdown.scenes, cfg)
    crowd = {"COP", "WAITRESS", "NURSE", "BYSTANDER"}
    for r in rankings:
        assert not any(r.name_normalized.startswith(c) for c in crowd)
        assert 1 <= r.first_page <= r.last_page
        assert r.dialogue_scenes <= r.appearance_scenes
        assert r.pages <= r.appearance_scenes
        if r.words_spoken == 0 and r.dialogue_scenes == 0:
            assert r.tier is CharacterTier.BACKGROUND


def test_layers_are_independent(cfg: ConfigModel) -> None:
    breakdown = parse_breakdown(synthetic_breakdown(30, seed=9))
    alone = rankings_to_dicts(rank_characters(breakdown.scenes, cfg))
    bundled = rankings_to_dicts(analyze(breakdown, cfg).rankings)
    assert alone == bundled
