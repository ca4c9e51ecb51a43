"""Evaluation harness for clustering quality and tier agreement.

Clusterings are compared pairwise: every unordered pair of entities placed in
the same group is a "link".  A predicted link also present in the gold
partition is a true positive, a predicted link absent from gold is a false
positive and a missed gold link is a false negative.  Ungrouped entities
contribute no links, so two partitions that both leave everything ungrouped
score zero counts (and zero precision/recall by convention).

Tier agreement is the share of gold-labelled characters whose predicted tier
matches.  A gold character missing from the ranking counts as a mismatch with
the predicted tier ``"<missing>"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Iterable, Mapping, Sequence, cast

from evaluation.fixtures import loader as fixtures_loader
from sceneintel.breakdown import parse_breakdown
from sceneintel.config import ConfigModel
from sceneintel.link import CategoryData, build_global_elements
from sceneintel.rank import CharacterRanking, rank_characters

__all__ = [
    "PRF",
    "TierAgreement",
    "FixtureReport",
    "links",
    "pairwise_prf",
    "parent_name_accuracy",
    "tier_agreement",
    "evaluate_document",
    "evaluate_fixture",
    "evaluate_all_fixtures",
]


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PRF:
    """Precision/recall/F1 counts and scores."""

    tp: int
    fp: int
    fn: int
    precision: float
    recall: float
    f1: float


@dataclass(slots=True)
class TierAgreement:
    """Tier agreement for the gold-labelled characters."""

    matched: int
    total: int
    mismatches: dict[str, tuple[str, str]] = field(default_factory=dict)

    @property
    def rate(self) -> float:
        return self.matched / self.total if self.total else 1.0


@dataclass(slots=True)
class FixtureReport:
    """Metrics for one breakdown evaluated against its gold file."""

    locations: PRF
    wardrobe: PRF
    location_parents: float
    wardrobe_parents: float
    tiers: TierAgreement
    leaked_crowd: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def links(groups: Iterable[Sequence[str]]) -> set[frozenset[str]]:
    """Return every unordered same-group pair of ``groups``."""

    out: set[frozenset[str]] = set()
    for members in groups:
        for a, b in combinations(dict.fromkeys(members), 2):
            out.add(frozenset((a, b)))
    return out


def pairwise_prf(gold: Iterable[Sequence[str]], pred: Iterable[Sequence[str]]) -> PRF:
    """Compute pairwise precision/recall/F1 of ``pred`` against ``gold``."""

    gold_links = links(gold)
    pred_links = links(pred)
    tp = len(gold_links & pred_links)
    fp = len(pred_links - gold_links)
    fn = len(gold_links - pred_links)
    precision = tp / (tp + fp) if (tp + fp) else 0.0
    recall = tp / (tp + fn) if (tp + fn) else 0.0
    f1 = 2 * precision * recall / (precision + recall) if (precision + recall) else 0.0
    return PRF(tp, fp, fn, precision, recall, f1)


def parent_name_accuracy(gold: Sequence[Mapping[str, Any]], pred: CategoryData) -> float:
    """Return the share of gold groups whose exact variant set got the gold name."""

    if not gold:
        return 1.0
    by_members = {frozenset(g.variants): g.parent_name for g in pred.groups}
    hits = 0
    for group in gold:
        key = frozenset(cast(list[str], group["variants"]))
        if by_members.get(key) == group["parentName"]:
            hits += 1
    return hits / len(gold)


def tier_agreement(gold: Mapping[str, str], rankings: Sequence[CharacterRanking]) -> TierAgreement:
    """Compare gold tiers (keyed by normalized name) with ``rankings``."""

    predicted = {r.name_normalized: r.tier.value for r in rankings}
    result = TierAgreement(matched=0, total=len(gold))
    for name, tier in gold.items():
        got = predicted.get(name, "<missing>")
        if got == tier:
            result.matched += 1
        else:
            result.mismatches[name] = (tier, got)
    return result


# ---------------------------------------------------------------------------
# Public evaluation entry points
# ---------------------------------------------------------------------------


def evaluate_document(document: Any, gold: Mapping[str, Any], cfg: ConfigModel) -> FixtureReport:
    """Run both layers on ``document`` and compare against ``gold``."""

    breakdown = parse_breakdown(document)
    elements = build_global_elements(breakdown, cfg)
    rankings = rank_characters(breakdown.scenes, cfg)

    report_parts: dict[str, tuple[PRF, float]] = {}
    for category in ("locations", "wardrobe"):
        gold_groups = cast(list[dict[str, Any]], gold.get(category, {}).get("groups", []))
        pred = elements[category]
        prf = pairwise_prf(
            [cast(list[str], g["variants"]) for g in gold_groups],
            [g.variants for g in pred.groups],
        )
        report_parts[category] = (prf, parent_name_accuracy(gold_groups, pred))

    ranked = {r.name_normalized for r in rankings}
    excluded = cast(list[str], gold.get("excluded", []))
    return FixtureReport(
        locations=report_parts["locations"][0],
        wardrobe=report_parts["wardrobe"][0],
        location_parents=report_parts["locations"][1],
        wardrobe_parents=report_parts["wardrobe"][1],
        tiers=tier_agreement(cast(dict[str, str], gold.get("tiers", {})), rankings),
        leaked_crowd=[name for name in excluded if name in ranked],
    )


def evaluate_fixture(name: str, cfg: ConfigModel) -> FixtureReport:
    """Evaluate a fixture by name."""

    document, gold = fixtures_loader.load_fixture(name)
    return evaluate_document(document, gold, cfg)


def evaluate_all_fixtures(cfg: ConfigModel) -> dict[str, FixtureReport]:
    """Evaluate every curated fixture keyed by name."""

    return {name: evaluate_fixture(name, cfg) for name in fixtures_loader.list_fixtures()}
