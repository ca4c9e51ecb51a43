"""Analysis bundle assembly and writing.

A bundle gathers the two derived layers of one breakdown (the element
catalogue and the character ranking) with a small summary.  It is written to a
directory as three JSON files:

``elements.json``
    ``{category: {"ungrouped": [...], "groups": [{"id", "parentName", "variants"}]}}``
``rankings.json``
    Ranked character records, rank 1 first.
``summary.json``
    Counts per tier and per category plus a digest of the input so bundles
    can be correlated with the breakdown they came from.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Sequence

from sceneintel.breakdown.base import Breakdown
from sceneintel.config import ConfigModel, load_config
from sceneintel.io import write_document
from sceneintel.link import CategoryData, GroupIdGenerator, build_global_elements
from sceneintel.link.elements import elements_to_dict
from sceneintel.rank import CharacterRanking, rank_characters, rankings_to_dicts, summarize_tiers

__all__ = [
    "AnalysisSummary",
    "AnalysisBundle",
    "document_digest",
    "summarize",
    "analyze",
    "write_bundle",
]


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    """Summary statistics for one analysis run."""

    scene_count: int
    character_count: int
    tiers: dict[str, int]
    groups_by_category: dict[str, int]
    ungrouped_by_category: dict[str, int]
    generated_at: str
    input_sha256: str | None

    def to_dict(self) -> dict[str, object]:
        return {
            "scene_count": self.scene_count,
            "character_count": self.character_count,
            "tiers": dict(self.tiers),
            "groups_by_category": dict(self.groups_by_category),
            "ungrouped_by_category": dict(self.ungrouped_by_category),
            "generated_at": self.generated_at,
            "input_sha256": self.input_sha256,
        }


@dataclass(frozen=True, slots=True)
class AnalysisBundle:
    """Both derived layers of a breakdown plus their summary."""

    elements: dict[str, CategoryData]
    rankings: list[CharacterRanking]
    summary: AnalysisSummary


def document_digest(document: Any) -> str:
    """Return a SHA-256 hex digest of ``document`` in canonical JSON form."""

    payload = json.dumps(document, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def summarize(
    scene_count: int,
    elements: Mapping[str, CategoryData],
    rankings: Sequence[CharacterRanking],
    *,
    input_sha256: str | None = None,
) -> AnalysisSummary:
    """Return an :class:`AnalysisSummary` for already computed layers."""

    return AnalysisSummary(
        scene_count=scene_count,
        character_count=len(rankings),
        tiers=summarize_tiers(r.tier for r in rankings),
        groups_by_category={name: len(data.groups) for name, data in elements.items()},
        ungrouped_by_category={name: len(data.ungrouped) for name, data in elements.items()},
        generated_at=datetime.now(timezone.utc).isoformat(),
        input_sha256=input_sha256,
    )


def analyze(
    breakdown: Breakdown,
    cfg: ConfigModel | None = None,
    *,
    ids: GroupIdGenerator | None = None,
    input_sha256: str | None = None,
) -> AnalysisBundle:
    """Run both layers over ``breakdown``; neither depends on the other."""

    cfg = cfg or load_config()
    elements = build_global_elements(breakdown, cfg, ids=ids)
    rankings = rank_characters(breakdown.scenes, cfg)
    summary = summarize(len(breakdown.scenes), elements, rankings, input_sha256=input_sha256)
    return AnalysisBundle(elements=elements, rankings=rankings, summary=summary)


def write_bundle(out_dir: str | Path, bundle: AnalysisBundle) -> dict[str, str]:
    """Write ``bundle`` into ``out_dir`` and return the written paths by name."""

    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    written: dict[str, str] = {}

    elements_path = out_path / "elements.json"
    write_document(elements_path, elements_to_dict(bundle.elements))
    written["elements"] = str(elements_path)

    rankings_path = out_path / "rankings.json"
    write_document(rankings_path, rankings_to_dicts(bundle.rankings))
    written["rankings"] = str(rankings_path)

    summary_path = out_path / "summary.json"
    write_document(summary_path, bundle.summary.to_dict())
    written["summary"] = str(summary_path)

    return written
