"""Build the per-category element catalogue of a breakdown.

Category values are read either from analysis-level keys (``recurring_*``)
when the breakdown carries them, or collected from the scenes in order.  The
keys read for each category come from ``cfg.categories``.

==============  ==========================================================
Category        Treatment
==============  ==========================================================
characters      canonical names de-duplicated on the upper-cased key, aliases
                of one person grouped
locations       canonical sluglines, shared-root clustering
wardrobe        raw phrases, grouped by owning character
props           raw phrases, ungrouped
visual_design   raw phrases, ungrouped
==============  ==========================================================

Every category satisfies the partition invariant: ungrouped plus all group
variants is exactly the category's entity set and no entity is in two places.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from sceneintel.breakdown.base import Breakdown, EntityCategory, Scene, as_string_list
from sceneintel.canonical import canonicalize, is_likely_vehicle_location
from sceneintel.config import ConfigModel, load_config
from sceneintel.utils.logging import get_logger

from .base import CategoryData
from .characters import cluster_characters
from .ids import GroupIdGenerator
from .locations import LocationClusterer, cluster_locations, clusterer_for
from .wardrobe import cluster_wardrobe

__all__ = [
    "collect_category",
    "canonical_entities",
    "build_global_elements",
    "elements_to_dict",
]

_LOG = get_logger(__name__)


def collect_category(
    breakdown: Breakdown,
    category: EntityCategory,
    cfg: ConfigModel | None = None,
) -> list[str]:
    """Return raw mentions of ``category`` de-duplicated in first-seen order."""

    cfg = cfg or load_config()
    keys: Sequence[str] = getattr(cfg.categories, category.value)
    items = _from_analysis(breakdown.analysis, keys, category)
    if not items:
        items = _from_scenes(breakdown.scenes, keys, category)
    return list(dict.fromkeys(items))


def _from_analysis(
    analysis: Mapping[str, object], keys: Sequence[str], category: EntityCategory
) -> list[str]:
    items: list[str] = []
    for key in keys:
        items.extend(as_string_list(analysis.get(key), category))
    return items


def _from_scenes(
    scenes: Iterable[Scene], keys: Sequence[str], category: EntityCategory
) -> list[str]:
    items: list[str] = []
    for scene in scenes:
        for key in keys:
            items.extend(scene.values(key, category))
    return items


def canonical_entities(raw: Iterable[str], category: EntityCategory) -> list[str]:
    """Return canonical, non-empty, de-duplicated entities for ``raw``.

    Characters are de-duplicated on their upper-cased form, keeping the first
    display spelling.
    """

    seen: dict[str, str] = {}
    for item in raw:
        name = canonicalize(item, category)
        if not name:
            continue
        key = name.upper() if category is EntityCategory.CHARACTER else name
        seen.setdefault(key, name)
    return list(seen.values())


def build_global_elements(
    breakdown: Breakdown,
    cfg: ConfigModel | None = None,
    *,
    ids: GroupIdGenerator | None = None,
    clusterer: LocationClusterer | None = None,
) -> dict[str, CategoryData]:
    """Return the element catalogue keyed by category name.

    A fresh :class:`GroupIdGenerator` is used unless ``ids`` is supplied, so
    group identifiers are unique across all categories of one build.
    """

    cfg = cfg or load_config()
    ids = ids or GroupIdGenerator()
    clusterer = clusterer or clusterer_for(cfg)

    characters = canonical_entities(
        collect_category(breakdown, EntityCategory.CHARACTER, cfg), EntityCategory.CHARACTER
    )

    locations = canonical_entities(
        collect_category(breakdown, EntityCategory.LOCATION, cfg), EntityCategory.LOCATION
    )
    if cfg.locations.drop_vehicles:
        kept = [loc for loc in locations if not is_likely_vehicle_location(loc)]
        _LOG.debug("dropped %d vehicle locations", len(locations) - len(kept))
        locations = kept

    wardrobe = collect_category(breakdown, EntityCategory.WARDROBE, cfg)
    props = canonical_entities(
        collect_category(breakdown, EntityCategory.PROP, cfg), EntityCategory.PROP
    )
    motifs = canonical_entities(
        collect_category(breakdown, EntityCategory.VISUAL_MOTIF, cfg),
        EntityCategory.VISUAL_MOTIF,
    )

    location_data = cluster_locations(locations, cfg, ids=ids, clusterer=clusterer)
    wardrobe_data = cluster_wardrobe(wardrobe, ids=ids)
    character_data = cluster_characters(characters, ids=ids)

    return {
        EntityCategory.CHARACTER.value: character_data,
        EntityCategory.LOCATION.value: location_data,
        EntityCategory.WARDROBE.value: wardrobe_data,
        EntityCategory.PROP.value: CategoryData(ungrouped=tuple(props)),
        EntityCategory.VISUAL_MOTIF.value: CategoryData(ungrouped=tuple(motifs)),
    }


def elements_to_dict(elements: Mapping[str, CategoryData]) -> dict[str, object]:
    """Return a JSON-serializable view of ``elements``."""

    return {name: data.to_dict() for name, data in elements.items()}
