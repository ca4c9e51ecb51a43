"""Shared-root location clustering.

Root extraction
---------------
A location is split on whitespace and ``/``; tokens are upper-cased and kept
when longer than ``min_root_length - 1`` characters and not in the stop-list of
generic spatial words (``ROOM``, ``HALLWAY``, ``KITCHEN`` …).  The surviving
tokens form the location's *root set*.  Only roots of at least
``min_shared_root`` characters count as evidence that two locations belong
together.

Strategies
----------
Clustering sits behind the :class:`LocationClusterer` protocol so callers never
depend on a particular strategy.

``SeedRootClusterer`` (default)
    Greedy single-seed pass in list order.  Each unconsumed location seeds a
    cluster and pulls in every later unconsumed location sharing a root with
    the *seed*.  Membership is never decided against other members, so the
    relation is not transitive; only the seed may bridge two locations that
    share no root with each other.

``TransitiveRootClusterer``
    Union-find over the shared-root relation: connected components in first
    appearance order.

Clusters with a single member stay ungrouped.  A cluster of two or more is
named after the root present in at least as many occurrences as the cluster
has members; ties prefer more occurrences, then the shorter root, then
lexical order.  Without such a root the seed's name is used.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

from sceneintel.canonical import rules
from sceneintel.config import ConfigModel, load_config
from sceneintel.utils.logging import get_logger

from .base import CategoryData, ElementGroup
from .ids import GroupIdGenerator

__all__ = [
    "RootExtractor",
    "LocationClusterer",
    "SeedRootClusterer",
    "TransitiveRootClusterer",
    "clusterer_for",
    "pick_parent_name",
    "cluster_locations",
]

_LOG = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class RootExtractor:
    """Extract significant root tokens from location names."""

    stop_words: frozenset[str]
    min_root_length: int = 3
    min_shared_root: int = 4

    @classmethod
    def from_config(cls, cfg: ConfigModel) -> "RootExtractor":
        return cls(
            stop_words=frozenset(w.strip().upper() for w in cfg.locations.stop_words),
            min_root_length=cfg.locations.min_root_length,
            min_shared_root=cfg.locations.min_shared_root,
        )

    def roots(self, name: str) -> list[str]:
        """Return the root tokens of ``name`` in order of appearance."""

        tokens = (t.upper() for t in rules.RX_LOCATION_TOKEN_SPLIT.split(name) if t)
        return [t for t in tokens if len(t) >= self.min_root_length and t not in self.stop_words]

    def shared_root(self, seed_roots: Sequence[str], other_roots: Sequence[str]) -> str | None:
        """Return the first root of ``seed_roots`` long enough and present in ``other_roots``."""

        others = set(other_roots)
        for root in seed_roots:
            if len(root) >= self.min_shared_root and root in others:
                return root
        return None


@runtime_checkable
class LocationClusterer(Protocol):
    """Partition an ordered location list into clusters."""

    def cluster(self, locations: Sequence[str]) -> list[list[str]]:
        """Return clusters (singletons included) covering ``locations``."""

        ...


@dataclass(slots=True, frozen=True)
class SeedRootClusterer:
    """Greedy, seed-only, non-transitive shared-root clustering."""

    extractor: RootExtractor

    def cluster(self, locations: Sequence[str]) -> list[list[str]]:
        roots = [self.extractor.roots(loc) for loc in locations]
        consumed = [False] * len(locations)
        clusters: list[list[str]] = []
        for i, seed in enumerate(locations):
            if consumed[i]:
                continue
            consumed[i] = True
            members = [seed]
            for j in range(i + 1, len(locations)):
                if consumed[j]:
                    continue
                if self.extractor.shared_root(roots[i], roots[j]) is not None:
                    members.append(locations[j])
                    consumed[j] = True
            clusters.append(members)
        return clusters


@dataclass(slots=True, frozen=True)
class TransitiveRootClusterer:
    """Connected components of the shared-root relation (union-find)."""

    extractor: RootExtractor

    def cluster(self, locations: Sequence[str]) -> list[list[str]]:
        parent = list(range(len(locations)))

        def find(x: int) -> int:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        def union(a: int, b: int) -> None:
            ra, rb = find(a), find(b)
            if ra != rb:
                # keep the earliest index as representative
                parent[max(ra, rb)] = min(ra, rb)

        first_seen: dict[str, int] = {}
        for idx, loc in enumerate(locations):
            for root in self.extractor.roots(loc):
                if len(root) < self.extractor.min_shared_root:
                    continue
                if root in first_seen:
                    union(first_seen[root], idx)
                else:
                    first_seen[root] = idx

        components: dict[int, list[str]] = {}
        for idx, loc in enumerate(locations):
            components.setdefault(find(idx), []).append(loc)
        return list(components.values())


def clusterer_for(cfg: ConfigModel, strategy: str | None = None) -> LocationClusterer:
    """Return the clusterer configured by ``cfg`` (or the explicit ``strategy``)."""

    extractor = RootExtractor.from_config(cfg)
    name = strategy or cfg.locations.strategy
    if name == "transitive":
        return TransitiveRootClusterer(extractor)
    if name == "seed":
        return SeedRootClusterer(extractor)
    raise ValueError(f"unknown location clustering strategy: {name!r}")


def pick_parent_name(members: Sequence[str], extractor: RootExtractor) -> str:
    """Return the display parent name for a cluster of two or more ``members``."""

    counts: Counter[str] = Counter(
        root
        for member in members
        for root in extractor.roots(member)
        if len(root) >= extractor.min_shared_root
    )
    qualifying = [(root, n) for root, n in counts.items() if n >= len(members)]
    if not qualifying:
        return members[0]
    best, _ = min(qualifying, key=lambda item: (-item[1], len(item[0]), item[0]))
    return rules.title_word(best)


def cluster_locations(
    locations: Iterable[str],
    cfg: ConfigModel | None = None,
    *,
    ids: GroupIdGenerator | None = None,
    clusterer: LocationClusterer | None = None,
) -> CategoryData:
    """Cluster canonical ``locations`` into groups and an ungrouped remainder.

    ``locations`` is de-duplicated (first occurrence wins) and empty strings are
    dropped before clustering.
    """

    cfg = cfg or load_config()
    ids = ids or GroupIdGenerator()
    clusterer = clusterer or clusterer_for(cfg)
    extractor = RootExtractor.from_config(cfg)

    unique = list(dict.fromkeys(loc for loc in locations if loc))
    groups: list[ElementGroup] = []
    ungrouped: list[str] = []
    for members in clusterer.cluster(unique):
        if len(members) >= 2:
            groups.append(
                ElementGroup(
                    id=ids.next_id(),
                    parent_name=pick_parent_name(members, extractor),
                    variants=tuple(members),
                )
            )
        else:
            ungrouped.extend(members)
    _LOG.debug("locations: %d groups, %d ungrouped", len(groups), len(ungrouped))
    return CategoryData(ungrouped=tuple(ungrouped), groups=tuple(groups))
