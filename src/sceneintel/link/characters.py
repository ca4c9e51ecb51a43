"""Character alias resolution.

Canonical character names are folded into alias clusters so that the various
ways a script refers to one person end up in a single element group:

* title plus surname joins the full name (``DR. WELLS`` -> ``HOWARD WELLS``)
* a bare first name joins a full name when no other cluster shares that first
  name (``HOWARD`` -> ``HOWARD WELLS``)
* a bare surname joins a full name (``WELLS`` -> ``HOWARD WELLS``)
* a longer name joins an existing single-word cluster with the same first word
  (``MARY JONES`` -> ``MARY``) and becomes its canonical form

Every merge requires the cluster's name to read as a person name, so cues such
as ``HOWARD ANSWERING MACHINE`` never join ``HOWARD``.  Names are processed in
first-seen order; clusters of two or more names become groups and the rest
stay ungrouped, which keeps the partition invariant of the category.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from sceneintel.canonical import rules
from sceneintel.utils.logging import get_logger

from .base import CategoryData, ElementGroup
from .ids import GroupIdGenerator

__all__ = ["AliasCluster", "resolve_character_aliases", "cluster_characters"]

_LOG = get_logger(__name__)


@dataclass(slots=True)
class AliasCluster:
    canonical: str
    members: List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.canonical.upper()

    @property
    def parts(self) -> list[str]:
        return rules.strip_character_title(self.key).split()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _first_name_shared(first: str, clusters: List[AliasCluster], skip: AliasCluster) -> bool:
    for other in clusters:
        if other is skip:
            continue
        parts = other.parts
        if parts and parts[0] == first:
            return True
    return False


def _find_cluster(name: str, clusters: List[AliasCluster]) -> AliasCluster | None:
    key = name.upper()
    titled = rules.RX_CHARACTER_TITLE.match(key) is not None
    parts = rules.strip_character_title(key).split()
    if not parts:
        return None
    first, last = parts[0], parts[-1]

    for cluster in clusters:
        if key == cluster.key:
            return cluster
        existing = cluster.parts
        if not existing:
            continue
        full_name = len(existing) > 1
        person = rules.is_likely_person_name(cluster.canonical)

        if titled and len(parts) == 1 and full_name and existing[-1] == last and person:
            return cluster

        if len(parts) == 1 and full_name and existing[0] == first:
            if not person:
                continue
            if not _first_name_shared(first, clusters, cluster):
                return cluster

        if not titled and len(parts) == 1 and full_name and existing[-1] == first and person:
            return cluster

        if (
            len(existing) == 1
            and len(parts) > 1
            and existing[0] == first
            and rules.is_likely_person_name(name)
        ):
            return cluster
    return None


def _should_promote(name: str, cluster: AliasCluster) -> bool:
    key = name.upper()
    return (
        len(key) > len(cluster.key)
        and len(key.split()) > len(cluster.key.split())
        and rules.is_likely_person_name(name)
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_character_aliases(names: Iterable[str]) -> List[AliasCluster]:
    """Return alias clusters for canonical ``names`` in first-seen order."""

    clusters: List[AliasCluster] = []
    for name in dict.fromkeys(n for n in names if isinstance(n, str) and n.strip()):
        cluster = _find_cluster(name, clusters)
        if cluster is None:
            clusters.append(AliasCluster(canonical=name, members=[name]))
            continue
        cluster.members.append(name)
        if _should_promote(name, cluster):
            cluster.canonical = name
    return clusters


def cluster_characters(
    names: Iterable[str],
    ids: GroupIdGenerator | None = None,
) -> CategoryData:
    """Group canonical character ``names`` that are aliases of one person."""

    ids = ids or GroupIdGenerator()
    ungrouped: list[str] = []
    groups: list[ElementGroup] = []
    for cluster in resolve_character_aliases(names):
        if len(cluster.members) == 1:
            ungrouped.append(cluster.members[0])
            continue
        groups.append(
            ElementGroup(
                id=ids.next_id(),
                parent_name=cluster.canonical,
                variants=tuple(cluster.members),
            )
        )
    _LOG.debug("characters: %d alias groups, %d ungrouped", len(groups), len(ungrouped))
    return CategoryData(ungrouped=tuple(ungrouped), groups=tuple(groups))
