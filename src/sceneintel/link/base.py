"""Element group primitives shared by the cluster builders."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["ElementGroup", "CategoryData"]


@dataclass(slots=True, frozen=True)
class ElementGroup:
    """A named cluster of entities believed to share a real-world family.

    ``variants`` keeps discovery order.  Serialized with the ``parentName`` key
    expected by consuming applications.
    """

    id: str
    parent_name: str
    variants: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "parentName": self.parent_name, "variants": list(self.variants)}


@dataclass(slots=True, frozen=True)
class CategoryData:
    """Partition of one category into groups and an ungrouped remainder."""

    ungrouped: tuple[str, ...] = ()
    groups: tuple[ElementGroup, ...] = field(default_factory=tuple)

    @property
    def entities(self) -> list[str]:
        """Return every entity of the category: ungrouped then grouped."""

        items = list(self.ungrouped)
        for group in self.groups:
            items.extend(group.variants)
        return items

    def to_dict(self) -> dict[str, object]:
        return {
            "ungrouped": list(self.ungrouped),
            "groups": [g.to_dict() for g in self.groups],
        }
