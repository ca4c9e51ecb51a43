"""Cluster builders grouping canonical entities into element groups."""

from .base import CategoryData, ElementGroup
from .characters import cluster_characters, resolve_character_aliases
from .elements import build_global_elements, collect_category, elements_to_dict
from .ids import GroupIdGenerator
from .locations import (
    LocationClusterer,
    RootExtractor,
    SeedRootClusterer,
    TransitiveRootClusterer,
    cluster_locations,
)
from .wardrobe import cluster_wardrobe, extract_wardrobe_owner

__all__ = [
    "CategoryData",
    "ElementGroup",
    "GroupIdGenerator",
    "LocationClusterer",
    "RootExtractor",
    "SeedRootClusterer",
    "TransitiveRootClusterer",
    "build_global_elements",
    "cluster_characters",
    "cluster_locations",
    "cluster_wardrobe",
    "collect_category",
    "elements_to_dict",
    "extract_wardrobe_owner",
    "resolve_character_aliases",
]
