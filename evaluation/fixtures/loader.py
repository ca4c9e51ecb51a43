"""Curated breakdown fixtures with hand-checked gold results.

Each fixture is a pair ``<name>.breakdown.json`` / ``<name>.gold.json``.  The
gold file names its breakdown under ``doc`` and records the expected
character catalogue, the expected location and wardrobe partitions (with
parent names), the expected tier of selected characters and the crowd roles
that must not be ranked.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

from sceneintel.rank.tiers import CharacterTier

_ROOT = Path(__file__).resolve().parent

_BREAKDOWN_SUFFIX = ".breakdown.json"
_GOLD_SUFFIX = ".gold.json"


def list_fixtures(root: Path | str = _ROOT) -> list[str]:
    """Return fixture basenames where both breakdown and gold files exist."""
    root = Path(root)
    names: list[str] = []
    for doc in root.glob(f"*{_BREAKDOWN_SUFFIX}"):
        name = doc.name[: -len(_BREAKDOWN_SUFFIX)]
        if (root / f"{name}{_GOLD_SUFFIX}").exists():
            names.append(name)
    return sorted(names)


def breakdown_path(name: str) -> Path:
    return _ROOT / f"{name}{_BREAKDOWN_SUFFIX}"


def load_fixture(name: str) -> tuple[Any, dict[str, Any]]:
    """Return (breakdown document, gold dict) for fixture ``name``."""
    doc_path = breakdown_path(name)
    gold_path = _ROOT / f"{name}{_GOLD_SUFFIX}"
    document = json.loads(doc_path.read_text(encoding="utf-8"))
    gold = json.loads(gold_path.read_text(encoding="utf-8"))
    if gold.get("doc") != doc_path.name:
        raise ValueError(f"gold doc mismatch: {gold.get('doc')} != {doc_path.name}")
    return document, gold


def _partition_errors(label: str, section: object) -> list[str]:
    errors: list[str] = []
    if not isinstance(section, dict):
        return [f"{label}: missing partition"]
    groups = cast(list[dict[str, Any]], section.get("groups", []))
    ungrouped = cast(list[str], section.get("ungrouped", []))
    seen: set[str] = set()
    for idx, group in enumerate(groups):
        if not group.get("parentName"):
            errors.append(f"{label}[{idx}]: empty parentName")
        variants = cast(list[str], group.get("variants", []))
        if not variants:
            errors.append(f"{label}[{idx}]: no variants")
        for v in variants:
            if v in seen:
                errors.append(f"{label}: '{v}' listed twice")
            seen.add(v)
    for v in ungrouped:
        if v in seen:
            errors.append(f"{label}: '{v}' listed twice")
        seen.add(v)
    return errors


def validate_gold(gold: dict[str, Any]) -> list[str]:
    """Return a list of validation error messages for a gold dict."""
    errors: list[str] = []
    errors.extend(_partition_errors("locations", gold.get("locations")))
    errors.extend(_partition_errors("wardrobe", gold.get("wardrobe")))
    valid_tiers = {tier.value for tier in CharacterTier}
    tiers = cast(dict[str, str], gold.get("tiers", {}))
    for name, tier in tiers.items():
        if tier not in valid_tiers:
            errors.append(f"tiers: unknown tier '{tier}' for {name}")
        if name != name.upper():
            errors.append(f"tiers: key '{name}' is not upper-cased")
    excluded = cast(list[str], gold.get("excluded", []))
    for name in excluded:
        if name in tiers:
            errors.append(f"excluded: '{name}' also has a gold tier")
    return errors
