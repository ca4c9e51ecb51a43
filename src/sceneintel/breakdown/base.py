"""Core scene breakdown model.

This module defines the immutable primitives shared by the canonicalizer, the
cluster builder and the salience ranker.  Records arrive from an upstream
extraction step as loosely shaped mappings; parsing here is deliberately
forgiving: a category field may hold a single string or a list, a character
mention may be a bare name or a mapping with descriptive sub-fields, and page
or scene numbers may be strings such as ``"12A"``.  Anything unusable is
treated as absent rather than rejected.

Only the document shape itself is validated: :func:`parse_breakdown` raises
:class:`~sceneintel.utils.errors.BreakdownFormatError` when handed something
that is neither a scene list nor a mapping containing one.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from sceneintel.utils.errors import BreakdownFormatError

__all__ = [
    "EntityCategory",
    "CharacterMention",
    "Scene",
    "Breakdown",
    "as_string_list",
    "parse_int_prefix",
    "scene_from_record",
    "scenes_from_records",
    "parse_breakdown",
]

SCENE_LIST_KEYS: tuple[str, ...] = ("scenes", "scene_breakdown")

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


class EntityCategory(Enum):
    """Categories of raw mentions carried by a breakdown."""

    CHARACTER = "characters"
    LOCATION = "locations"
    WARDROBE = "wardrobe"
    PROP = "props"
    VISUAL_MOTIF = "visual_design"


def parse_int_prefix(value: object) -> int | None:
    """Return the leading integer of ``value`` or ``None``.

    ``"12A"`` yields ``12`` and ``4.5`` yields ``4``.  Booleans, empty values
    and strings without leading digits yield ``None``.
    """

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else None
    return None


def _wardrobe_text(item: Mapping[str, Any]) -> str | None:
    owner = item.get("character")
    look = item.get("clothing_style") or item.get("description")
    if isinstance(owner, str) and owner.strip() and isinstance(look, str) and look.strip():
        return f"{owner.strip()} - {look.strip()}"
    if isinstance(look, str) and look.strip():
        return look.strip()
    return None


def _item_text(item: object, category: EntityCategory | None) -> str | None:
    if isinstance(item, str):
        return item if item else None
    if isinstance(item, Mapping):
        if category is EntityCategory.WARDROBE:
            return _wardrobe_text(item)
        name = item.get("name")
        return name if isinstance(name, str) and name else None
    return None


def as_string_list(value: object, category: EntityCategory | None = None) -> list[str]:
    """Return ``value`` as a list of non-empty strings.

    A plain string becomes a one-element list and a list keeps its usable
    items in order.  Mapping items are rendered with their ``name`` (or, for
    wardrobe, ``"CHARACTER - clothing"``).  Any other shape yields ``[]``.
    """

    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        items: list[str] = []
        for item in value:
            text = _item_text(item, category)
            if text is not None:
                items.append(text)
        return items
    return []


def _field_text(value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(v for v in value if isinstance(v, str))
    return ""


@dataclass(slots=True, frozen=True)
class CharacterMention:
    """A single character mention inside one scene.

    ``details`` holds the descriptive sub-fields (short behavioural or
    emotional phrases) as plain strings; absent fields are simply missing.
    """

    name: str
    details: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: object) -> "CharacterMention | None":
        """Build a mention from a bare name or a mapping; ``None`` if unusable."""

        if isinstance(raw, str):
            return cls(raw) if raw else None
        if isinstance(raw, Mapping):
            name = raw.get("name")
            if not isinstance(name, str) or not name:
                return None
            details = {
                str(k): _field_text(v)
                for k, v in raw.items()
                if k != "name" and _field_text(v)
            }
            return cls(name, details)
        return None

    def detail(self, key: str) -> str:
        """Return sub-field ``key`` or an empty string."""

        return self.details.get(key, "")


@dataclass(slots=True, frozen=True)
class Scene:
    """One element of the ordered breakdown.

    ``index`` is the 0-based position in the input sequence.  ``page`` and
    ``scene_number`` are the explicit values when the record carries usable
    ones.  ``fields`` keeps the untouched record for category lookups.
    """

    index: int
    characters: tuple[CharacterMention, ...] = ()
    page: int | None = None
    scene_number: int | None = None
    fields: Mapping[str, Any] = field(default_factory=dict)

    @property
    def position(self) -> int:
        """Return the 1-based position of the scene."""

        return self.index + 1

    @property
    def page_position(self) -> int:
        """Return the explicit page when present, else the 1-based position."""

        return self.page if self.page is not None else self.position

    @property
    def number(self) -> int:
        """Return the explicit scene number when present, else the position."""

        return self.scene_number if self.scene_number is not None else self.position

    def values(self, key: str, category: EntityCategory | None = None) -> list[str]:
        """Return category field ``key`` as a list of strings."""

        return as_string_list(self.fields.get(key), category)


def _positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None


def scene_from_record(index: int, record: object) -> Scene:
    """Return a :class:`Scene` for ``record`` at position ``index``."""

    if not isinstance(record, Mapping):
        return Scene(index=index)
    raw_characters = record.get("characters")
    if isinstance(raw_characters, str):
        raw_characters = [raw_characters]
    mentions: list[CharacterMention] = []
    if isinstance(raw_characters, (list, tuple)):
        for raw in raw_characters:
            mention = CharacterMention.from_raw(raw)
            if mention is not None:
                mentions.append(mention)
    return Scene(
        index=index,
        characters=tuple(mentions),
        page=_positive(parse_int_prefix(record.get("page"))),
        scene_number=_positive(parse_int_prefix(record.get("scene_number"))),
        fields=dict(record),
    )


def scenes_from_records(records: Iterable[object]) -> tuple[Scene, ...]:
    """Return scenes for ``records`` preserving their order."""

    return tuple(scene_from_record(i, rec) for i, rec in enumerate(records))


@dataclass(slots=True, frozen=True)
class Breakdown:
    """A parsed breakdown: ordered scenes plus optional analysis-level fields."""

    scenes: tuple[Scene, ...]
    analysis: Mapping[str, Any] = field(default_factory=dict)


def parse_breakdown(document: object) -> Breakdown:
    """Return a :class:`Breakdown` for a decoded JSON/YAML ``document``.

    Accepted shapes are a list of scene records, or a mapping holding the list
    under ``scenes`` or ``scene_breakdown`` next to analysis-level category
    keys such as ``recurring_locations``.  A mapping without a scene list is
    taken as analysis-only (no scenes).
    """

    if isinstance(document, Sequence) and not isinstance(document, (str, bytes)):
        return Breakdown(scenes=scenes_from_records(document))
    if isinstance(document, Mapping):
        records: object = []
        for key in SCENE_LIST_KEYS:
            if key in document:
                records = document[key]
                break
        if records is None:
            records = []
        if not isinstance(records, (list, tuple)):
            raise BreakdownFormatError("scene list must be an array of scene records")
        analysis = {k: v for k, v in document.items() if k not in SCENE_LIST_KEYS}
        return Breakdown(scenes=scenes_from_records(records), analysis=analysis)
    raise BreakdownFormatError(
        f"expected a scene list or breakdown mapping, got {type(document).__name__}"
    )
