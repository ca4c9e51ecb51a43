"""Character salience ranking.

The ranker makes one pass over the ordered scenes and derives, per distinct
character, a composite importance score in ``[0, 1]``, a rank and a tier.  It is
a pure function of its input: nothing is cached between calls and identical
scenes always produce identical output.

Accumulation
------------
Every mention is canonicalized and keyed by its upper-cased form.  Crowd roles
(``COP``, ``WAITER #2`` …) are rejected outright.  For each accepted mention
the scene counts as an appearance, its page position (explicit page or
1-based scene position) is recorded, and a *word-count proxy* is taken from
the mention's descriptive sub-fields.  A positive proxy, or a non-empty mood
field, makes the scene a dialogue scene for that character.  Within each scene
the two characters with the highest scene-local proxy gain one dominance
point.

Scoring
-------
With every maximum floored at ``1``::

    dialogue   = 0.6 * log_norm(words) + 0.4 * lin(dialogue_scenes)
    appearance = 0.7 * lin(appearance_scenes) + 0.3 * lin(pages)
    spread     = 0.6 * pages / total_pages + 0.4 * (last - first) / total_pages
    bonus      = lin(dominance)
    score      = 0.50 * dialogue + 0.30 * appearance + 0.15 * spread + 0.05 * bonus

``log_norm`` compresses the raw word total so one monologue-heavy scene cannot
dominate.  Weights come from ``cfg.ranking.weights``.

Ordering is by score, then dialogue scenes, appearances, earlier first page and
higher page density.  Tiers are assigned by :mod:`sceneintel.rank.tiers`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sceneintel.breakdown.base import CharacterMention, Scene, scene_from_record
from sceneintel.canonical import canonicalize_character
from sceneintel.canonical.rules import compile_crowd_role, title_word
from sceneintel.config import ConfigModel, load_config
from sceneintel.utils.logging import get_logger

from .tiers import CharacterTier, TierInputs, assign_tier

__all__ = [
    "CharacterStats",
    "CharacterRanking",
    "word_count_proxy",
    "accumulate",
    "rank_characters",
    "rankings_to_dicts",
]

_LOG = get_logger(__name__)

_MIN_KEY_LENGTH = 2


@dataclass(slots=True)
class CharacterStats:
    """Mutable per-character accumulator for one ranking pass."""

    key: str
    display: str
    words: int = 0
    dialogue_scenes: set[int] = field(default_factory=set)
    appearance_scenes: set[int] = field(default_factory=set)
    pages: set[int] = field(default_factory=set)
    scene_numbers: set[int] = field(default_factory=set)
    first_page: int | None = None
    last_page: int | None = None
    dominance: int = 0

    def touch_page(self, page: int) -> None:
        self.pages.add(page)
        self.first_page = page if self.first_page is None else min(self.first_page, page)
        self.last_page = page if self.last_page is None else max(self.last_page, page)


@dataclass(slots=True, frozen=True)
class CharacterRanking:
    """Derived salience metrics for one character."""

    name: str
    name_normalized: str
    rank: int
    score: float
    tier: CharacterTier
    words_spoken: int
    dialogue_scenes: int
    appearance_scenes: int
    pages: int
    first_page: int
    last_page: int
    page_density: float
    dominance: int
    scene_numbers: tuple[int, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "name_normalized": self.name_normalized,
            "rank": self.rank,
            "score": self.score,
            "tier": self.tier.value,
            "words_spoken": self.words_spoken,
            "dialogue_scenes": self.dialogue_scenes,
            "appearance_scenes": self.appearance_scenes,
            "pages": self.pages,
            "first_page": self.first_page,
            "last_page": self.last_page,
            "page_density": self.page_density,
            "dominance": self.dominance,
            "scene_numbers": list(self.scene_numbers),
        }


def word_count_proxy(mention: CharacterMention, fields: Iterable[str]) -> int:
    """Return the number of whitespace-delimited tokens across ``fields``."""

    text = " ".join(mention.detail(f) for f in fields)
    return len(text.split())


def _as_scenes(scenes: Iterable[object]) -> tuple[Scene, ...]:
    # Parsed scenes pass through; raw records are parsed at their own position.
    return tuple(
        item if isinstance(item, Scene) else scene_from_record(index, item)
        for index, item in enumerate(scenes)
    )


def accumulate(scenes: Sequence[Scene], cfg: ConfigModel) -> dict[str, CharacterStats]:
    """Return per-character statistics keyed by normalized name."""

    crowd = compile_crowd_role(cfg.ranking.crowd_roles)
    word_fields = cfg.ranking.mention_fields.word_fields
    mood_field = cfg.ranking.mention_fields.mood_field
    stats: dict[str, CharacterStats] = {}
    rejected = 0

    for scene in scenes:
        page = scene.page_position
        scene_words: dict[str, int] = {}
        for mention in scene.characters:
            display = canonicalize_character(mention.name)
            key = display.upper()
            if len(key) < _MIN_KEY_LENGTH:
                continue
            if crowd.match(key):
                rejected += 1
                continue
            entry = stats.get(key)
            if entry is None:
                entry = stats[key] = CharacterStats(key=key, display=display)

            entry.appearance_scenes.add(scene.index)
            entry.scene_numbers.add(scene.number)
            entry.touch_page(page)

            words = word_count_proxy(mention, word_fields)
            if words > 0 or mention.detail(mood_field):
                entry.dialogue_scenes.add(scene.index)
                entry.words += words
            scene_words[key] = scene_words.get(key, 0) + words

        leaders = sorted(scene_words.items(), key=lambda kv: -kv[1])[:2]
        for key, _ in leaders:
            stats[key].dominance += 1

    if rejected:
        _LOG.debug("rejected %d crowd-role mentions", rejected)
    return stats


def _order_key(
    score: float, density: float, stats: CharacterStats
) -> tuple[float, int, int, int, float]:
    """Sort key: higher score, more dialogue scenes, more appearances, earlier
    first page, then higher page density."""

    first_page = stats.first_page if stats.first_page is not None else 0
    return (
        -score,
        -len(stats.dialogue_scenes),
        -len(stats.appearance_scenes),
        first_page,
        -density,
    )


def _lin(x: float, peak: float) -> float:
    return x / peak if peak > 0 else 0.0


def _log(x: float, peak: float) -> float:
    return math.log1p(x) / math.log1p(peak) if peak > 0 else 0.0


def rank_characters(
    scenes: Iterable[object],
    cfg: ConfigModel | None = None,
) -> list[CharacterRanking]:
    """Return every distinct character ordered by salience (rank 1 first).

    ``scenes`` may be parsed :class:`Scene` objects or raw scene records.  An
    empty sequence yields an empty list.
    """

    cfg = cfg or load_config()
    ordered_scenes = _as_scenes(scenes)
    if not ordered_scenes:
        return []

    stats = accumulate(ordered_scenes, cfg)
    if not stats:
        return []

    total_scenes = len(ordered_scenes)
    total_pages = max(total_scenes, max(s.page_position for s in ordered_scenes), 1)
    entries = list(stats.values())

    max_words = max(max(e.words for e in entries), 1)
    max_dialogue = max(max(len(e.dialogue_scenes) for e in entries), 1)
    max_appear = max(max(len(e.appearance_scenes) for e in entries), 1)
    max_pages = max(max(len(e.pages) for e in entries), 1)
    max_dominance = max(max(e.dominance for e in entries), 1)

    w = cfg.ranking.weights
    scored: list[tuple[float, float, CharacterStats]] = []
    for e in entries:
        dialogue = w.dialogue_words * _log(e.words, max_words) + w.dialogue_scenes * _lin(
            len(e.dialogue_scenes), max_dialogue
        )
        appearance = w.appearance_scenes * _lin(
            len(e.appearance_scenes), max_appear
        ) + w.appearance_pages * _lin(len(e.pages), max_pages)
        if e.first_page is not None and e.last_page is not None:
            span = (e.last_page - e.first_page) / total_pages
        else:
            span = 0.0
        density = len(e.pages) / total_pages
        spread = w.spread_density * density + w.spread_span * span
        bonus = _lin(e.dominance, max_dominance)
        score = (
            w.dialogue_volume * dialogue
            + w.appearance_frequency * appearance
            + w.page_spread * spread
            + w.salience_bonus * bonus
        )
        scored.append((score, density, e))

    scored.sort(key=lambda item: _order_key(*item))

    rankings: list[CharacterRanking] = []
    for rank, (score, density, e) in enumerate(scored, start=1):
        tier = assign_tier(
            TierInputs(
                rank=rank,
                words=e.words,
                dialogue_scenes=len(e.dialogue_scenes),
                appearance_scenes=len(e.appearance_scenes),
                pages=len(e.pages),
                total_scenes=total_scenes,
                total_pages=total_pages,
            ),
            cfg.ranking.tiers,
        )
        rankings.append(
            CharacterRanking(
                name=title_word(e.display),
                name_normalized=e.key,
                rank=rank,
                score=score,
                tier=tier,
                words_spoken=e.words,
                dialogue_scenes=len(e.dialogue_scenes),
                appearance_scenes=len(e.appearance_scenes),
                pages=len(e.pages),
                first_page=e.first_page or 0,
                last_page=e.last_page or 0,
                page_density=density,
                dominance=e.dominance,
                scene_numbers=tuple(sorted(e.scene_numbers)),
            )
        )
    _LOG.debug("ranked %d characters over %d scenes", len(rankings), total_scenes)
    return rankings


def rankings_to_dicts(rankings: Iterable[CharacterRanking]) -> list[dict[str, object]]:
    """Return a JSON-serializable view of ``rankings``."""

    return [r.to_dict() for r in rankings]
