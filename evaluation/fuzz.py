"""Deterministic mention fuzzing utilities.

The helpers in this module decorate clean character names, location names and
wardrobe phrases with the noise upstream extractors tend to produce.  Every
decoration is one the canonicalizer is expected to remove, so a fuzzed mention
must canonicalize to the same value as its clean base.

Examples of applied mutations:

* parenthetical annotations (``JOHN (V.O.)``, ``MARY (40s)``)
* trailing descriptors (``JOHN - a tired detective``, ``MARY: nervous``)
* scene-type prefixes, possibly stacked (``INT. EXT. GARAGE``)
* trailing times of day with ASCII, en or em dashes (``PARK – NIGHT``)
* free-text location descriptors (``DINER - where they first met``)
* straight to curly apostrophe swapping in wardrobe phrases

All edits are driven by a :class:`random.Random` seeded via
:func:`rng_from_seed`.  Given the same seed and options the output is fully
deterministic.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Literal

_PARENTHETICALS = ["(V.O.)", "(O.S.)", "(CONT'D)", "(40s)", "(late 20s)", "(on phone)"]
_CHARACTER_DESCRIPTORS = [
    " - a tired detective",
    " - mid-thirties",
    ": nervous",
    ": whispering",
    ", soaked to the bone",
]
_HEADING_PREFIXES = ["INT. ", "EXT. ", "INT./EXT. ", "I/E ", "int. ", "EXT "]
_TIMES_OF_DAY = ["DAY", "NIGHT", "DAWN", "DUSK", "MORNING", "CONTINUOUS", "MOMENTS LATER"]
_DASHES = ["-", "–", "—"]
_LOCATION_DESCRIPTORS = [" - where they first met", " - flashback", " – later that week"]


@dataclass(slots=True, frozen=True)
class FuzzOptions:
    """Configuration for the ``mutate_*`` helpers.

    Attributes mirror the probabilities for each mutation.  ``max_variants``
    controls how many mutated versions :func:`variants` yields.
    """

    max_variants: int = 50
    parenthetical_prob: float = 0.5
    descriptor_prob: float = 0.4
    prefix_prob: float = 0.7
    stacked_prefix_prob: float = 0.2
    time_of_day_prob: float = 0.6
    location_descriptor_prob: float = 0.3
    curly_apostrophe_prob: float = 0.5


def rng_from_seed(seed: int) -> random.Random:
    """Return a deterministic :class:`~random.Random` seeded with ``seed``."""

    return random.Random(seed)


def add_parenthetical(name: str, rng: random.Random) -> str:
    """Insert a parenthetical either after the name or inside a descriptor."""

    return f"{name} {rng.choice(_PARENTHETICALS)}"


def add_character_descriptor(name: str, rng: random.Random) -> str:
    return f"{name}{rng.choice(_CHARACTER_DESCRIPTORS)}"


def add_heading_prefix(location: str, rng: random.Random, *, stacked: bool = False) -> str:
    prefix = rng.choice(_HEADING_PREFIXES)
    if stacked:
        prefix = rng.choice(_HEADING_PREFIXES) + prefix
    return f"{prefix}{location}"


def add_time_of_day(location: str, rng: random.Random) -> str:
    return f"{location} {rng.choice(_DASHES)} {rng.choice(_TIMES_OF_DAY)}"


def add_location_descriptor(location: str, rng: random.Random) -> str:
    return f"{location}{rng.choice(_LOCATION_DESCRIPTORS)}"


def curly_apostrophes(text: str) -> str:
    """Replace straight apostrophes with right single quotation marks."""

    return text.replace("'", "’")


def mutate_character(name: str, *, seed: int, opts: FuzzOptions) -> str:
    """Return a noisy variant of a clean character ``name``."""

    rng = rng_from_seed(seed)
    mutated = name
    if rng.random() < opts.descriptor_prob:
        mutated = add_character_descriptor(mutated, rng)
    if rng.random() < opts.parenthetical_prob:
        mutated = add_parenthetical(mutated, rng)
    return mutated


def mutate_location(location: str, *, seed: int, opts: FuzzOptions) -> str:
    """Return a noisy slugline variant of a clean ``location``."""

    rng = rng_from_seed(seed)
    mutated = location
    if rng.random() < opts.prefix_prob:
        stacked = rng.random() < opts.stacked_prefix_prob
        mutated = add_heading_prefix(mutated, rng, stacked=stacked)
    if rng.random() < opts.time_of_day_prob:
        mutated = add_time_of_day(mutated, rng)
    if rng.random() < opts.location_descriptor_prob:
        mutated = add_location_descriptor(mutated, rng)
    return mutated


def mutate_wardrobe(phrase: str, *, seed: int, opts: FuzzOptions) -> str:
    """Return ``phrase`` with apostrophe style possibly swapped."""

    rng = rng_from_seed(seed)
    if rng.random() < opts.curly_apostrophe_prob:
        return curly_apostrophes(phrase)
    return phrase


def variants(
    value: str,
    *,
    kind: Literal["character", "location", "wardrobe"],
    base_seed: int,
    opts: FuzzOptions,
) -> Iterable[str]:
    """Yield deterministic fuzzed variants of ``value``."""

    mutate = {
        "character": mutate_character,
        "location": mutate_location,
        "wardrobe": mutate_wardrobe,
    }[kind]
    for i in range(opts.max_variants):
        yield mutate(value, seed=base_seed + i, opts=opts)


__all__ = [
    "FuzzOptions",
    "rng_from_seed",
    "add_parenthetical",
    "add_character_descriptor",
    "add_heading_prefix",
    "add_time_of_day",
    "add_location_descriptor",
    "curly_apostrophes",
    "mutate_character",
    "mutate_location",
    "mutate_wardrobe",
    "variants",
]
