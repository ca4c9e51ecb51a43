"""Seeded synthetic breakdown generator.

Produces breakdown documents of arbitrary length for profiling and property
tests.  Character frequency follows a rough Zipf curve so the cast has a
clear head and a long tail; locations are drawn from a pool of root families
decorated with scene-type prefixes and times of day; a few crowd roles and
silent extras are sprinkled in.

The output is plain data (lists and dicts), identical for identical
arguments.
"""

from __future__ import annotations

import random
from typing import Any

from evaluation.fuzz import FuzzOptions, mutate_character, mutate_location, rng_from_seed

__all__ = ["CAST", "LOCATION_FAMILIES", "synthetic_breakdown"]

CAST: tuple[str, ...] = (
    "JOHN",
    "MARY",
    "DETECTIVE RUIZ",
    "PATEL",
    "ELEANOR",
    "MARCUS",
    "THE STRANGER",
    "AUNT BEA",
    "KENJI",
    "LUCIA",
    "OSCAR",
    "PRIYA",
    "WALT",
    "YUSUF",
    "ZOE",
    "HAROLD",
    "INGRID",
    "FELIX",
    "GRETA",
    "NADIA",
)

LOCATION_FAMILIES: tuple[tuple[str, ...], ...] = (
    ("HOSPITAL", "HOSPITAL CAFETERIA", "HOSPITAL PARKING LOT", "HOSPITAL ROOM 4"),
    ("POLICE STATION", "POLICE STATION BULLPEN", "STATION ROOF"),
    ("APARTMENT 3B", "APARTMENT 3B KITCHEN", "APARTMENT 3B BEDROOM"),
    ("HARBOR", "HARBOR DOCKS", "HARBOR OFFICE"),
    ("DINER",),
    ("CITY PARK",),
    ("WAREHOUSE", "WAREHOUSE LOFT"),
)

_CROWD = ("COP #1", "COP #2", "WAITRESS", "NURSE", "BYSTANDER")
_WORDS = (
    "wait", "listen", "we", "have", "to", "go", "now", "before", "they",
    "find", "out", "I", "never", "said", "that", "tense", "quiet", "paces",
)
_WARDROBE = ("gray suit", "leather jacket", "green scrubs", "red scarf", "work boots")


def _phrase(rng: random.Random, n: int) -> str:
    return " ".join(rng.choice(_WORDS) for _ in range(n))


def synthetic_breakdown(
    n_scenes: int,
    *,
    seed: int = 0,
    cast_size: int = len(CAST),
    noisy: bool = True,
) -> dict[str, Any]:
    """Return a breakdown mapping with ``n_scenes`` scene records.

    When ``noisy`` is true character and location mentions are decorated with
    :mod:`evaluation.fuzz` mutations; canonical results are unaffected.
    """

    rng = rng_from_seed(seed)
    opts = FuzzOptions()
    cast = CAST[: max(1, min(cast_size, len(CAST)))]
    weights = [1.0 / (rank + 1) for rank in range(len(cast))]

    scenes: list[dict[str, Any]] = []
    for idx in range(n_scenes):
        n_chars = rng.randint(1, min(4, len(cast)))
        present: list[str] = []
        while len(present) < n_chars:
            name = rng.choices(cast, weights=weights, k=1)[0]
            if name not in present:
                present.append(name)

        characters: list[Any] = []
        for name in present:
            raw = mutate_character(name, seed=seed * 7919 + idx, opts=opts) if noisy else name
            if rng.random() < 0.15:
                characters.append(raw)
                continue
            characters.append(
                {
                    "name": raw,
                    "key_expressions": _phrase(rng, rng.randint(0, 12)),
                    "emotional_tone": rng.choice(["", "tense", "warm", "guarded"]),
                    "physical_behavior": _phrase(rng, rng.randint(0, 3)),
                }
            )
        if rng.random() < 0.2:
            characters.append(rng.choice(_CROWD))

        family = rng.choice(LOCATION_FAMILIES)
        location = rng.choice(family)
        if noisy:
            location = mutate_location(location, seed=seed * 104729 + idx, opts=opts)

        owner = present[0]
        scenes.append(
            {
                "scene_number": str(idx + 1),
                "page": idx // 2 + 1,
                "location_name": location,
                "characters": characters,
                "wardrobe": [{"character": owner, "clothing_style": rng.choice(_WARDROBE)}],
                "key_objects": [rng.choice(["badge", "revolver", "letter", "keys"])],
            }
        )
    return {"scenes": scenes}
