"""Picture-vehicle detection for location lists.

Extractors sometimes report a vehicle (``"JOHN'S TRUCK"``, ``"TAXI"``) as a
location.  :func:`is_likely_vehicle_location` flags short phrases built around
a vehicle term unless they also name a real place (``"BUS STATION"``).  A
leading possessive owner is ignored when counting words.
"""

from __future__ import annotations

import re

from .rules import collapse_whitespace, normalize_apostrophes

__all__ = ["is_likely_vehicle_location"]

RX_VEHICLE_TERM: re.Pattern[str] = re.compile(
    r"\b(car|truck|van|bus|suv|sedan|pickup|motorcycle|bike|bicycle|taxi|cab|limo|"
    r"limousine|convertible|coupe|tesla|miata|corvette|mustang|ferrari|porsche|mercedes|"
    r"bmw|audi|toyota|honda|nissan|ford|chevy|chevrolet|jeep)\b",
    re.IGNORECASE,
)
RX_PLACE_CONTEXT: re.Pattern[str] = re.compile(
    r"\b(room|hall|hallway|corridor|office|lot|parking|street|road|highway|restaurant|bar|"
    r"beach|bank|casino|home|house|hospital|university|school|lab|laboratory|orphanage|"
    r"facility|station|apartment|kitchen|bedroom|bathroom|deck|lobby|entrance|exit|"
    r"staircase|side door)\b",
    re.IGNORECASE,
)
# A vehicle noun within the first three words wins over place context.
RX_LEADING_VEHICLE: re.Pattern[str] = re.compile(
    r"^(?:[A-Z0-9'-]+\s+){0,2}(?:CAR|TRUCK|VAN|SUV|SEDAN|MOTORCYCLE|TESLA|MIATA|CORVETTE)\b"
)
RX_POSSESSIVE_OWNER: re.Pattern[str] = re.compile(r"^[A-Z0-9'-]+'S\s+")

_MAX_VEHICLE_WORDS = 4


def is_likely_vehicle_location(value: str) -> bool:
    """Return ``True`` when ``value`` reads as a vehicle rather than a place."""

    upper = collapse_whitespace(normalize_apostrophes(value)).upper()
    stripped = RX_POSSESSIVE_OWNER.sub("", upper).strip()
    if not stripped or not RX_VEHICLE_TERM.search(stripped):
        return False
    if len(stripped.split()) > _MAX_VEHICLE_WORDS:
        return False
    if not RX_PLACE_CONTEXT.search(stripped):
        return True
    return bool(RX_LEADING_VEHICLE.match(stripped))
