"""Named pattern rules used for mention canonicalization and parsing.

Each rule is a module level compiled expression (or a tiny function wrapping
one) so it can be unit tested in isolation.  Rules are grouped by the mention
category they apply to.
"""

from __future__ import annotations

import re
from typing import Iterable

__all__ = [
    "RX_APOSTROPHE",
    "RX_WHITESPACE",
    "RX_PARENTHETICAL",
    "RX_UNCLOSED_PARENTHETICAL",
    "CHARACTER_CUT_MARKERS",
    "RX_CHARACTER_TITLE",
    "NON_PERSON_WORDS",
    "RX_PERSON_WORD",
    "RX_DASH_DESCRIPTOR",
    "RX_HEADING_PREFIX",
    "TIME_OF_DAY_WORDS",
    "RX_TIME_OF_DAY",
    "RX_LOCATION_TOKEN_SPLIT",
    "RX_WARDROBE_OWNER_DASH",
    "RX_WARDROBE_OWNER_POSSESSIVE",
    "normalize_apostrophes",
    "collapse_whitespace",
    "strip_parentheticals",
    "strip_character_title",
    "is_likely_person_name",
    "earliest_cut_index",
    "strip_dash_descriptor",
    "strip_heading_prefix",
    "strip_time_of_day",
    "compile_crowd_role",
    "title_word",
]

# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------

RX_APOSTROPHE: re.Pattern[str] = re.compile(r"[’‘`´]")
RX_WHITESPACE: re.Pattern[str] = re.compile(r"\s+")


def normalize_apostrophes(value: str) -> str:
    """Replace curly and backtick apostrophes with ``'``."""

    return RX_APOSTROPHE.sub("'", value)


def collapse_whitespace(value: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""

    return RX_WHITESPACE.sub(" ", value).strip()


def title_word(value: str) -> str:
    """Return ``value`` with the first character upper and the rest lower."""

    return value[:1].upper() + value[1:].lower()


# ---------------------------------------------------------------------------
# Character names
# ---------------------------------------------------------------------------

# Age, description or extension annotations such as ``(40s)`` or ``(V.O.)``.
RX_PARENTHETICAL: re.Pattern[str] = re.compile(r"\s*\(.*?\)\s*")
# A parenthesis opened but never closed runs to the end of the string.
RX_UNCLOSED_PARENTHETICAL: re.Pattern[str] = re.compile(r"\s*\([^)]*$")

CHARACTER_CUT_MARKERS: tuple[str, ...] = (" - ", ": ", ", ")


def strip_parentheticals(value: str) -> str:
    """Remove every parenthetical annotation from ``value``."""

    value = RX_PARENTHETICAL.sub(" ", value)
    value = RX_UNCLOSED_PARENTHETICAL.sub("", value)
    return collapse_whitespace(value)


def earliest_cut_index(value: str, markers: Iterable[str] = CHARACTER_CUT_MARKERS) -> int | None:
    """Return the earliest positive index of any cut marker, else ``None``."""

    hits = [idx for idx in (value.find(m) for m in markers) if idx > 0]
    return min(hits) if hits else None


# Honorific or rank before a name: ``DR. WELLS``, ``SGT PEPPER``.
RX_CHARACTER_TITLE: re.Pattern[str] = re.compile(
    r"^(?:DR|MR|MRS|MS|MISS|PROFESSOR|PROF|CAPTAIN|CAPT|DETECTIVE|DET|OFFICER|AGENT"
    r"|REVEREND|REV|FATHER|SISTER|BROTHER|SERGEANT|SGT|LIEUTENANT|LT|GENERAL|GEN"
    r"|COLONEL|COL|MAJOR|MAJ|CORPORAL|CPL|PRIVATE|PVT|JUDGE|SENATOR|GOVERNOR|GOV"
    r"|PRESIDENT|KING|QUEEN|PRINCE|PRINCESS|LORD|LADY|SIR|DAME)\.?\s+",
    re.IGNORECASE,
)

# Cue words naming a device or a voice rather than a person.
NON_PERSON_WORDS: frozenset[str] = frozenset(
    {
        "ANSWERING", "MACHINE", "SPEAKER", "RADIO", "TV", "TELEVISION",
        "PHONE", "COMPUTER", "VOICE", "SCREEN", "MONITOR", "SIGN",
        "ALARM", "SYSTEM", "RECORDING", "MESSAGE", "ANNOUNCEMENT",
        "INTERCOM", "LOUDSPEAKER", "PA", "NARRATOR", "NEWS",
        "DISPATCHER", "OPERATOR", "911",
    }
)

RX_PERSON_WORD: re.Pattern[str] = re.compile(r"^[A-Z][A-Z'-]*$", re.IGNORECASE)


def strip_character_title(value: str) -> str:
    """Remove one leading honorific from ``value``."""

    return RX_CHARACTER_TITLE.sub("", value, count=1).strip()


def is_likely_person_name(value: str) -> bool:
    """Return ``True`` when ``value`` reads as a one to three word person name."""

    words = strip_character_title(value).upper().split()
    if not words or len(words) > 3:
        return False
    if any(w in NON_PERSON_WORDS for w in words):
        return False
    return all(RX_PERSON_WORD.match(w) for w in words)


# ---------------------------------------------------------------------------
# Location sluglines
# ---------------------------------------------------------------------------

# Free-text descriptor after a dash: ``HOSPITAL - where it all began``.
RX_DASH_DESCRIPTOR: re.Pattern[str] = re.compile(r"\s*[–—-]\s+.*$")

# Scene-type prefix.  The lookahead keeps words such as ``INTERSTATE`` or
# ``EXTRA`` intact.
RX_HEADING_PREFIX: re.Pattern[str] = re.compile(
    r"^(?:INT\.?/EXT\.?|I/E\.?|INT\.?|EXT\.?)(?![A-Za-z])[\s.–—-]*",
    re.IGNORECASE,
)

TIME_OF_DAY_WORDS: tuple[str, ...] = (
    "MOMENTS LATER",
    "DAY",
    "NIGHT",
    "DAWN",
    "DUSK",
    "MORNING",
    "EVENING",
    "AFTERNOON",
    "LATER",
    "CONTINUOUS",
)

RX_TIME_OF_DAY: re.Pattern[str] = re.compile(
    rf"\s*[–—-]\s*(?:{'|'.join(TIME_OF_DAY_WORDS)})\s*$",
    re.IGNORECASE,
)

RX_LOCATION_TOKEN_SPLIT: re.Pattern[str] = re.compile(r"[\s/]+")


def strip_dash_descriptor(value: str) -> str:
    return RX_DASH_DESCRIPTOR.sub("", value).strip()


def strip_heading_prefix(value: str) -> str:
    return RX_HEADING_PREFIX.sub("", value).strip()


def strip_time_of_day(value: str) -> str:
    return RX_TIME_OF_DAY.sub("", value).strip()


# ---------------------------------------------------------------------------
# Wardrobe phrases
# ---------------------------------------------------------------------------

# ``JOHN - blue suit`` / ``JOHN: gray coat``; the owner is kept verbatim.
RX_WARDROBE_OWNER_DASH: re.Pattern[str] = re.compile(
    r"^([A-Z][A-Za-z'\s]+?)\s*[–—:-]\s+(.+)$"
)
# ``John's lab coat``; the owner is upper-cased by the caller.
RX_WARDROBE_OWNER_POSSESSIVE: re.Pattern[str] = re.compile(
    r"^([A-Z][A-Za-z'\s]+?)'s\s+(.+)$", re.IGNORECASE
)


# ---------------------------------------------------------------------------
# Crowd / background roles
# ---------------------------------------------------------------------------


def compile_crowd_role(roles: Iterable[str]) -> re.Pattern[str]:
    """Return a pattern matching a whole cleaned name that is a crowd role.

    A role may be followed by an optional ``#`` and digits (``COP #2``).  An
    empty role list yields a pattern that never matches.
    """

    escaped = sorted({re.escape(r.strip().upper()) for r in roles if r.strip()}, key=len)
    if not escaped:
        return re.compile(r"(?!x)x")
    return re.compile(rf"^(?:{'|'.join(reversed(escaped))})\s*#?\d*$", re.IGNORECASE)
