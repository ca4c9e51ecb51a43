"""Tests for mention canonicalization."""

from __future__ import annotations

import pytest

from sceneintel.breakdown import EntityCategory
from sceneintel.canonical import (
    canonicalize,
    canonicalize_character,
    canonicalize_location,
    character_key,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("HOWARD WELLS (40s)", "HOWARD WELLS"),
        ("JOHN - a tired detective", "JOHN"),
        ("MARY: nervous", "MARY"),
        ("ELEANOR, soaked (30s)", "ELEANOR"),
        ("  Detective Ruiz  ", "Detective Ruiz"),
        ("MARY-JANE", "MARY-JANE"),
        ("(V.O.)", ""),
        ("", ""),
    ],
)
def test_canonicalize_character(raw: str, expected: str) -> None:
    assert canonicalize_character(raw) == expected


def test_character_key_is_upper() -> None:
    assert character_key("Detective Ruiz (50s)") == "DETECTIVE RUIZ"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("INT. HOSPITAL ROOM - NIGHT", "HOSPITAL ROOM"),
        ("EXT. CITY PARK – DAY", "CITY PARK"),
        ("INT./EXT. JOHN'S CAR - MOVING", "JOHN'S CAR"),
        ("INT. DINER - where they first met", "DINER"),
        ("EXT. INT. GARAGE", "GARAGE"),
        ("INTERSTATE 5 - NIGHT", "INTERSTATE 5"),
        ("WAREHOUSE", "WAREHOUSE"),
        ("INT. - NIGHT", ""),
    ],
)
def test_canonicalize_location(raw: str, expected: str) -> None:
    assert canonicalize_location(raw) == expected


def test_non_string_input_yields_empty() -> None:
    assert canonicalize_character(None) == ""
    assert canonicalize_location(42) == ""
    assert canonicalize(["x"], EntityCategory.PROP) == ""


def test_dispatch_by_category() -> None:
    assert canonicalize("JOHN (V.O.)", EntityCategory.CHARACTER) == "JOHN"
    assert canonicalize("EXT. PARK - DAY", EntityCategory.LOCATION) == "PARK"
    assert canonicalize("  rusty key  ", EntityCategory.PROP) == "rusty key"
    assert canonicalize("JOHN - suit", EntityCategory.WARDROBE) == "JOHN - suit"


@pytest.mark.parametrize(
    "raw",
    [
        "JOHN (V.O.) - tired",
        "MARY (40s): quiet, wary",
        "EXT. INT./EXT. HOSPITAL - ROOM 4 - NIGHT",
        "I/E INT. PARK – DAWN",
        "(O.S.) ZOE",
    ],
)
def test_idempotent(raw: str) -> None:
    once_c = canonicalize_character(raw)
    assert canonicalize_character(once_c) == once_c
    once_l = canonicalize_location(raw)
    assert canonicalize_location(once_l) == once_l
