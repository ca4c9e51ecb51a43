"""Tests for tolerant breakdown parsing."""

from __future__ import annotations

import pytest

from sceneintel.breakdown import (
    CharacterMention,
    EntityCategory,
    Scene,
    as_string_list,
    parse_breakdown,
    scenes_from_records,
)
from sceneintel.breakdown.base import parse_int_prefix
from sceneintel.utils.errors import BreakdownError, BreakdownFormatError


def test_parse_int_prefix() -> None:
    assert parse_int_prefix("12A") == 12
    assert parse_int_prefix(" 7 ") == 7
    assert parse_int_prefix(4.9) == 4
    assert parse_int_prefix(3) == 3
    assert parse_int_prefix("A12") is None
    assert parse_int_prefix("") is None
    assert parse_int_prefix(True) is None
    assert parse_int_prefix(None) is None


def test_as_string_list_shapes() -> None:
    assert as_string_list("HOSPITAL") == ["HOSPITAL"]
    assert as_string_list("") == []
    assert as_string_list(["a", "", 3, None, "b"]) == ["a", "b"]
    assert as_string_list({"name": "x"}) == []
    assert as_string_list(None) == []
    assert as_string_list([{"name": "badge"}, {"label": "x"}]) == ["badge"]


def test_wardrobe_objects_render_with_owner() -> None:
    items = [
        {"character": "JOHN", "clothing_style": "blue suit"},
        {"clothing_style": "scarf"},
        {"character": "MARY"},
    ]
    assert as_string_list(items, EntityCategory.WARDROBE) == ["JOHN - blue suit", "scarf"]


def test_character_mention_from_raw() -> None:
    assert CharacterMention.from_raw("JOHN") == CharacterMention("JOHN")
    assert CharacterMention.from_raw("") is None
    assert CharacterMention.from_raw({"key_expressions": "hi"}) is None
    assert CharacterMention.from_raw(42) is None
    mention = CharacterMention.from_raw(
        {"name": "MARY", "key_expressions": ["run", "now"], "emotional_tone": "", "age": 30}
    )
    assert mention is not None
    assert mention.name == "MARY"
    assert mention.detail("key_expressions") == "run now"
    assert mention.detail("emotional_tone") == ""
    assert mention.detail("missing") == ""


def test_scene_positions_fall_back_to_index() -> None:
    scenes = scenes_from_records(
        [
            {"characters": ["JOHN"]},
            {"characters": "MARY", "page": "14", "scene_number": "9B"},
            {"page": 0, "scene_number": -3},
            "not a mapping",
        ]
    )
    assert [s.page_position for s in scenes] == [1, 14, 3, 4]
    assert [s.number for s in scenes] == [1, 9, 3, 4]
    assert scenes[1].characters == (CharacterMention("MARY"),)
    assert scenes[3] == Scene(index=3)


def test_scene_values() -> None:
    (scene,) = scenes_from_records([{"key_objects": ["badge", "gun"], "location_name": "DINER"}])
    assert scene.values("key_objects") == ["badge", "gun"]
    assert scene.values("location_name") == ["DINER"]
    assert scene.values("props") == []


def test_parse_breakdown_accepts_list_and_mappings() -> None:
    assert len(parse_breakdown([{}, {}]).scenes) == 2
    doc = {"scenes": [{}], "recurring_locations": ["DINER"]}
    parsed = parse_breakdown(doc)
    assert len(parsed.scenes) == 1
    assert parsed.analysis == {"recurring_locations": ["DINER"]}
    assert len(parse_breakdown({"scene_breakdown": [{}, {}, {}]}).scenes) == 3
    assert parse_breakdown({"recurring_props": ["x"]}).scenes == ()
    assert parse_breakdown({"scenes": None}).scenes == ()


@pytest.mark.parametrize("document", ["text", 42, None, {"scenes": "oops"}])
def test_parse_breakdown_rejects_bad_shapes(document: object) -> None:
    with pytest.raises(BreakdownFormatError):
        parse_breakdown(document)


def test_breakdown_error_is_value_error() -> None:
    assert issubclass(BreakdownFormatError, BreakdownError)
    assert issubclass(BreakdownError, ValueError)
