from __future__ import annotations

import re

from sceneintel.link import GroupIdGenerator


def test_ids_embed_counter_and_millis() -> None:
    ids = GroupIdGenerator(clock=lambda: 1700000000.5)
    assert ids.next_id() == "grp_1_1700000000500"
    assert ids() == "grp_2_1700000000500"
    assert ids.issued == 2


def test_ids_unique_with_frozen_clock() -> None:
    ids = GroupIdGenerator(clock=lambda: 0.0)
    issued = [ids.next_id() for _ in range(50)]
    assert len(set(issued)) == 50


def test_default_clock_format() -> None:
    assert re.fullmatch(r"grp_1_\d+", GroupIdGenerator().next_id())


def test_generators_do_not_share_state() -> None:
    a = GroupIdGenerator(clock=lambda: 1.0)
    b = GroupIdGenerator(clock=lambda: 1.0)
    a.next_id()
    assert b.next_id() == "grp_1_1000"
