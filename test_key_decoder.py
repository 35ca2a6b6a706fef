from __future__ import annotations

import pytest

from gameplay_models import Direction
from key_decoder import DEFAULT_KEY_MAP, decode_key


@pytest.mark.parametrize(
    "key_name, expected",
    [
        ("w", Direction.UP),
        ("W", Direction.UP),
        ("a", Direction.LEFT),
        ("s", Direction.DOWN),
        ("D", Direction.RIGHT),
        ("ArrowUp", Direction.UP),
        ("arrowdown", Direction.DOWN),
        ("ARROWLEFT", Direction.LEFT),
        ("ArrowRight", Direction.RIGHT),
        ("Up", Direction.UP),
        (" left ", Direction.LEFT),
    ],
)
def test_known_keys(key_name, expected):
    assert decode_key(key_name) == expected


@pytest.mark.parametrize("key_name", ["q", "Enter", " ", "", "ww", "arrow"])
def test_unmapped_keys_are_ignored(key_name):
    assert decode_key(key_name) is None


def test_custom_map_replaces_default():
    custom = {"i": Direction.UP}
    assert decode_key("I", custom) == Direction.UP
    assert decode_key("w", custom) is None


def test_default_map_has_both_synonym_sets_for_each_direction():
    for direction in Direction:
        names = {name for name, mapped in DEFAULT_KEY_MAP.items() if mapped == direction}
        assert "arrow" + direction.value in names
        assert any(len(name) == 1 for name in names)
