from __future__ import annotations

import random

import pytest

from combo_generator import DIRECTION_ALPHABET, generate_combo
from gameplay_models import DIFFICULTIES, Direction, Policy


class FirstChoiceRandom:
    def choice(self, seq):
        return seq[0]


@pytest.mark.parametrize("policy", DIFFICULTIES, ids=lambda policy: policy.label)
def test_combo_length_matches_policy(policy):
    for seed in range(20):
        combo = generate_combo(policy, random.Random(seed))
        assert len(combo) == policy.length
        assert all(isinstance(direction, Direction) for direction in combo)


def test_alphabet_covers_four_directions():
    assert set(DIRECTION_ALPHABET) == set(Direction)
    assert len(DIRECTION_ALPHABET) == 4


def test_repeats_are_not_suppressed():
    combo = generate_combo(Policy(length=6, time_ms=6000, label="Custom"), FirstChoiceRandom())
    assert combo == (Direction.UP,) * 6


def test_every_direction_is_drawn_eventually():
    rng = random.Random(1234)
    seen = set()
    for _ in range(50):
        seen.update(generate_combo(DIFFICULTIES[-1], rng))
    assert seen == set(Direction)


def test_module_random_used_without_rng():
    combo = generate_combo(DIFFICULTIES[0])
    assert len(combo) == DIFFICULTIES[0].length


def test_combo_is_immutable_tuple():
    combo = generate_combo(DIFFICULTIES[0], random.Random(0))
    assert isinstance(combo, tuple)
