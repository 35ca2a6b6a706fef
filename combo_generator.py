from __future__ import annotations

import random
from typing import Optional, Protocol, Tuple

from gameplay_models import Direction, Policy


# Draw order is fixed so a seeded generator reproduces the same combo.
DIRECTION_ALPHABET: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


class RandomSource(Protocol):
    def choice(self, seq): ...


def generate_combo(policy: Policy, rng: Optional[RandomSource] = None) -> Tuple[Direction, ...]:
    """
    Draw policy.length directions uniformly, with replacement.

    Adjacent repeats (up, up) are part of the difficulty and are kept.
    """
    random_generator = rng if rng is not None else random
    return tuple(random_generator.choice(DIRECTION_ALPHABET) for _ in range(int(policy.length)))


def _run_unit_tests() -> None:
    from gameplay_models import DIFFICULTIES

    for policy in DIFFICULTIES:
        combo = generate_combo(policy, random.Random(7))
        assert len(combo) == policy.length
        assert all(direction in DIRECTION_ALPHABET for direction in combo)

    first = generate_combo(DIFFICULTIES[-1], random.Random(42))
    second = generate_combo(DIFFICULTIES[-1], random.Random(42))
    assert first == second


if __name__ == "__main__":
    _run_unit_tests()
    print("combo_generator.py: ok")
