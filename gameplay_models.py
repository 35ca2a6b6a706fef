# -*- coding: utf-8 -*-
########################
# gameplay_models.py
########################
# Purpose:
# - Core gameplay data models for the combo drill.
# - Defines directions, phases, difficulty presets and the presentation snapshot.
#
# Design notes:
# - Keep these models stable. Prefer extending with new optional fields rather than breaking changes.
# - No Qt usage. These are plain enums and dataclasses.
# - Policy.label is the identity key used for high score persistence.
#
########################
# Interfaces:
# Public enums:
# - class Direction(enum.Enum): UP | DOWN | LEFT | RIGHT
# - class Phase(enum.Enum): NORMAL | SUCCESS | ERROR
# - class ArrowStatus(enum.Enum): ERROR | SUCCESS | COMPLETED | PENDING
#
# Public dataclasses:
# - Policy(length: int, time_ms: int, label: str)
# - ComboElement(direction: Direction, status: ArrowStatus, hidden: bool)
# - GameSnapshot(elements, progress, phase, policy, sightread, previous_time_ms,
#                rolling_average_seconds, high_score_seconds, window_times_ms)
#
# Public constants and functions:
# - EASY, MEDIUM, HARD, DIFFICULTIES
# - policy_for_label(label: str) -> Policy
# - arrow_status(phase: Phase, progress: int, index: int) -> ArrowStatus
#
# Inputs/Outputs:
# - These types are exchanged between combo_generator, GameEngine, ScoreTracker,
#   ComboBoardWidget and the app controller.
#
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Optional, Tuple


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Phase(enum.Enum):
    NORMAL = "normal"
    SUCCESS = "success"
    ERROR = "error"


class ArrowStatus(enum.Enum):
    ERROR = "error"
    SUCCESS = "success"
    COMPLETED = "completed"
    PENDING = "pending"


class UnknownDifficultyError(KeyError):
    """Raised when a difficulty label does not name one of the presets."""


@dataclass(frozen=True)
class Policy:
    length: int
    time_ms: int
    label: str

    def __post_init__(self) -> None:
        if int(self.length) <= 0:
            raise ValueError(f"Policy length must be positive, got {self.length}")
        # time_ms is a nominal budget shown to players, never enforced.
        if int(self.time_ms) <= 0:
            raise ValueError(f"Policy time_ms must be positive, got {self.time_ms}")
        if not str(self.label).strip():
            raise ValueError("Policy label must not be empty")


EASY = Policy(length=4, time_ms=6000, label="Easy")
MEDIUM = Policy(length=8, time_ms=6000, label="Medium")
HARD = Policy(length=10, time_ms=6000, label="Hard")

DIFFICULTIES: Tuple[Policy, ...] = (EASY, MEDIUM, HARD)


def policy_for_label(label: str) -> Policy:
    normalized_label = (label or "").strip().lower()
    for policy in DIFFICULTIES:
        if policy.label.lower() == normalized_label:
            return policy
    known_labels = ", ".join(policy.label for policy in DIFFICULTIES)
    raise UnknownDifficultyError(f"Unknown difficulty {label!r}. Expected one of: {known_labels}")


def arrow_status(phase: Phase, progress: int, index: int) -> ArrowStatus:
    if phase == Phase.ERROR:
        return ArrowStatus.ERROR
    if phase == Phase.SUCCESS:
        return ArrowStatus.SUCCESS
    if int(progress) > int(index):
        return ArrowStatus.COMPLETED
    return ArrowStatus.PENDING


@dataclass(frozen=True)
class ComboElement:
    direction: Direction
    status: ArrowStatus
    hidden: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    elements: Tuple[ComboElement, ...]
    progress: int
    phase: Phase
    policy: Policy
    sightread: bool
    previous_time_ms: Optional[float]
    rolling_average_seconds: Optional[float]
    high_score_seconds: Optional[float]
    window_times_ms: Tuple[float, ...] = ()

    @property
    def combo(self) -> Tuple[Direction, ...]:
        return tuple(element.direction for element in self.elements)


def _run_unit_tests() -> None:
    assert [policy.length for policy in DIFFICULTIES] == [4, 8, 10]
    assert all(policy.time_ms == 6000 for policy in DIFFICULTIES)
    assert policy_for_label("medium") is MEDIUM
    assert policy_for_label(" HARD ") is HARD

    try:
        policy_for_label("Nightmare")
    except UnknownDifficultyError:
        pass
    else:
        raise AssertionError("unknown label must raise")

    try:
        Policy(length=0, time_ms=6000, label="Broken")
    except ValueError:
        pass
    else:
        raise AssertionError("zero length must raise")

    assert arrow_status(Phase.ERROR, 3, 0) == ArrowStatus.ERROR
    assert arrow_status(Phase.SUCCESS, 0, 3) == ArrowStatus.SUCCESS
    assert arrow_status(Phase.NORMAL, 2, 1) == ArrowStatus.COMPLETED
    assert arrow_status(Phase.NORMAL, 2, 2) == ArrowStatus.PENDING


if __name__ == "__main__":
    _run_unit_tests()
    print("gameplay_models.py: ok")
