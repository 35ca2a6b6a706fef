from __future__ import annotations

import dataclasses

import pytest

from gameplay_models import (
    DIFFICULTIES,
    EASY,
    HARD,
    MEDIUM,
    ArrowStatus,
    ComboElement,
    Direction,
    GameSnapshot,
    Phase,
    Policy,
    UnknownDifficultyError,
    arrow_status,
    policy_for_label,
)


def test_presets():
    assert DIFFICULTIES == (EASY, MEDIUM, HARD)
    assert [(policy.label, policy.length, policy.time_ms) for policy in DIFFICULTIES] == [
        ("Easy", 4, 6000),
        ("Medium", 8, 6000),
        ("Hard", 10, 6000),
    ]


@pytest.mark.parametrize("label, expected", [("easy", EASY), ("MEDIUM", MEDIUM), (" Hard ", HARD)])
def test_policy_for_label(label, expected):
    assert policy_for_label(label) is expected


@pytest.mark.parametrize("label", ["", "Expert", "Easy-5"])
def test_policy_for_unknown_label(label):
    with pytest.raises(UnknownDifficultyError):
        policy_for_label(label)


@pytest.mark.parametrize(
    "length, time_ms, label",
    [(0, 6000, "Zero"), (-1, 6000, "Negative"), (4, 0, "NoTime"), (4, 6000, "  ")],
)
def test_invalid_policy_rejected(length, time_ms, label):
    with pytest.raises(ValueError):
        Policy(length=length, time_ms=time_ms, label=label)


def test_policy_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        EASY.length = 5


@pytest.mark.parametrize(
    "phase, progress, index, expected",
    [
        (Phase.ERROR, 0, 0, ArrowStatus.ERROR),
        (Phase.ERROR, 4, 3, ArrowStatus.ERROR),
        (Phase.SUCCESS, 4, 0, ArrowStatus.SUCCESS),
        (Phase.NORMAL, 2, 0, ArrowStatus.COMPLETED),
        (Phase.NORMAL, 2, 1, ArrowStatus.COMPLETED),
        (Phase.NORMAL, 2, 2, ArrowStatus.PENDING),
        (Phase.NORMAL, 0, 3, ArrowStatus.PENDING),
    ],
)
def test_arrow_status(phase, progress, index, expected):
    assert arrow_status(phase, progress, index) == expected


def test_snapshot_combo_property():
    elements = (
        ComboElement(Direction.UP, ArrowStatus.COMPLETED),
        ComboElement(Direction.LEFT, ArrowStatus.PENDING, hidden=True),
    )
    snapshot = GameSnapshot(
        elements=elements,
        progress=1,
        phase=Phase.NORMAL,
        policy=EASY,
        sightread=True,
        previous_time_ms=None,
        rolling_average_seconds=None,
        high_score_seconds=None,
    )

    assert snapshot.combo == (Direction.UP, Direction.LEFT)
    assert snapshot.window_times_ms == ()
