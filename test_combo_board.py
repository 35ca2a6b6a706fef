from __future__ import annotations

import pytest

pytest.importorskip("PyQt6.QtGui")

from combo_board import format_seconds, stats_line  # noqa: E402
from gameplay_models import EASY, GameSnapshot, Phase  # noqa: E402


def _snapshot(**overrides):
    values = dict(
        elements=(),
        progress=0,
        phase=Phase.NORMAL,
        policy=EASY,
        sightread=False,
        previous_time_ms=None,
        rolling_average_seconds=None,
        high_score_seconds=None,
        window_times_ms=(),
    )
    values.update(overrides)
    return GameSnapshot(**values)


def test_format_seconds():
    assert format_seconds(None) == "-"
    assert format_seconds(1.5) == "1.500s"
    assert format_seconds(0.0004) == "0.000s"


def test_stats_line_before_any_round():
    assert stats_line(_snapshot()) == "Previous -   Average (0/5) -   Best -"


def test_stats_line_with_times():
    snapshot = _snapshot(
        previous_time_ms=1250.0,
        rolling_average_seconds=1.1,
        high_score_seconds=0.95,
        window_times_ms=(950.0, 1250.0),
    )
    assert stats_line(snapshot) == "Previous 1.250s   Average (2/5) 1.100s   Best 0.950s"
