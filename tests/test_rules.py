# tests/test_rules.py
from __future__ import annotations

import pytest

from falling_blocks.game.rules import ScoringRules


@pytest.mark.parametrize(
    "level, expected",
    [(1, [100, 300, 500, 800]), (2, [200, 600, 1000, 1600])],
)
def test_score_table_scales_with_level(level: int, expected: list[int]) -> None:
    rules = ScoringRules()
    assert [rules.score_for_lines(n, level) for n in (1, 2, 3, 4)] == expected


def test_no_lines_scores_nothing() -> None:
    assert ScoringRules().score_for_lines(0, 5) == 0


def test_level_threshold() -> None:
    rules = ScoringRules()
    assert not rules.should_level_up(9, 1)
    assert rules.should_level_up(10, 1)
    assert not rules.should_level_up(19, 2)
    assert rules.should_level_up(20, 2)


@pytest.mark.parametrize("level, interval", [(1, 1000), (2, 900), (5, 600), (10, 100), (11, 50), (30, 50)])
def test_drop_interval_floor(level: int, interval: int) -> None:
    assert ScoringRules().drop_interval(level) == interval
