from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    lines_per_level: int = 10
    base_drop_interval: int = 1000
    drop_interval_step: int = 100
    min_drop_interval: int = 50

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        # A single lock spans at most four rows
        lines = min(lines, len(self.line_clear_scores))
        return self.line_clear_scores[lines - 1] * level

    def should_level_up(self, total_lines: int, level: int) -> bool:
        return total_lines >= level * self.lines_per_level

    def drop_interval(self, level: int) -> int:
        return max(self.min_drop_interval, self.base_drop_interval - (level - 1) * self.drop_interval_step)
