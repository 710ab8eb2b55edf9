from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    t_spin_scores: tuple[int, int, int] = (800, 1200, 1600)
    perfect_clear: int = 3000
    soft_drop: int = 1
    hard_drop: int = 2
    combo_base: int = 50
    back_to_back_bonus: float = 1.5
    level_bonus: float = 0.1

    def level_multiplier(self, level: int) -> float:
        return 1 + level * self.level_bonus

    def base_for_lines(self, lines: int, is_t_spin: bool = False) -> int:
        if lines <= 0 or lines > 4:
            return 0
        if is_t_spin and lines <= len(self.t_spin_scores):
            return self.t_spin_scores[lines - 1]
        return self.line_clear_scores[lines - 1]

    def calculate_score(
        self,
        lines_cleared: int,
        level: int,
        is_t_spin: bool = False,
        is_back_to_back: bool = False,
        combo: int = 0,
        is_perfect_clear: bool = False,
    ) -> int:
        level_mult = self.level_multiplier(level)
        if is_perfect_clear:
            return math.floor(self.perfect_clear * level_mult)

        points: float = self.base_for_lines(lines_cleared, is_t_spin)
        if points == 0:
            return 0
        points *= level_mult
        if is_back_to_back and (lines_cleared == 4 or is_t_spin):
            points *= self.back_to_back_bonus
        if combo > 0:
            points += self.combo_base * combo * level_mult
        return math.floor(points)


DEFAULT_RULES = ScoringRules()


def calculate_score(
    lines_cleared: int,
    level: int,
    is_t_spin: bool = False,
    is_back_to_back: bool = False,
    combo: int = 0,
    is_perfect_clear: bool = False,
) -> int:
    return DEFAULT_RULES.calculate_score(
        lines_cleared, level, is_t_spin, is_back_to_back, combo, is_perfect_clear
    )


def line_clear_name(lines_cleared: int, is_t_spin: bool = False) -> str:
    if is_t_spin:
        return {1: "T-Spin Single", 2: "T-Spin Double", 3: "T-Spin Triple"}.get(lines_cleared, "T-Spin")
    return {1: "Single", 2: "Double", 3: "Triple", 4: "Tetris"}.get(lines_cleared, "")
