from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Optional

from .modes import GameMode
from .state import GameState, LineClearStats, Performance


def play_time(performance: Performance, now: Optional[float] = None) -> float:
    """Seconds played; a finished game is measured up to its end time."""
    if performance.end_time is not None:
        end = performance.end_time
    else:
        end = time.time() if now is None else now
    return max(0.0, end - performance.start_time)


def _per_minute(count: float, performance: Performance, now: Optional[float]) -> float:
    minutes = play_time(performance, now) / 60.0
    return count / minutes if minutes > 0 else 0.0


def pieces_per_minute(performance: Performance, now: Optional[float] = None) -> float:
    return _per_minute(performance.pieces_placed, performance, now)


def lines_per_minute(performance: Performance, now: Optional[float] = None) -> float:
    return _per_minute(performance.lines_cleared, performance, now)


def efficiency(score: int, performance: Performance, now: Optional[float] = None) -> float:
    """Score per minute."""
    return _per_minute(score, performance, now)


def grade(stats: LineClearStats) -> str:
    total = stats.total
    if total == 0:
        return "F"
    tetris_ratio = stats.tetrises / total
    complex_ratio = (stats.triples + stats.tetrises) / total
    if tetris_ratio >= 0.7:
        return "S+"
    if tetris_ratio >= 0.5:
        return "S"
    if tetris_ratio >= 0.3:
        return "A"
    if complex_ratio >= 0.5:
        return "B"
    if complex_ratio >= 0.3:
        return "C"
    return "D"


def format_time(seconds: float) -> str:
    minutes = int(seconds // 60)
    return f"{minutes}:{int(seconds % 60):02d}"


@dataclass(frozen=True)
class GameSummary:
    """Record handed to persistence when a game ends."""

    score: int
    level: int
    lines_cleared: int
    line_clear_stats: LineClearStats
    play_time: float
    mode: GameMode
    max_combo: int
    perfect_clears: int
    t_spins: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data


def game_summary(state: GameState, now: Optional[float] = None) -> GameSummary:
    perf = state.performance
    return GameSummary(
        score=state.score,
        level=state.level,
        lines_cleared=perf.lines_cleared,
        line_clear_stats=perf.line_clear_stats,
        play_time=play_time(perf, now),
        mode=state.game_mode,
        max_combo=perf.max_combo,
        perfect_clears=perf.perfect_clears,
        t_spins=perf.t_spins,
    )
