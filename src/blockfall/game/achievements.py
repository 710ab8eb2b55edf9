"""Achievement templates and the evaluator that scans snapshots against them.

``check_achievements`` is pure given ``now``: it never mutates the prior
records and returns only the records that changed (fresh unlocks and
progress increases on still-locked achievements).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .modes import GameMode
from .state import GameState
from .stats import pieces_per_minute, play_time


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False
    unlocked_date: Optional[datetime] = None
    progress: Optional[float] = None
    max_progress: Optional[int] = None


ACHIEVEMENTS: Tuple[Achievement, ...] = (
    Achievement("first_game", "First Steps", "Complete your first game", "🎮"),
    Achievement("tetris_master", "Tetris Master", "Clear 4 lines at once (Tetris)", "🏆"),
    Achievement("combo_king", "Combo King", "Achieve a 10x combo", "⚡", max_progress=10),
    Achievement("speed_demon", "Speed Demon", "Achieve 60+ pieces per minute", "💨"),
    Achievement("perfect_clear", "Perfect Clear", "Clear the entire board", "✨"),
    Achievement("level_10", "Rising Star", "Reach level 10", "⭐", max_progress=10),
    Achievement("marathon_winner", "Marathon Champion", "Complete Marathon mode", "🏃"),
    Achievement("time_attack_pro", "Time Attack Pro", "Score 5000+ in Time Attack", "⏱️", max_progress=5000),
    Achievement("survival_expert", "Survival Expert", "Survive 10 minutes in Survival mode", "🛡️", max_progress=600),
    Achievement("line_clearer", "Line Clearer", "Clear 100 lines total", "📏", max_progress=100),
    Achievement("dedication", "Dedication", "Play for 10 hours total", "⏰", max_progress=36000),
    Achievement("hundred_games", "Centurion", "Play 100 games", "💯", max_progress=100),
)

# (unlock, progress) for one snapshot; progress None means "not tracked here"
Verdict = Tuple[bool, Optional[float]]
Predicate = Callable[[GameState, float], Verdict]


def _time_attack(state: GameState, now: float) -> Verdict:
    if state.game_mode is not GameMode.TIME_ATTACK:
        return False, None
    return state.score >= 5000, state.score


def _survival(state: GameState, now: float) -> Verdict:
    if state.game_mode is not GameMode.SURVIVAL:
        return False, None
    elapsed = play_time(state.performance, now)
    return elapsed >= 600, elapsed


def _dedication(state: GameState, now: float) -> Verdict:
    elapsed = play_time(state.performance, now)
    return elapsed >= 36000, elapsed


PREDICATES: Dict[str, Predicate] = {
    "first_game": lambda s, now: (s.is_game_completed or s.is_game_over, None),
    "tetris_master": lambda s, now: (s.line_clear_stats.tetrises > 0, None),
    "combo_king": lambda s, now: (s.combo >= 10, s.combo),
    "speed_demon": lambda s, now: (pieces_per_minute(s.performance, now) >= 60, None),
    "perfect_clear": lambda s, now: (s.performance.perfect_clears > 0, None),
    "level_10": lambda s, now: (s.level >= 10, s.level),
    "marathon_winner": lambda s, now: (s.game_mode is GameMode.MARATHON and s.is_game_completed, None),
    "time_attack_pro": _time_attack,
    "survival_expert": _survival,
    "line_clearer": lambda s, now: (s.performance.lines_cleared >= 100, s.performance.lines_cleared),
    "dedication": _dedication,
    "hundred_games": lambda s, now: (s.games_completed >= 100, s.games_completed),
}


def initial_achievements() -> List[Achievement]:
    return list(ACHIEVEMENTS)


def check_achievements(
    state: GameState,
    prior: Iterable[Achievement],
    now: Optional[float] = None,
) -> List[Achievement]:
    now = time.time() if now is None else now
    by_id = {a.id: a for a in prior}
    changed: List[Achievement] = []

    for template in ACHIEVEMENTS:
        existing = by_id.get(template.id)
        if existing is not None and existing.unlocked:
            continue
        prior_progress = (existing.progress if existing is not None else None) or 0
        unlock, current = PREDICATES[template.id](state, now)
        progress = prior_progress if current is None else max(prior_progress, current)

        if unlock:
            changed.append(
                replace(
                    template,
                    unlocked=True,
                    unlocked_date=datetime.fromtimestamp(now, tz=timezone.utc),
                    progress=template.max_progress or 1,
                )
            )
        elif progress > prior_progress:
            changed.append(replace(template, progress=progress, unlocked=False))
    return changed


def merge_achievements(prior: Iterable[Achievement], updates: Iterable[Achievement]) -> List[Achievement]:
    """Apply ``updates`` over ``prior`` by id, keeping template order."""
    merged = {a.id: a for a in prior}
    for update in updates:
        current = merged.get(update.id)
        if current is not None and current.unlocked:
            continue
        merged[update.id] = update
    return [merged.get(t.id, t) for t in ACHIEVEMENTS]
