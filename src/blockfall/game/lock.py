from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from .grid import GameGrid, is_valid_move
from .history import HistoryEntry
from .modes import apply_mode_multiplier, is_completed, recompute_level, settings_for, survival_level_for
from .pieces import Piece
from .rules import DEFAULT_RULES, ScoringRules
from .state import GameState, ScoreMultiplier

logger = logging.getLogger(__name__)

PieceSource = Callable[[], Piece]


def count_blocked_corners(grid: GameGrid, piece: Piece) -> int:
    """Diagonal neighbours of the 3x3 centre that are out of bounds or occupied."""
    cx, cy = piece.x + 1, piece.y + 1
    return sum(grid.is_blocked(cx + dx, cy + dy) for dx in (-1, 1) for dy in (-1, 1))


def detect_t_spin(grid: GameGrid, piece: Piece, last_action_rotate: bool) -> bool:
    if not piece.is_t_3x3() or not last_action_rotate:
        return False
    return count_blocked_corners(grid, piece) >= 3


def promote_next(grid: GameGrid, queued: Optional[Piece], draw: PieceSource) -> Tuple[Optional[Piece], Optional[Piece], bool]:
    """Return (current, next, game_over) after moving the queue forward by one piece."""
    current = queued if queued is not None else draw()
    if not is_valid_move(grid, current):
        return None, None, True
    return current, draw(), False


def settle_finish(prev: GameState, new: GameState, now: float) -> GameState:
    """Bookkeeping for the step where a game ends or reaches its target.

    Stamps ``performance.end_time`` and, the first time the game finishes,
    rolls the score into ``global_score`` and counts the game. Undo clears
    the terminal flags but not ``finish_recorded``, so a game is counted once.
    """
    newly_over = new.is_game_over and not prev.is_game_over
    newly_completed = new.is_game_completed and not prev.is_game_completed
    if not (newly_over or newly_completed):
        return new
    changes = {"performance": replace(new.performance, end_time=now)}
    if not prev.finish_recorded:
        changes["global_score"] = new.global_score + new.score
        changes["games_completed"] = new.games_completed + 1
        changes["finish_recorded"] = True
    if newly_over:
        logger.debug("game over: mode=%s score=%d level=%d", new.game_mode.value, new.score, new.level)
    else:
        logger.debug("game completed: mode=%s score=%d", new.game_mode.value, new.score)
    return new.evolve(**changes)


def lock_piece(state: GameState, draw: PieceSource, now: float, rules: ScoringRules = DEFAULT_RULES) -> GameState:
    piece = state.current_piece
    assert piece is not None, "lock requires an active piece"

    history = state.history.push(HistoryEntry(state.grid, state.score, state.level))
    merged = state.grid.place(piece.cells(), piece.color)
    cleared = merged.clear_full_lines()
    grid, lines = cleared.grid, cleared.lines_cleared

    perfect = lines > 0 and grid.is_empty()
    t_spin = detect_t_spin(state.grid, piece, state.last_action_rotate)
    combo = state.combo + 1 if lines > 0 else 0
    special = lines == 4 or t_spin
    b2b_bonus = special and state.back_to_back

    # Combo bonus counts the clears that preceded this one in the chain
    points = rules.calculate_score(lines, state.level, t_spin, b2b_bonus, state.combo, perfect)
    points = apply_mode_multiplier(state.game_mode, points)
    score = state.score + points
    level = recompute_level(state.game_mode, score, state.level)

    perf = state.performance
    perf = replace(
        perf,
        pieces_placed=perf.pieces_placed + 1,
        lines_cleared=perf.lines_cleared + lines,
        line_clear_stats=perf.line_clear_stats.record(lines),
        max_combo=max(perf.max_combo, combo),
        perfect_clears=perf.perfect_clears + int(perfect),
        t_spins=perf.t_spins + int(t_spin),
    )
    streak = state.multiplier.streak + 1 if b2b_bonus else 0
    multiplier = ScoreMultiplier(
        current=rules.level_multiplier(level) * settings_for(state.game_mode).score_multiplier,
        streak=streak,
        max_streak=max(state.multiplier.max_streak, streak),
    )

    current, nxt, game_over = promote_next(grid, state.next_piece, draw)
    if lines:
        logger.debug("lock cleared %d line(s), t_spin=%s, perfect=%s, +%d", lines, t_spin, perfect, points)

    new = state.evolve(
        grid=grid,
        current_piece=current,
        next_piece=nxt,
        can_hold=True,
        score=score,
        level=level,
        is_game_over=state.is_game_over or game_over,
        is_game_completed=is_completed(state.target_score, score),
        history=history,
        survival_level=survival_level_for(state.game_mode, level),
        multiplier=multiplier,
        line_clear_stats=state.line_clear_stats.record(lines),
        combo=combo,
        back_to_back=special,
        performance=perf,
        last_action_rotate=False,
    )
    return settle_finish(state, new, now)
