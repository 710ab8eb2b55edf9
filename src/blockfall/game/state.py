from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .constants import DEFAULT_COLORS, DEFAULT_SELECTED_COLORS
from .grid import GameGrid
from .history import UndoHistory
from .modes import GameMode
from .pieces import Piece


@dataclass(frozen=True)
class LineClearStats:
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    tetrises: int = 0

    def record(self, lines_cleared: int) -> "LineClearStats":
        """Tally one lock by clear size; zero-line locks leave the stats untouched."""
        if lines_cleared == 1:
            return replace(self, singles=self.singles + 1)
        if lines_cleared == 2:
            return replace(self, doubles=self.doubles + 1)
        if lines_cleared == 3:
            return replace(self, triples=self.triples + 1)
        if lines_cleared == 4:
            return replace(self, tetrises=self.tetrises + 1)
        return self

    @property
    def total(self) -> int:
        return self.singles + self.doubles + self.triples + self.tetrises


@dataclass(frozen=True)
class Performance:
    start_time: float
    end_time: Optional[float] = None
    pieces_placed: int = 0
    lines_cleared: int = 0
    line_clear_stats: LineClearStats = field(default_factory=LineClearStats)
    max_combo: int = 0
    perfect_clears: int = 0
    t_spins: int = 0
    hold_used: int = 0


@dataclass(frozen=True)
class ScoreMultiplier:
    current: float = 1.0
    streak: int = 0
    max_streak: int = 0


@dataclass(frozen=True, eq=False)
class GameState:
    """One immutable snapshot of a game.

    Hosts read it; only ``CommandProcessor.process`` produces new ones.
    """

    grid: GameGrid
    current_piece: Optional[Piece]
    next_piece: Optional[Piece]
    performance: Performance
    hold_piece: Optional[Piece] = None
    can_hold: bool = True
    score: int = 0
    global_score: int = 0
    games_completed: int = 0
    level: int = 1
    target_score: Optional[int] = None
    is_game_over: bool = False
    is_paused: bool = False
    is_game_completed: bool = False
    available_colors: Tuple[str, ...] = DEFAULT_COLORS
    selected_colors: Tuple[str, ...] = DEFAULT_COLORS[:DEFAULT_SELECTED_COLORS]
    history: UndoHistory = field(default_factory=UndoHistory)
    game_mode: GameMode = GameMode.CLASSIC
    time_remaining: Optional[int] = None
    survival_level: Optional[int] = None
    multiplier: ScoreMultiplier = field(default_factory=ScoreMultiplier)
    line_clear_stats: LineClearStats = field(default_factory=LineClearStats)
    combo: int = 0
    back_to_back: bool = False
    last_action_rotate: bool = False
    # Totals already rolled into global_score/games_completed for this game
    finish_recorded: bool = False

    @property
    def is_finished(self) -> bool:
        return self.is_game_over or self.is_game_completed

    def evolve(self, **changes) -> "GameState":
        return replace(self, **changes)
