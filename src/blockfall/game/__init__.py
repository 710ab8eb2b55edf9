"""Game module for blockfall.

Exports the core game engine and supporting classes:
- GameGrid / is_valid_move: Board representation and move validation
- Piece / TetrominoType: Tetromino shapes and rotation
- ScoringRules / calculate_score: Clear scoring
- GameMode / MODE_SETTINGS: Per-mode progression and termination
- GameState: Immutable game snapshot
- CommandProcessor / Action / Command: Command dispatch over snapshots
- check_achievements: Achievement unlocks and progress
"""

from .achievements import ACHIEVEMENTS, Achievement, check_achievements, initial_achievements, merge_achievements
from .commands import Action, Command
from .core import CommandProcessor, EngineConfig
from .factory import create_random_tetromino
from .grid import GameGrid, is_valid_move
from .history import HistoryEntry, UndoHistory
from .modes import MODE_SETTINGS, GameMode, ModeSettings, drop_interval_ms
from .pieces import Piece, TetrominoType
from .rules import ScoringRules, calculate_score, line_clear_name
from .state import GameState, LineClearStats, Performance, ScoreMultiplier
from .stats import GameSummary, game_summary

__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "check_achievements",
    "initial_achievements",
    "merge_achievements",
    "Action",
    "Command",
    "CommandProcessor",
    "EngineConfig",
    "create_random_tetromino",
    "GameGrid",
    "is_valid_move",
    "HistoryEntry",
    "UndoHistory",
    "MODE_SETTINGS",
    "GameMode",
    "ModeSettings",
    "drop_interval_ms",
    "Piece",
    "TetrominoType",
    "ScoringRules",
    "calculate_score",
    "line_clear_name",
    "GameState",
    "LineClearStats",
    "Performance",
    "ScoreMultiplier",
    "GameSummary",
    "game_summary",
]
