from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .constants import INITIAL_SPEED, MIN_SPEED, SPEED_STEP


class GameMode(str, Enum):
    CLASSIC = "classic"
    TIME_ATTACK = "time-attack"
    SURVIVAL = "survival"
    MARATHON = "marathon"


@dataclass(frozen=True)
class ModeSettings:
    name: str
    description: str
    difficulty_progression: bool
    target_score: Optional[int] = None
    time_limit: Optional[int] = None  # seconds
    score_multiplier: float = 1.0


MODE_SETTINGS: Dict[GameMode, ModeSettings] = {
    GameMode.CLASSIC: ModeSettings(
        name="Classic",
        description="Traditional Tetris gameplay",
        difficulty_progression=True,
        target_score=1000,
    ),
    GameMode.TIME_ATTACK: ModeSettings(
        name="Time Attack",
        description="Score as much as possible in limited time",
        difficulty_progression=False,
        time_limit=120,
        score_multiplier=2.0,
    ),
    GameMode.SURVIVAL: ModeSettings(
        name="Survival",
        description="Survive as long as possible with increasing speed",
        difficulty_progression=True,
        score_multiplier=1.5,
    ),
    GameMode.MARATHON: ModeSettings(
        name="Marathon",
        description="Endurance mode with high target score",
        difficulty_progression=True,
        target_score=10000,
    ),
}


def settings_for(mode: GameMode) -> ModeSettings:
    return MODE_SETTINGS[GameMode(mode)]


def recompute_level(mode: GameMode, score: int, level: int) -> int:
    """Level follows score only in modes with difficulty progression."""
    if not settings_for(mode).difficulty_progression:
        return level
    return score // 1000 + 1


def is_completed(target_score: Optional[int], score: int) -> bool:
    return target_score is not None and score >= target_score


def apply_mode_multiplier(mode: GameMode, points: int) -> int:
    return math.floor(points * settings_for(mode).score_multiplier)


def survival_level_for(mode: GameMode, level: int) -> Optional[int]:
    return level if GameMode(mode) is GameMode.SURVIVAL else None


def drop_interval_ms(level: int, base_speed: int = INITIAL_SPEED) -> int:
    return max(MIN_SPEED, base_speed - (level - 1) * SPEED_STEP)
