from __future__ import annotations

import logging
from typing import Callable, List, Optional

from blockfall.game import (
    Achievement,
    CommandProcessor,
    GameMode,
    GameState,
    check_achievements,
    drop_interval_ms,
    initial_achievements,
    merge_achievements,
)
from blockfall.game.commands import Action, CommandLike
from blockfall.game.constants import TIME_ATTACK_TICK_MS
from blockfall.game.stats import GameSummary, game_summary

from .scheduler import ManualScheduler, Scheduler

logger = logging.getLogger(__name__)


class GameSession:
    """Host around one engine: timers, achievements, and game-end reporting.

    While attached, gravity (MOVE_DOWN) fires every ``drop_interval_ms(level)``
    and, in time-attack, TICK_TIME fires every second. Both timers are only
    armed for a running game and are cancelled on ``detach``.
    """

    def __init__(
        self,
        processor: Optional[CommandProcessor] = None,
        scheduler: Optional[Scheduler] = None,
        mode: Optional[GameMode] = None,
        achievements: Optional[List[Achievement]] = None,
        on_game_end: Optional[Callable[[GameSummary], None]] = None,
        on_achievement: Optional[Callable[[Achievement], None]] = None,
    ) -> None:
        self.processor = processor or CommandProcessor()
        self.scheduler = scheduler or ManualScheduler()
        self.state: GameState = self.processor.new_game(mode)
        self.achievements = achievements if achievements is not None else initial_achievements()
        self.on_game_end = on_game_end
        self.on_achievement = on_achievement
        self.attached = False
        self._gravity: Optional[int] = None
        self._gravity_level: Optional[int] = None
        self._tick: Optional[int] = None

    # ---------- Lifecycle ----------
    def attach(self) -> None:
        self.attached = True
        self._sync_timers()

    def detach(self) -> None:
        self._cancel_gravity()
        self._cancel_tick()
        self.attached = False

    def __enter__(self) -> "GameSession":
        self.attach()
        return self

    def __exit__(self, *exc) -> None:
        self.detach()

    # ---------- Commands ----------
    def dispatch(self, command: CommandLike) -> GameState:
        if not self.attached:
            raise RuntimeError("session is detached")
        prev = self.state
        new = self.processor.process(prev, command)
        if new is prev:
            return prev
        self.state = new
        now = self.processor.clock()

        updates = check_achievements(new, self.achievements, now)
        if updates:
            self.achievements = merge_achievements(self.achievements, updates)
            for achievement in updates:
                if achievement.unlocked:
                    logger.info("achievement unlocked: %s", achievement.name)
                    if self.on_achievement is not None:
                        self.on_achievement(achievement)

        if new.is_finished and not prev.is_finished and self.on_game_end is not None:
            self.on_game_end(game_summary(new, now))

        self._sync_timers()
        return new

    # ---------- Timers ----------
    def _running(self) -> bool:
        return self.attached and not self.state.is_paused and not self.state.is_game_over

    def _sync_timers(self) -> None:
        if not self._running():
            self._cancel_gravity()
            self._cancel_tick()
            return
        level = self.state.level
        if self._gravity is None or self._gravity_level != level:
            self._cancel_gravity()
            interval = drop_interval_ms(level, self.processor.config.base_speed)
            self._gravity = self.scheduler.call_every(interval, lambda: self.dispatch(Action.MOVE_DOWN))
            self._gravity_level = level
        if self.state.game_mode is GameMode.TIME_ATTACK:
            if self._tick is None:
                self._tick = self.scheduler.call_every(TIME_ATTACK_TICK_MS, lambda: self.dispatch(Action.TICK_TIME))
        else:
            self._cancel_tick()

    def _cancel_gravity(self) -> None:
        if self._gravity is not None:
            self.scheduler.cancel(self._gravity)
        self._gravity = None
        self._gravity_level = None

    def _cancel_tick(self) -> None:
        if self._tick is not None:
            self.scheduler.cancel(self._tick)
        self._tick = None
