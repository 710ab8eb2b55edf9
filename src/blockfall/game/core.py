from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Sequence, Tuple

from .commands import (
    ALLOWED_WHEN_GAME_OVER,
    ALLOWED_WHEN_PAUSED,
    ROTATIONS,
    Action,
    Command,
    CommandLike,
    as_command,
)
from .constants import DEFAULT_COLORS, DEFAULT_SELECTED_COLORS, INITIAL_SPEED, MAX_HISTORY, WALL_KICKS
from .factory import create_random_tetromino
from .grid import GameGrid, is_valid_move
from .history import UndoHistory
from .lock import lock_piece, promote_next, settle_finish
from .modes import GameMode, settings_for, survival_level_for
from .pieces import Piece
from .rules import ScoringRules
from .state import GameState, Performance, ScoreMultiplier

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Handler = Callable[[GameState, Command], GameState]


@dataclass
class EngineConfig:
    random_seed: Optional[int] = None
    base_speed: int = INITIAL_SPEED
    history_capacity: int = MAX_HISTORY
    available_colors: Tuple[str, ...] = DEFAULT_COLORS
    default_mode: GameMode = GameMode.CLASSIC


class CommandProcessor:
    """Applies one command to a snapshot and returns the next snapshot.

    ``process`` is total: rejected or unknown commands return the very same
    ``GameState`` object, terminal conditions are expressed as flags on the
    returned state. Randomness and time come from the injected ``rng`` and
    ``clock`` so command sequences replay deterministically.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.clock = clock or time.time
        self._handlers: Dict[Action, Handler] = {
            Action.MOVE_LEFT: lambda s, c: self._shift(s, -1),
            Action.MOVE_RIGHT: lambda s, c: self._shift(s, 1),
            Action.MOVE_DOWN: lambda s, c: self._move_down(s, soft=False),
            Action.SOFT_DROP: lambda s, c: self._move_down(s, soft=True),
            Action.HARD_DROP: lambda s, c: self._hard_drop(s),
            Action.ROTATE: lambda s, c: self._rotate(s),
            Action.ROTATE_COUNTER: lambda s, c: self._rotate_counter(s),
            Action.HOLD: lambda s, c: self._hold(s),
            Action.PAUSE: lambda s, c: self._set_paused(s, True),
            Action.RESUME: lambda s, c: self._set_paused(s, False),
            Action.TICK_TIME: lambda s, c: self._tick_time(s),
            Action.NEW_GAME: self._new_game_command,
            Action.RESTART_GAME: lambda s, c: self.new_game(s.game_mode, level=1, previous=s),
            Action.UNDO_MOVE: lambda s, c: self._undo(s),
            Action.UPDATE_COLORS: self._update_colors,
        }

    # ---------- Public API ----------
    def draw(self, colors: Sequence[str]) -> Piece:
        return create_random_tetromino(colors, self.rng)

    def new_game(
        self,
        mode: Optional[GameMode] = None,
        level: int = 1,
        previous: Optional[GameState] = None,
    ) -> GameState:
        mode = GameMode(mode) if mode is not None else self.config.default_mode
        settings = settings_for(mode)
        if previous is not None:
            colors = previous.selected_colors
            global_score, games_completed = previous.global_score, previous.games_completed
        else:
            colors = self.config.available_colors[:DEFAULT_SELECTED_COLORS]
            global_score, games_completed = 0, 0
        logger.debug("new game: mode=%s level=%d", mode.value, level)
        return GameState(
            grid=GameGrid(),
            current_piece=self.draw(colors),
            next_piece=self.draw(colors),
            performance=Performance(start_time=self.clock()),
            global_score=global_score,
            games_completed=games_completed,
            level=level,
            target_score=settings.target_score,
            available_colors=tuple(self.config.available_colors),
            selected_colors=tuple(colors),
            history=UndoHistory(capacity=self.config.history_capacity),
            game_mode=mode,
            time_remaining=settings.time_limit,
            survival_level=survival_level_for(mode, level),
            multiplier=ScoreMultiplier(current=self.rules.level_multiplier(level) * settings.score_multiplier),
        )

    def process(self, state: GameState, command: CommandLike) -> GameState:
        cmd = as_command(command)
        if cmd is None:
            return state
        if state.is_game_over and cmd.action not in ALLOWED_WHEN_GAME_OVER:
            return state
        if state.is_paused and cmd.action not in ALLOWED_WHEN_PAUSED:
            return state
        handler = self._handlers.get(cmd.action)
        if handler is None:
            return state
        new = handler(state, cmd)
        if new is state:
            return state
        if cmd.action not in ROTATIONS and new.last_action_rotate:
            new = new.evolve(last_action_rotate=False)
        return new

    def replay(self, state: GameState, commands) -> GameState:
        for command in commands:
            state = self.process(state, command)
        return state

    # ---------- Movement ----------
    def _shift(self, state: GameState, dx: int) -> GameState:
        if state.current_piece is None:
            return state
        moved = state.current_piece.moved(dx, 0)
        if not is_valid_move(state.grid, moved):
            return state
        return state.evolve(current_piece=moved)

    def _move_down(self, state: GameState, soft: bool) -> GameState:
        if state.current_piece is None:
            return self._spawn(state)
        moved = state.current_piece.moved(0, 1)
        if is_valid_move(state.grid, moved):
            bonus = self.rules.soft_drop if soft else 0
            return state.evolve(current_piece=moved, score=state.score + bonus)
        return self._lock(state)

    def _hard_drop(self, state: GameState) -> GameState:
        piece = state.current_piece
        if piece is None:
            return state
        rows = 0
        while is_valid_move(state.grid, piece.moved(0, rows + 1)):
            rows += 1
        dropped = state.evolve(
            current_piece=piece.moved(0, rows),
            score=state.score + rows * self.rules.hard_drop,
        )
        return self._lock(dropped)

    def _rotate(self, state: GameState) -> GameState:
        if state.current_piece is None:
            return state
        rotated = state.current_piece.rotated_cw()
        if is_valid_move(state.grid, rotated):
            return state.evolve(current_piece=rotated, last_action_rotate=True)
        for dx, dy in WALL_KICKS:
            kicked = rotated.moved(dx, dy)
            if is_valid_move(state.grid, kicked):
                return state.evolve(current_piece=kicked, last_action_rotate=True)
        return state

    def _rotate_counter(self, state: GameState) -> GameState:
        # No wall kicks counter-clockwise
        if state.current_piece is None:
            return state
        rotated = state.current_piece.rotated_ccw()
        if not is_valid_move(state.grid, rotated):
            return state
        return state.evolve(current_piece=rotated, last_action_rotate=True)

    # ---------- Pieces ----------
    def _spawn(self, state: GameState) -> GameState:
        current, nxt, game_over = promote_next(
            state.grid, state.next_piece, lambda: self.draw(state.selected_colors)
        )
        new = state.evolve(current_piece=current, next_piece=nxt, is_game_over=game_over)
        return settle_finish(state, new, self.clock())

    def _lock(self, state: GameState) -> GameState:
        return lock_piece(state, lambda: self.draw(state.selected_colors), self.clock(), self.rules)

    def _hold(self, state: GameState) -> GameState:
        if not state.can_hold or state.current_piece is None:
            return state
        outgoing = state.current_piece.at_spawn()
        perf = replace(state.performance, hold_used=state.performance.hold_used + 1)
        if state.hold_piece is not None:
            incoming = state.hold_piece.at_spawn()
            if is_valid_move(state.grid, incoming):
                current, nxt, game_over = incoming, state.next_piece, False
            else:
                current, nxt, game_over = None, state.next_piece, True
        else:
            current, nxt, game_over = promote_next(
                state.grid, state.next_piece, lambda: self.draw(state.selected_colors)
            )
        new = state.evolve(
            current_piece=current,
            next_piece=nxt,
            hold_piece=outgoing,
            can_hold=False,
            is_game_over=game_over,
            performance=perf,
        )
        return settle_finish(state, new, self.clock())

    # ---------- Session ----------
    def _set_paused(self, state: GameState, paused: bool) -> GameState:
        if state.is_paused == paused:
            return state
        return state.evolve(is_paused=paused)

    def _update_colors(self, state: GameState, cmd: Command) -> GameState:
        # A command without a palette is rejected; an empty palette cannot draw
        if not cmd.colors:
            return state
        return state.evolve(selected_colors=tuple(cmd.colors))

    def _tick_time(self, state: GameState) -> GameState:
        if state.game_mode is not GameMode.TIME_ATTACK:
            return state
        remaining = max(0, (state.time_remaining or 0) - 1)
        new = state.evolve(time_remaining=remaining, is_game_over=remaining == 0)
        return settle_finish(state, new, self.clock())

    def _new_game_command(self, state: GameState, cmd: Command) -> GameState:
        level = state.level + 1 if state.is_game_completed else 1
        return self.new_game(cmd.mode or state.game_mode, level=level, previous=state)

    def _undo(self, state: GameState) -> GameState:
        entry, history = state.history.pop()
        if entry is None:
            return state
        return state.evolve(
            grid=entry.grid,
            score=entry.score,
            level=entry.level,
            history=history,
            survival_level=survival_level_for(state.game_mode, entry.level),
            is_game_over=False,
            is_game_completed=False,
        )
