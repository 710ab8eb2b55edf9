from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, CommandProcessor, EngineConfig, GameMode, GameState, TetrominoType
from blockfall.game.constants import GRID_HEIGHT, GRID_WIDTH
from blockfall.game.stats import game_summary

# Agent-facing actions, in Discrete index order
AGENT_ACTIONS = (
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.ROTATE,
    Action.ROTATE_COUNTER,
    Action.HOLD,
    Action.MOVE_DOWN,  # plain gravity step
)

NO_PIECE = len(TetrominoType)


def board_observation(state: GameState) -> np.ndarray:
    """Locked cells as 1, the falling piece overlaid as -1."""
    board = state.grid.occupancy()
    piece = state.current_piece
    if piece is not None and not state.is_game_over:
        for x, y in piece.cells():
            if 0 <= y < GRID_HEIGHT and 0 <= x < GRID_WIDTH:
                board[y, x] = -1
    return board


def _kind(piece) -> int:
    return NO_PIECE if piece is None else int(piece.kind)


class BlockfallEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, mode: GameMode | str = GameMode.CLASSIC, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000, invalid_action_penalty: float = 0.0,
                 steps_per_second: int = 0) -> None:
        super().__init__()
        self.mode = GameMode(mode)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.invalid_action_penalty = float(invalid_action_penalty)
        # Time-attack clock: one TICK_TIME every `steps_per_second` agent steps (0 disables)
        self.steps_per_second = int(steps_per_second)
        self.processor = CommandProcessor(EngineConfig(default_mode=self.mode))
        self.state = self.processor.new_game(self.mode)
        self._steps = 0

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-1, high=1, shape=(GRID_HEIGHT, GRID_WIDTH), dtype=np.int8),
                "current": spaces.Discrete(NO_PIECE + 1),
                "next": spaces.Discrete(NO_PIECE + 1),
                "hold": spaces.Discrete(NO_PIECE + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": board_observation(self.state),
            "current": _kind(self.state.current_piece),
            "next": _kind(self.state.next_piece),
            "hold": _kind(self.state.hold_piece),
            "can_hold": int(self.state.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.state.score,
            "level": self.state.level,
            "combo": self.state.combo,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.processor.rng = random.Random(seed)
        mode = GameMode((options or {}).get("mode", self.mode))
        self.state = self.processor.new_game(mode, previous=self.state)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = AGENT_ACTIONS[int(action)]
        prev = self.state
        self.state = self.processor.process(prev, command)
        rejected = self.state is prev
        self._steps += 1
        if self.steps_per_second and self._steps % self.steps_per_second == 0:
            self.state = self.processor.process(self.state, Action.TICK_TIME)

        reward = float(self.state.score - prev.score)
        if rejected:
            reward += self.invalid_action_penalty
        terminated = bool(self.state.is_finished)
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        if terminated:
            info["summary"] = game_summary(self.state).to_dict()
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = board_observation(self.state)
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = board[y, x]
                    color = (70, 200, 120) if v > 0 else (200, 200, 240) if v < 0 else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
