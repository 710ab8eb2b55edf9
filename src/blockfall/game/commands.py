from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

from .modes import GameMode


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    MOVE_DOWN = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    ROTATE = 5
    ROTATE_COUNTER = 6
    HOLD = 7
    PAUSE = 8
    RESUME = 9
    TICK_TIME = 10
    NEW_GAME = 11
    RESTART_GAME = 12
    UNDO_MOVE = 13
    UPDATE_COLORS = 14


@dataclass(frozen=True)
class Command:
    action: Action
    mode: Optional[GameMode] = None
    colors: Tuple[str, ...] = ()

    @classmethod
    def new_game(cls, mode: Optional[GameMode] = None) -> "Command":
        return cls(Action.NEW_GAME, mode=GameMode(mode) if mode is not None else None)

    @classmethod
    def update_colors(cls, colors) -> "Command":
        return cls(Action.UPDATE_COLORS, colors=tuple(colors))


CommandLike = Union[Action, Command]

ALLOWED_WHEN_GAME_OVER = frozenset({Action.NEW_GAME, Action.RESTART_GAME, Action.UNDO_MOVE})
ALLOWED_WHEN_PAUSED = frozenset(
    {Action.PAUSE, Action.RESUME, Action.NEW_GAME, Action.RESTART_GAME, Action.TICK_TIME}
)
ROTATIONS = frozenset({Action.ROTATE, Action.ROTATE_COUNTER})


def as_command(command: object) -> Optional[Command]:
    """Normalize host input; anything unrecognized maps to None."""
    if isinstance(command, Command):
        return command if isinstance(command.action, Action) else None
    if isinstance(command, Action):
        return Command(command)
    if isinstance(command, str):
        try:
            return Command(Action[command])
        except KeyError:
            return None
    return None
