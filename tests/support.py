from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from blockfall.game import CommandProcessor, EngineConfig, GameGrid, GameMode, GameState, Piece, TetrominoType
from blockfall.game.constants import EMPTY, GRID_HEIGHT, GRID_WIDTH
from blockfall.game.pieces import BASE_SHAPES, rotate_cw

BLOCK = "#888888"
RED = "#FF0000"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_processor(seed: int = 7, clock: Optional[FakeClock] = None) -> CommandProcessor:
    return CommandProcessor(EngineConfig(random_seed=seed), clock=clock or FakeClock())


def grid_with(filled: Dict[int, Iterable[int]]) -> GameGrid:
    """Rows keyed by y; each value lists the filled x coordinates."""
    rows = [[EMPTY] * GRID_WIDTH for _ in range(GRID_HEIGHT)]
    for y, xs in filled.items():
        for x in xs:
            rows[y][x] = BLOCK
    return GameGrid.from_rows(rows)


def full_except(*gaps: int) -> Tuple[int, ...]:
    return tuple(x for x in range(GRID_WIDTH) if x not in gaps)


def rotated(kind: TetrominoType, turns: int):
    shape = BASE_SHAPES[kind]
    for _ in range(turns):
        shape = rotate_cw(shape)
    return shape


def piece(kind: TetrominoType, x: int, y: int, turns: int = 0, color: str = RED) -> Piece:
    return Piece(kind=kind, shape=rotated(kind, turns), color=color, x=x, y=y)


def staged(
    processor: CommandProcessor,
    grid: GameGrid,
    current: Piece,
    mode: GameMode = GameMode.CLASSIC,
    **changes,
) -> GameState:
    state = processor.new_game(mode)
    return state.evolve(grid=grid, current_piece=current, **changes)
