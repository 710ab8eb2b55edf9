from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

import numpy as np

from .constants import GRID_WIDTH


class TetrominoType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


Shape = np.ndarray


def _frozen(shape: Shape) -> Shape:
    shape = np.array(shape, dtype=np.int8)
    shape.setflags(write=False)
    return shape


BASE_SHAPES = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}

SPAWN_X = GRID_WIDTH // 2 - 1
SPAWN_Y = 0


def rotate_cw(shape: Shape) -> Shape:
    """Transpose and reverse: new[i][j] = old[n-1-j][i]."""
    return _frozen(np.rot90(shape, k=-1))


def rotate_ccw(shape: Shape) -> Shape:
    """Transpose, then reverse the row order."""
    return _frozen(np.asarray(shape).T[::-1])


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    color: str
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @classmethod
    def spawn(cls, kind: TetrominoType, color: str) -> "Piece":
        return cls(kind=kind, shape=BASE_SHAPES[kind], color=color)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated_cw(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def rotated_ccw(self) -> "Piece":
        return replace(self, shape=rotate_ccw(self.shape))

    def at_spawn(self) -> "Piece":
        return replace(self, x=SPAWN_X, y=SPAWN_Y)

    def cells(self) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        h, w = self.shape.shape
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells

    def is_t_3x3(self) -> bool:
        return self.kind == TetrominoType.T and self.shape.shape == (3, 3)

    def same_as(self, other: "Piece") -> bool:
        return (
            self.kind == other.kind
            and self.color == other.color
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )
