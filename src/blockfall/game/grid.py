from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .constants import EMPTY, GRID_HEIGHT, GRID_WIDTH
from .pieces import Piece


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class ClearResult:
    grid: "GameGrid"
    lines_cleared: int


class GameGrid:
    """Fixed 20x10 board of color tokens.

    Cells hold ``EMPTY`` or a color string. The backing array is read-only;
    every operation that changes the board returns a new ``GameGrid``.
    """

    width = GRID_WIDTH
    height = GRID_HEIGHT

    def __init__(self, cells: np.ndarray | None = None) -> None:
        if cells is None:
            cells = np.full((self.height, self.width), EMPTY, dtype=object)
        else:
            cells = np.array(cells, dtype=object)
        assert cells.shape == (self.height, self.width), cells.shape
        cells.setflags(write=False)
        self.cells = cells

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> "GameGrid":
        return cls(np.array([list(r) for r in rows], dtype=object))

    def __getitem__(self, xy: Coordinate) -> str:
        x, y = xy
        return self.cells[y, x]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cells.shape

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, x: int, y: int) -> bool:
        """Out of bounds or occupied."""
        return not self.is_inside(x, y) or self.cells[y, x] != EMPTY

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if self.is_blocked(x, y):
                return False
        return True

    def place(self, cells: Iterable[Coordinate], color: str) -> "GameGrid":
        board = self.cells.copy()
        for x, y in cells:
            if self.is_inside(x, y):
                board[y, x] = color
        return GameGrid(board)

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.cells != EMPTY, axis=1))[0]

    def clear_full_lines(self) -> ClearResult:
        full_rows = self.full_rows()
        if full_rows.size == 0:
            return ClearResult(self, 0)
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.cells, full_rows, axis=0)
        new_rows = np.full((num, self.width), EMPTY, dtype=object)
        return ClearResult(GameGrid(np.vstack((new_rows, kept))), num)

    def is_empty(self) -> bool:
        return bool(np.all(self.cells == EMPTY))

    def occupancy(self) -> np.ndarray:
        return (self.cells != EMPTY).astype(np.int8)

    def rows(self) -> list:
        return [list(row) for row in self.cells]


def is_valid_move(grid: GameGrid, piece: Piece) -> bool:
    """Every occupied cell of ``piece`` is inside the board and lands on an empty cell."""
    return grid.can_place(piece.cells())
