from __future__ import annotations

import random
from typing import Optional, Sequence

from .pieces import Piece, TetrominoType


def create_random_tetromino(colors: Sequence[str], rng: Optional[random.Random] = None) -> Piece:
    """Uniform random type and color, placed at the spawn position."""
    rng = rng or random.Random()
    kind = rng.choice(list(TetrominoType))
    color = rng.choice(list(colors))
    return Piece.spawn(kind, color)
