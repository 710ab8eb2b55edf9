from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .constants import MAX_HISTORY
from .grid import GameGrid


@dataclass(frozen=True, eq=False)
class HistoryEntry:
    grid: GameGrid
    score: int
    level: int


class UndoHistory:
    """Immutable fixed-capacity stack of pre-lock snapshots.

    ``push`` evicts the oldest entry once ``capacity`` is reached. Entries are
    held in a tuple no longer than ``capacity``, so push and pop cost is
    bounded by the capacity rather than by the length of the game.
    """

    __slots__ = ("capacity", "_entries")

    def __init__(self, entries: Tuple[HistoryEntry, ...] = (), capacity: int = MAX_HISTORY) -> None:
        self.capacity = capacity
        self._entries = tuple(entries)[-capacity:] if capacity > 0 else ()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def push(self, entry: HistoryEntry) -> "UndoHistory":
        if self.capacity <= 0:
            return self
        kept = self._entries[1:] if len(self._entries) >= self.capacity else self._entries
        return UndoHistory(kept + (entry,), self.capacity)

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def pop(self) -> Tuple[Optional[HistoryEntry], "UndoHistory"]:
        if not self._entries:
            return None, self
        return self._entries[-1], UndoHistory(self._entries[:-1], self.capacity)
