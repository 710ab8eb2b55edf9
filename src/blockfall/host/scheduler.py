from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    """Timer port used by hosts; the engine itself owns no timers."""

    def call_every(self, interval_ms: int, callback: Callback) -> int: ...

    def cancel(self, handle: int) -> None: ...


@dataclass
class _Timer:
    interval_ms: int
    next_due: int
    callback: Callback


class ManualScheduler:
    """Virtual-time scheduler; time only moves when ``advance`` is called."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._timers: Dict[int, _Timer] = {}
        self._ids = count(1)

    @property
    def active(self) -> int:
        return len(self._timers)

    def call_every(self, interval_ms: int, callback: Callback) -> int:
        interval_ms = max(1, int(interval_ms))
        handle = next(self._ids)
        self._timers[handle] = _Timer(interval_ms, self.now_ms + interval_ms, callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def advance(self, ms: int) -> None:
        target = self.now_ms + int(ms)
        while True:
            due = [(t.next_due, h) for h, t in self._timers.items() if t.next_due <= target]
            if not due:
                break
            next_due, handle = min(due)
            timer = self._timers[handle]
            self.now_ms = next_due
            timer.next_due += timer.interval_ms
            # Callbacks may cancel or re-arm timers, including this one
            timer.callback()
        self.now_ms = target


class PygameScheduler(ManualScheduler):
    """Advances with ``pygame.time.get_ticks`` once per frame."""

    def __init__(self) -> None:
        super().__init__()
        import pygame

        self._ticks = pygame.time.get_ticks
        self._last = self._ticks()

    def pump(self) -> None:
        now = self._ticks()
        self.advance(now - self._last)
        self._last = now
