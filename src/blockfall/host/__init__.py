from .scheduler import ManualScheduler, PygameScheduler, Scheduler
from .session import GameSession

__all__ = ["ManualScheduler", "PygameScheduler", "Scheduler", "GameSession"]
