from __future__ import annotations

import argparse
from typing import Dict

import pygame

from blockfall.game import Action, Command, CommandProcessor, EngineConfig, GameMode
from blockfall.game.stats import GameSummary
from blockfall.host import GameSession, PygameScheduler
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_z: Action.ROTATE_COUNTER,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_u: Action.UNDO_MOVE,
    pygame.K_r: Action.RESTART_GAME,
}


def _print_summary(summary: GameSummary) -> None:
    print(f"Game finished: {summary.to_dict()}")


def run(mode: GameMode = GameMode.CLASSIC, seed: int | None = None) -> None:
    pygame.init()
    session = None
    try:
        clock = pygame.time.Clock()
        processor = CommandProcessor(EngineConfig(random_seed=seed, default_mode=mode))
        session = GameSession(
            processor=processor,
            scheduler=PygameScheduler(),
            mode=mode,
            on_game_end=_print_summary,
            on_achievement=lambda a: print(f"Achievement unlocked: {a.icon} {a.name}"),
        )
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(session.state))
        pygame.display.set_caption("blockfall")
        session.attach()

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_p:
                        session.dispatch(Action.RESUME if session.state.is_paused else Action.PAUSE)
                    elif event.key == pygame.K_n:
                        session.dispatch(Command.new_game())
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.dispatch(action)

            # Timers (gravity, time-attack clock)
            session.scheduler.pump()

            renderer.draw(screen, session.state)
            clock.tick(60)
    finally:
        if session is not None:
            session.detach()
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser(description="Play blockfall in a pygame window")
    p.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.CLASSIC.value)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run(GameMode(args.mode), args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
