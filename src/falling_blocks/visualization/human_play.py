from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from falling_blocks.game import Action, BlockGame, GameConfig
from falling_blocks.utils.logging import setup_logger
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_p: Action.PAUSE,
    pygame.K_ESCAPE: Action.PAUSE,
}


def run(seed: int | None = None, cell_size: int = 30) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 24)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_r and game.game_over:
                        game.reset()
                        logger.info("new game")
                        continue
                    action = KEY_TO_ACTION.get(event.key)
                    if action is not None:
                        game.step(action)

            # Gravity: the engine accumulates elapsed milliseconds against its drop interval
            elapsed = clock.tick(60)
            if not game.paused and not game.game_over:
                game.tick(elapsed)

            renderer.draw(screen, game, font)
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", type=str, default="info")
    args = p.parse_args()

    setup_logger(name="falling_blocks", level=args.log_level)
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
