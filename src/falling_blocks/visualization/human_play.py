from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, FallingBlocksGame, GameConfig
from falling_blocks.storage import JsonHighScoreStore
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
}

KEY_TO_DIFFICULTY: Dict[int, str] = {
    pygame.K_1: "easy",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
}

SPEED_STEP = 0.5


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--difficulty", choices=["easy", "medium", "hard"], default="easy")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--highscore-file", type=Path, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    pygame.init()
    try:
        clock = pygame.time.Clock()
        store = JsonHighScoreStore(args.highscore_file)
        logger.info(f"High score file: {store.path}")
        game = FallingBlocksGame(GameConfig(random_seed=args.seed), high_scores=store)
        game.set_difficulty(args.difficulty)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 24)

        running = True
        while running:
            dt = clock.tick(60)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_p:
                        game.toggle_pause()
                    elif event.key == pygame.K_r:
                        game.reset()
                    elif event.key in KEY_TO_DIFFICULTY:
                        # Choosing a mode starts a fresh game
                        game.set_difficulty(KEY_TO_DIFFICULTY[event.key])
                        game.reset()
                    elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                        game.set_speed(game.speed + SPEED_STEP)
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        game.set_speed(game.speed - SPEED_STEP)
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.handle(action)

            game.update(dt)
            renderer.draw(screen, game, font)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
