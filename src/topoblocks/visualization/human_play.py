from __future__ import annotations

from typing import Dict

import pygame

from topoblocks.game import Action, GameSession, Mode
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}

KEY_TO_MODE: Dict[int, Mode] = {
    pygame.K_1: Mode.CLASSIC,
    pygame.K_2: Mode.TRIO,
    pygame.K_3: Mode.PENTO,
    pygame.K_4: Mode.CIRCULAR,
    pygame.K_5: Mode.GRAVITY_FLIP,
    pygame.K_6: Mode.MIRROR,
}


def run(mode: Mode | str = Mode.CLASSIC) -> None:
    pygame.init()
    session = GameSession()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=28)
        game = session.start(mode)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption(f"topoblocks - {session.mode.value}")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game = session.restart()
                    elif event.key in KEY_TO_MODE:
                        game = session.switch_mode(KEY_TO_MODE[event.key])
                        screen = pygame.display.set_mode(renderer.window_size(game))
                        pygame.display.set_caption(f"topoblocks - {session.mode.value}")
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity
            game.update(pygame.time.get_ticks())

            renderer.draw(screen, game)
            clock.tick(60)
    finally:
        session.destroy()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
