# cave_escape/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_p, K_r, K_n
from .config import WIDTH, HEIGHT, FPS
from .render import draw_world, draw_hud, draw_overlay
from .session import (
    Session, FixedStep, TITLE, PLAYING, PAUSED, GAMEOVER, STAGECLEAR, ALLCLEAR
)
from .stages import stage_count


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Cave Escape")
    p.add_argument("--seed", type=float, default=None,
                   help="Cave seed. Omit for a random one (shown in the HUD).")
    p.add_argument("--stage", type=int, default=1, choices=range(1, stage_count() + 1),
                   help="Stage to start from.")
    p.add_argument("--continuous", action="store_true",
                   help="Keep the same cave across stages, only tightening what comes next.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def handle_key(session: Session, key: int) -> bool:
    """Apply one key press. Returns False when the game should quit."""
    state = session.state
    if key == K_ESCAPE:
        if state == TITLE:
            return False
        session.show_title()
    elif key == K_SPACE:
        if state == TITLE:
            session.start()
        elif state == STAGECLEAR:
            session.next_stage()
    elif key == K_p and state in (PLAYING, PAUSED):
        session.toggle_pause()
    elif key == K_r and state in (PLAYING, GAMEOVER, ALLCLEAR):
        session.restart(same_seed=True)
    elif key == K_n and state in (GAMEOVER, ALLCLEAR):
        session.restart(same_seed=False)
    return True


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Cave Escape")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    session = Session(seed=args.seed, start_stage=args.stage, continuous=args.continuous)
    ticker = FixedStep()

    running = True
    while running:
        frame_dt = clock.tick(FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                running = handle_key(session, event.key) and running

        if session.state == PLAYING:
            thrust = pygame.key.get_pressed()[K_SPACE]
            for _ in range(ticker.advance(frame_dt)):
                session.step(ticker.dt, thrust)
                if session.state != PLAYING:
                    break
        else:
            ticker.reset()

        draw_world(screen, session)
        draw_hud(screen, session, font)
        draw_overlay(screen, session, font)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    run()
