# minirunner/game/game.py
import sys, argparse, logging
from dataclasses import replace
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r
from .config import WIDTH, HEIGHT, FPS, SCORES_FILE_DEFAULT, SimConfig
from .render import Renderer
from .scores import HighScoreStore
from .world import Phase, Session

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Minimal side-scrolling runner.")
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for a random layout each launch.")
    p.add_argument("--no-double-jump", action="store_true",
                   help="Only allow jumping from the ground.")
    p.add_argument("--scores-file", type=str, default=SCORES_FILE_DEFAULT,
                   help="JSON file holding the best score.")
    p.add_argument("--fps", type=int, default=FPS, help="Render frame cap.")
    p.add_argument("--debug", action="store_true", help="Verbose logging.")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = SimConfig()
    if args.no_double_jump:
        cfg = replace(cfg, allow_double_jump=False)

    store = HighScoreStore(args.scores_file)
    session = Session(cfg=cfg, seed=args.seed, best_score=store.load(), on_high_score=store.save)
    logger.info("seed=%s best=%d scores=%s", session.seed, session.best_score, store.path)

    pygame.init()
    pygame.display.set_caption("Minimal Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    renderer = Renderer()
    restart_rect = renderer.restart_rect()

    while True:
        clock.tick(args.fps)

        # one logical event per signal per frame
        jump = False
        restart = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    jump = True
                if event.key == K_r:
                    restart = True
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if session.phase is Phase.OVER and restart_rect.collidepoint(event.pos):
                    restart = True

        session.handle_input(jump=jump, restart=restart)
        snap = session.tick(pygame.time.get_ticks() / 1000.0)

        renderer.draw(screen, snap, seed=session.seed)
        pygame.display.flip()


if __name__ == "__main__":
    run()
