# dinorun/game/game.py
import argparse
import logging
import pygame
from .config import WIDTH, HEIGHT, FPS, MAX_TICK_HZ, SEED_DEFAULT
from .controls import InputAdapter, apply_intents
from .highscore import BestScore, JsonKeyValueStore, default_scores_path
from .render import Renderer
from .world import World

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Dino Run: jump and duck past cacti and birds.")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Obstacle/cloud seed. Omit for a random layout each launch.")
    p.add_argument("--scores", type=str, default=None,
                   help="Best-score file (default: $DINORUN_SCORES or ~/.dinorun/scores.json)")
    p.add_argument("--fps", type=int, default=FPS, help="Display refresh cap")
    p.add_argument("--log-level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


class Scheduler:
    """
    One callback per display refresh. Each callback runs at most one tick and one
    render; a slow frame just slows the game down, there is no catch-up.
    """
    def __init__(self, fps: int = FPS, max_tick_hz: int = MAX_TICK_HZ):
        self.fps = fps
        self.min_interval_ms = 1000.0 / max_tick_hz
        self.clock = pygame.time.Clock()
        self._pending_ms = 0.0

    def tick(self) -> float:
        """Wait for the next refresh and return the ms elapsed since the previous one."""
        return float(self.clock.tick(self.fps))

    def due(self, elapsed_ms: float) -> bool:
        """True when enough time has gone by to run a tick (and redraw) this callback."""
        self._pending_ms += elapsed_ms
        if self._pending_ms < self.min_interval_ms:
            return False
        self._pending_ms = 0.0
        return True


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    scores_path = args.scores or default_scores_path()
    best = BestScore(JsonKeyValueStore(scores_path))
    world = World(best=best, seed=args.seed)
    logger.info("Starting (seed=%s, best=%d, scores=%s)", world.seed, best.value, scores_path)

    pygame.init()
    pygame.display.set_caption("Dino Run")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    renderer = Renderer(screen)
    controls = InputAdapter()
    scheduler = Scheduler(fps=args.fps)

    running = True
    try:
        while running:
            elapsed = scheduler.tick()

            for event in pygame.event.get():
                if not apply_intents(world, controls.translate(event)):
                    running = False

            if scheduler.due(elapsed):
                world.step()
                renderer.draw(world)
                pygame.display.flip()
    finally:
        pygame.quit()
        logger.info("Bye (best=%d)", best.value)


if __name__ == "__main__":
    run()
