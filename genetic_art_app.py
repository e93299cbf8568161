# genetic_art_app.py
"""
Module: genetic_art_app.py

Purpose:
The pygame front end of Genetic Art. It opens a window, then alternates between
advancing the genetic algorithm by one generation and drawing the current best
chromosome, until the window is closed.

Controls:
- SPACE: pause / resume evolution (the window keeps redrawing).
- ESC or closing the window: quit.

Usage:
    genetic-art input.bmp
    genetic-art input.bmp --size 256 --triangles 100 --population 20 --seed 7
"""

# Standard library imports
import argparse
import logging
import sys
from typing import List, Optional

# Third-party library imports
import pygame

# Local application/library specific imports
import art_backend
from art_components.art_constants import (
    CANVAS_SIZE, POPULATION_SIZE, TRIANGLE_COUNT, TRIANGLE_ALPHA,
    DISPLAY_SCALE, WINDOW_TITLE, FRAMES_PER_SECOND, BACKGROUND_COLOR,
    LOG_EVERY_GENERATIONS
)
from art_components.chromosome import Chromosome
from art_components.errors import GeneticArtError, RenderTargetError
from art_components.evolution_engine import EvolutionEngine
from art_components.image_source import buffer_to_surface
from art_components.rasterizer import RenderTarget

logger = logging.getLogger(__name__)


class ArtDisplay:
    """
    The window showing the best chromosome. It owns a RenderTarget sized to the
    window, separate from the one used for fitness evaluation, so triangles are
    drawn at full window resolution. Nothing it does feeds back into evolution.
    """

    def __init__(self, canvas_size: int, scale: int = DISPLAY_SCALE, title: str = WINDOW_TITLE):
        self.title = title
        self.window_size = canvas_size * scale
        try:
            pygame.display.init()
            self.screen = pygame.display.set_mode((self.window_size, self.window_size))
        except pygame.error as e:
            raise RenderTargetError(f"Could not open a {self.window_size}x{self.window_size} window: {e}") from e
        pygame.display.set_caption(title)
        self.render_target = RenderTarget(self.window_size, self.window_size, BACKGROUND_COLOR)

    def show(self, chromosome: Chromosome) -> None:
        pixels = chromosome.render(self.render_target)
        self.screen.blit(buffer_to_surface(pixels), (0, 0))
        pygame.display.flip()

    def set_status(self, text: str) -> None:
        pygame.display.set_caption(f"{self.title} - {text}")

    def close(self) -> None:
        pygame.display.quit()


def run_gui(engine: EvolutionEngine, display: ArtDisplay, fps: int = FRAMES_PER_SECOND) -> None:
    """Main loop: one generation and one redraw per frame while not paused."""
    clock = pygame.time.Clock()
    running = True
    paused = False

    display.show(engine.best())
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    logger.info("Evolution %s at generation %d.", "paused" if paused else "resumed",
                                engine.generation)

        if not running:
            break

        if paused:
            display.set_status(f"paused at generation {engine.generation}")
        else:
            report = engine.tick()
            display.set_status(art_backend.describe_report(report))

        display.show(engine.best())
        clock.tick(fps)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genetic-art",
        description="Approximate an image with semi-transparent triangles using a genetic algorithm.",
    )
    parser.add_argument("image", help="Path to the target image (square, --size pixels per side)")
    parser.add_argument("-s", "--size", type=int, default=CANVAS_SIZE,
                        help=f"Canvas side in pixels; the image must match (default: {CANVAS_SIZE})")
    parser.add_argument("-p", "--population", type=int, default=POPULATION_SIZE,
                        help=f"Population size (default: {POPULATION_SIZE})")
    parser.add_argument("-t", "--triangles", type=int, default=TRIANGLE_COUNT,
                        help=f"Triangles per chromosome (default: {TRIANGLE_COUNT})")
    parser.add_argument("-a", "--alpha", type=float, default=TRIANGLE_ALPHA,
                        help=f"Opacity of every triangle (default: {TRIANGLE_ALPHA})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")
    parser.add_argument("--scale", type=int, default=DISPLAY_SCALE,
                        help=f"Window pixels per canvas pixel (default: {DISPLAY_SCALE})")
    parser.add_argument("--fps", type=int, default=FRAMES_PER_SECOND,
                        help="Frame cap for the window loop, 0 for uncapped (default: %(default)s)")
    parser.add_argument("--log-every", type=int, default=LOG_EVERY_GENERATIONS,
                        help="Log progress every N generations, 0 to disable (default: %(default)s)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.size <= 0:
        parser.error("--size must be positive")
    if args.population <= 0:
        parser.error("--population must be positive")
    if args.triangles <= 0:
        parser.error("--triangles must be positive")
    if not 0.0 <= args.alpha <= 1.0:
        parser.error("--alpha must lie in [0, 1]")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.fps < 0 or args.log_every < 0:
        parser.error("--fps and --log-every cannot be negative")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        engine = art_backend.build_engine(
            args.image,
            canvas_size=args.size,
            population_size=args.population,
            triangle_count=args.triangles,
            alpha=args.alpha,
            seed=args.seed,
            log_every=args.log_every,
        )
        display = ArtDisplay(args.size, args.scale)
    except GeneticArtError as e:
        logger.critical("Startup failed: %s", e)
        return 1

    try:
        run_gui(engine, display, args.fps)
    finally:
        display.close()
        pygame.quit()
    logger.info("Stopped after %d generations, best fitness %d.", engine.generation, engine.best().fitness)
    return 0


if __name__ == "__main__":
    sys.exit(main())
