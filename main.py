# main.py

import asyncio
import json
import logging

import numpy as np
import pygame

import constants
import logger_setup
from canvas import Canvas
from letter import Typewriter
from sequencer import AnimationSequencer
from tree import Tree

# Get the application's dedicated logger
logger = logging.getLogger("heart_tree")


class QuitRequested(Exception):
    """The window was closed."""


class PygameScheduler:
    """
    Timer and input collaborator for the sequencer on top of pygame.

    Every suspension pumps the event queue and presents a frame before handing
    control back to asyncio, so the window stays responsive during every phase.

    Data Contract:
    - Inputs:
        - screen (pygame.Surface): The display surface.
        - canvas (Canvas): Composed onto the screen each frame.
        - clock (pygame.time.Clock): Paces next_frame().
        - overlays (list): Objects with draw(surface), painted over the canvas.
    - Side Effects: Raises QuitRequested when the window is closed.
    """
    def __init__(self, screen, canvas, clock, overlays=None):
        self.screen = screen
        self.canvas = canvas
        self.clock = clock
        self.overlays = overlays or []
        self._clicks = []

    def _pump_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise QuitRequested()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._clicks.append(event.pos)

    def present(self):
        self._pump_events()
        self.screen.fill(constants.PAGE_COLOR)
        self.canvas.compose(self.screen)
        for overlay in self.overlays:
            overlay.draw(self.screen)
        pygame.display.flip()

    async def sleep(self, ms):
        self.present()
        await asyncio.sleep(ms / 1000)

    async def next_frame(self):
        self.present()
        self.clock.tick(constants.FPS)
        await asyncio.sleep(0)

    async def wait_for_click(self, predicate):
        self._clicks.clear()
        while True:
            self.present()
            while self._clicks:
                x, y = self._clicks.pop(0)
                if predicate(x, y):
                    return x, y
            self.clock.tick(constants.FPS)
            await asyncio.sleep(0)


def main():
    """
    Main function to initialize and run the animation.
    """
    # --- Setup ---
    with open('config.json', 'r') as f:
        config = json.load(f)

    logger_setup.setup_logging(config)

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    timing = constants.DEFAULT_TIMING._replace(**config.get('timing', {}))
    logger.info(f"Animation timing: {timing}")

    # --- Initialization ---
    pygame.init()
    canvas_config = config.get('canvas', {})
    width = canvas_config.get('width', constants.WIDTH)
    height = canvas_config.get('height', constants.HEIGHT)
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    canvas = Canvas(width, height, background=constants.CANVAS_BACKGROUND)
    tree = Tree(canvas, width, height, config['scene'], rng=rng)

    letter_config = config.get('letter', {})
    typewriter = Typewriter(
        letter_config.get('paragraphs', []),
        speed=timing.text_reveal_speed,
        rect=tuple(letter_config.get('rect', (40, 60, 420, 560))),
        font_size=letter_config.get('font_size', 22),
    )

    scheduler = PygameScheduler(screen, canvas, clock, overlays=[typewriter])
    sequencer = AnimationSequencer(tree, scheduler, timing, reveal_text=typewriter.start)

    # --- Run until the window is closed ---
    try:
        asyncio.run(sequencer.run())
    except QuitRequested:
        logger.info(f"Window closed during phase {sequencer.phase.name}.")

    logger.info("Application shutting down.")
    pygame.quit()

if __name__ == "__main__":
    main()
