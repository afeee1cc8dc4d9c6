# sequencer.py

"""
The stage state machine that turns the scene's per-tick steps into the show.

Every phase is a coroutine of the form "while predicate: step, then sleep";
the only suspension points are the scheduler's awaits, so no tick ever starts
before the previous one and its delay have finished.

Scheduler contract (duck-typed):
- async sleep(ms): suspend the current phase for ms milliseconds.
- async next_frame(): suspend until the next display refresh.
- async wait_for_click(predicate): resolve with the first click (x, y) for
  which predicate(x, y) holds.
"""

import enum
import logging

import constants

logger = logging.getLogger("heart_tree")


class Phase(enum.Enum):
    IDLE = "idle"
    AWAIT_TRIGGER = "await_trigger"
    SHRINK_SEED = "shrink_seed"
    RISE_SEED = "rise_seed"
    GROW_TREE = "grow_tree"
    BLOOM_FLOWERS = "bloom_flowers"
    SLIDE_COMPOSITION = "slide_composition"
    FADE_BACKGROUND = "fade_background"
    REVEAL_TEXT = "reveal_text"
    JUMP_LOOP = "jump_loop"


class AnimationSequencer:
    """
    Drives a Tree through every phase of the show, strictly in order.

    Data Contract:
    - Inputs:
        - tree (Tree): The scene.
        - scheduler: See the module docstring.
        - timing (AnimationTiming): Immutable delays, speeds and snapshot geometry.
        - reveal_text (callable | None): Fired once on entering REVEAL_TEXT; not awaited.
    - Outputs: None. Mutates the tree and its canvas.
    - Invariants: `phase` only moves forward; JUMP_LOOP is never left.
    """
    def __init__(self, tree, scheduler, timing=constants.DEFAULT_TIMING, reveal_text=None):
        self.tree = tree
        self.scheduler = scheduler
        self.timing = timing
        self.reveal_text = reveal_text
        self.phase = Phase.IDLE
        self.history = []

    def _enter(self, phase: Phase):
        self.phase = phase
        self.history.append(phase)
        logger.info(f"Phase -> {phase.name}")

    async def run(self, jump_frames=None):
        """Plays the whole show. With jump_frames=None the jump loop never returns."""
        self.tree.seed.draw()
        await self.await_trigger()
        await self.shrink_seed()
        await self.rise_seed()
        await self.grow_tree()
        await self.bloom_flowers()
        await self.slide_composition()
        await self.fade_background()
        self.start_text_reveal()
        await self.jump_loop(jump_frames)

    async def await_trigger(self):
        self._enter(Phase.AWAIT_TRIGGER)
        x, y = await self.scheduler.wait_for_click(self.tree.seed.hover)
        logger.info(f"Seed clicked at ({x}, {y}).")

    async def shrink_seed(self):
        self._enter(Phase.SHRINK_SEED)
        seed = self.tree.seed
        while seed.can_scale():
            seed.shrink(self.timing.scale_factor)
            await self.scheduler.sleep(self.timing.tree_grow_delay)

    async def rise_seed(self):
        self._enter(Phase.RISE_SEED)
        seed, footer = self.tree.seed, self.tree.footer
        while seed.can_move():
            seed.move(0, self.timing.seed_move_speed)
            footer.draw()
            await self.scheduler.sleep(self.timing.tree_grow_delay)

    async def grow_tree(self):
        self._enter(Phase.GROW_TREE)
        ticks = 0
        while self.tree.can_grow():
            self.tree.grow()
            ticks += 1
            if ticks % 100 == 0:
                logger.debug(f"GrowTree tick={ticks}, active branches={len(self.tree.branches)}")
            await self.scheduler.sleep(self.timing.tree_grow_delay)
        logger.info(f"Tree fully grown after {ticks} tick(s).")

    async def bloom_flowers(self):
        self._enter(Phase.BLOOM_FLOWERS)
        while self.tree.can_flower():
            self.tree.flower(self.timing.flower_bloom_count)
            await self.scheduler.sleep(self.timing.flower_bloom_delay)

    async def slide_composition(self):
        self._enter(Phase.SLIDE_COMPOSITION)
        t = self.timing
        tree, footer = self.tree, self.tree.footer
        tree.snapshot("p1", t.snapshot_left_x, 0, t.snapshot_width, tree.height)
        while tree.move("p1", t.tree_move_target_x, 0):
            footer.draw()
            await self.scheduler.sleep(t.tree_grow_delay)
        footer.draw()
        tree.snapshot("p2", t.snapshot_right_x, 0, t.snapshot_width, tree.height)

    async def fade_background(self):
        self._enter(Phase.FADE_BACKGROUND)
        canvas = self.tree.canvas
        canvas.backdrop = self.tree.export_image()
        await self.scheduler.sleep(self.timing.background_fade_delay)
        canvas.background = None

    def start_text_reveal(self):
        self._enter(Phase.REVEAL_TEXT)
        if self.reveal_text is not None:
            self.reveal_text()

    async def jump_loop(self, frames=None):
        self._enter(Phase.JUMP_LOOP)
        tree, canvas = self.tree, self.tree.canvas
        count = 0
        while frames is None or count < frames:
            canvas.clear()
            tree.draw("p2")
            tree.jump()
            tree.footer.draw()
            await self.scheduler.sleep(self.timing.heart_jump_delay)
            await self.scheduler.next_frame()
            count += 1
