# tree.py

import logging
import math

import numpy as np

from geometry import Vector, first_in_heart
from seed import Seed
from footer import Footer
from branch import Branch, parse_branch_spec
from bloom import Bloom
import constants

logger = logging.getLogger("heart_tree")


class PlacementError(RuntimeError):
    """Rejection sampling ran out of attempts without landing in the heart region."""


class MissingSnapshotError(KeyError):
    """A snapshot was moved or drawn before it was taken."""


class SnapshotRecord:
    """A captured pixel region, where it was last drawn, and its slide speed."""
    def __init__(self, image, point: Vector, width: int, height: int, speed: float = constants.SLIDE_INITIAL_SPEED):
        self.image = image
        self.point = point
        self.width = width
        self.height = height
        self.speed = speed


class Tree:
    """
    Owns every drawable of the scene and exposes the per-tick steps the
    sequencer chains together.

    Data Contract:
    - Inputs:
        - canvas (Canvas): The shared drawing surface.
        - width, height (int): Scene size in pixels.
        - options (dict): The 'scene' section of the config file ('seed',
          'branch', 'bloom', 'footer'); every key is optional.
        - rng (np.random.Generator): The master seeded random number generator.
        - palette (sequence): RGB colors for flight blooms.
    - Side Effects: Pre-places the whole bloom reservoir on construction.
    - Invariants:
        - Every reservoir bloom passed the heart-region test when placed.
        - Snapshots are overwritten only by a new snapshot of the same name.
    """
    def __init__(self, canvas, width: int, height: int, options: dict = None, rng: np.random.Generator = None,
                 palette=constants.COLOR_PALETTE):
        self.canvas = canvas
        self.width = width
        self.height = height
        self.options = options or {}
        self.rng = rng if rng is not None else np.random.default_rng()
        self.palette = tuple(palette)
        self.records = {}

        self._init_seed()
        self._init_footer()
        self._init_branches()
        self._init_blooms()

        logger.info(
            f"Tree created ({width}x{height}): {len(self.branches)} root branch(es), "
            f"{len(self.bloom_reservoir)} bloom(s) in reservoir."
        )

    # --- Construction ---

    def _init_seed(self):
        opt = self.options.get('seed', {})
        x = opt.get('x', self.width / 4)
        y = opt.get('y', self.height / 2)
        color = tuple(opt.get('color', constants.SEED_COLOR))
        self.seed = Seed(self, Vector(x, y), opt.get('scale', 1), color, opt.get('text', ""))

    def _init_footer(self):
        opt = self.options.get('footer', {})
        self.footer = Footer(self, opt.get('width', self.width), opt.get('height', 5), opt.get('speed', 2))

    def _init_branches(self):
        self.branches = []
        self.add_branches(self.options.get('branch', []))

    def _bloom_box(self):
        opt = self.options.get('bloom', {})
        return opt.get('width', self.width), opt.get('height', self.height)

    def _init_blooms(self):
        opt = self.options.get('bloom', {})
        num = opt.get('num', 500)
        width, height = self._bloom_box()
        self.blooms = []
        self.bloom_reservoir = []
        skipped = 0
        for _ in range(num):
            try:
                self.bloom_reservoir.append(self.create_bloom(width, height, constants.HEART_REGION_RADIUS))
            except PlacementError as e:
                skipped += 1
                logger.warning(f"Bloom skipped: {e}")
        if skipped:
            logger.warning(f"{skipped} of {num} reservoir bloom(s) could not be placed.")

    # --- Branches ---

    def add_branch(self, branch: Branch):
        self.branches.append(branch)

    def add_branches(self, specs):
        for raw in specs:
            self.add_branch(Branch(self, parse_branch_spec(raw)))

    def remove_branch(self, branch: Branch):
        self.branches = [b for b in self.branches if b is not branch]

    def can_grow(self) -> bool:
        return len(self.branches) > 0

    def grow(self):
        """Advances every branch that was active at the start of the tick."""
        for branch in list(self.branches):
            branch.grow()

    # --- Blooms ---

    def add_bloom(self, bloom: Bloom):
        self.blooms.append(bloom)

    def remove_bloom(self, bloom: Bloom):
        self.blooms = [b for b in self.blooms if b is not bloom]

    def create_bloom(self, width, height, radius, color=None, alpha=None, angle=None,
                     scale=constants.BLOOM_INITIAL_SCALE, target=None, speed=None) -> Bloom:
        """
        Places a bloom by rejection sampling inside the heart region of a
        width x height box. Candidates are drawn in batches from the master RNG
        and scanned by a JIT-compiled kernel.

        Raises PlacementError after PLACEMENT_MAX_ATTEMPTS candidates.
        """
        margin = constants.BLOOM_MARGIN
        attempts = 0
        while attempts < constants.PLACEMENT_MAX_ATTEMPTS:
            batch = min(constants.PLACEMENT_BATCH_SIZE, constants.PLACEMENT_MAX_ATTEMPTS - attempts)
            xs = self.rng.random(batch) * (width - 2 * margin) + margin
            ys = self.rng.random(batch) * (height - 2 * margin) + margin
            attempts += batch
            idx = first_in_heart(xs, ys, float(width), float(height), float(radius))
            if idx >= 0:
                if color is None:
                    color = constants.BLOOM_COLOR
                if alpha is None:
                    alpha = float(self.rng.uniform(constants.BLOOM_MIN_ALPHA, 1.0))
                if angle is None:
                    angle = float(self.rng.uniform(0, 2 * math.pi))
                return Bloom(self, Vector(float(xs[idx]), float(ys[idx])), self.seed.figure,
                             color, alpha, angle, scale, target, speed)
        raise PlacementError(
            f"no position inside heart region (radius={radius}) of {width}x{height} box after {attempts} attempts"
        )

    def can_flower(self) -> bool:
        return len(self.bloom_reservoir) > 0

    def flower(self, num: int):
        """
        Moves up to `num` blooms from the reservoir into the active list, then
        advances every active growth bloom by one tick.
        """
        batch = self.bloom_reservoir[:num]
        del self.bloom_reservoir[:num]
        for bloom in batch:
            self.add_bloom(bloom)
        for bloom in list(self.blooms):
            if not bloom.is_flight:
                bloom.flower()
        return batch

    def jump(self):
        """
        One tick of the perpetual flight stream: drops finished blooms,
        advances the rest and tops the stream back up when it runs thin.
        """
        self.blooms = [b for b in self.blooms if b.is_flight]
        for bloom in list(self.blooms):
            bloom.jump()

        if len(self.blooms) < constants.FLIGHT_MIN_ACTIVE:
            width, height = self._bloom_box()
            low, high = constants.FLIGHT_SPAWN_RANGE
            for _ in range(int(self.rng.integers(low, high + 1))):
                try:
                    bloom = self.create_bloom(
                        width * constants.FLIGHT_SPAWN_WIDTH_FACTOR, height, constants.HEART_REGION_RADIUS,
                        color=self.palette[int(self.rng.integers(0, len(self.palette)))],
                        alpha=1.0,
                        angle=0.0,
                        scale=1.0,
                        target=Vector(int(self.rng.integers(constants.FLIGHT_TARGET_X_RANGE[0],
                                                            constants.FLIGHT_TARGET_X_RANGE[1] + 1)),
                                      constants.FLIGHT_TARGET_Y),
                        speed=int(self.rng.integers(constants.FLIGHT_SPEED_RANGE[0],
                                                    constants.FLIGHT_SPEED_RANGE[1] + 1)),
                    )
                except PlacementError as e:
                    logger.warning(f"Flight bloom skipped: {e}")
                    continue
                self.add_bloom(bloom)

    # --- Snapshots ---

    def _record(self, name) -> SnapshotRecord:
        record = self.records.get(name)
        if record is None:
            raise MissingSnapshotError(name)
        return record

    def snapshot(self, name, x, y, width, height):
        self.records[name] = SnapshotRecord(self.canvas.get_region(x, y, width, height), Vector(x, y), width, height)
        logger.info(f"Snapshot '{name}' taken at ({x}, {y}), {width}x{height}.")

    def move(self, name, x, y) -> bool:
        """
        One slide tick of a snapshot toward (x, y). Returns True while either
        axis is still short of its target.
        """
        record = self._record(name)
        i = min(record.point.x + record.speed, x)
        j = min(record.point.y + record.speed, y)
        self.canvas.clear_rect(record.point.x, record.point.y, record.width, record.height)
        self.canvas.put_region(record.image, i, j)
        record.point = Vector(i, j)
        record.speed = max(record.speed * constants.SLIDE_SPEED_DECAY, constants.SLIDE_MIN_SPEED)
        return i < x or j < y

    def draw(self, name):
        record = self._record(name)
        self.canvas.put_region(record.image, record.point.x, record.point.y)

    def export_image(self):
        return self.canvas.export_image()
