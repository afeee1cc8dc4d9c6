# bloom.py

import logging

from geometry import Vector
import constants

logger = logging.getLogger("heart_tree")


class Bloom:
    """
    A single decorative figure on the canopy or in flight.

    Growth blooms (no target) scale up in place and are retired at full size.
    Flight blooms (target and speed set) glide toward their target, covering
    1/speed of the remaining distance per tick while speed counts down.

    Data Contract:
    - Inputs:
        - tree (Tree): Owner of the canvas and the active bloom list.
        - position (Vector): Centre of the figure.
        - figure (Figure): Shared, never mutated.
        - color (tuple), alpha (float in [0, 1]), angle (radians), scale (float).
        - target (Vector | None), speed (int | None): Flight parameters.
    """
    def __init__(self, tree, position: Vector, figure, color=constants.BLOOM_COLOR,
                 alpha: float = 1.0, angle: float = 0.0, scale: float = constants.BLOOM_INITIAL_SCALE,
                 target: Vector = None, speed: int = None):
        self.tree = tree
        self.position = position
        self.figure = figure
        self.color = color
        self.alpha = alpha
        self.angle = angle
        self.scale = scale
        self.target = target
        self.speed = speed

    @property
    def is_flight(self) -> bool:
        return self.target is not None and bool(self.speed)

    def draw(self):
        self.tree.canvas.fill_polygon(
            self.figure.points, self.color, alpha=self.alpha,
            origin=self.position, scale=self.scale, angle=self.angle,
        )

    def flower(self):
        """One growth tick: draw at the current scale, then grow."""
        self.draw()
        self.scale += constants.BLOOM_GROWTH_STEP
        # Tolerance absorbs the float drift of repeated 0.1 steps.
        if self.scale >= constants.BLOOM_FULL_SCALE - 1e-9:
            self.tree.remove_bloom(self)

    def is_out_of_bounds(self) -> bool:
        margin = constants.FLIGHT_EXIT_MARGIN
        return self.position.x < -margin or self.position.y > self.tree.height + margin

    def jump(self):
        """One flight tick: leave the scene if out of bounds, else draw and advance."""
        if not self.is_flight:
            return
        if self.is_out_of_bounds():
            self.tree.remove_bloom(self)
            return
        self.draw()
        self.position = (self.target - self.position) / self.speed + self.position
        self.angle += constants.FLIGHT_SPIN
        self.speed -= 1
