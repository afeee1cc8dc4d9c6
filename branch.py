# branch.py

import logging
from collections import namedtuple

from geometry import Vector, bezier
import constants

logger = logging.getLogger("heart_tree")

# One node of the branch spec tree: three Bezier control points, a starting
# radius, the number of discs to draw and the specs of the child branches.
BranchSpec = namedtuple('BranchSpec', ['start', 'control', 'end', 'radius', 'length', 'children'])


def parse_branch_spec(raw) -> BranchSpec:
    """
    Converts one config entry `[x1, y1, x2, y2, x3, y3, radius, length, children?]`
    into a BranchSpec, recursing into the children.
    """
    if isinstance(raw, BranchSpec):
        return raw
    x1, y1, x2, y2, x3, y3, radius, length = raw[:8]
    children = raw[8] if len(raw) > 8 else []
    return BranchSpec(
        start=Vector(x1, y1),
        control=Vector(x2, y2),
        end=Vector(x3, y3),
        radius=radius,
        length=int(length),
        children=tuple(parse_branch_spec(c) for c in children),
    )


class Branch:
    """
    One Bezier segment of the tree that grows one disc per tick.

    The tree is never held as linked nodes: a branch only carries the specs of
    its children and hands them to the tree when it completes, so the tree's
    active list holds exactly the branches that are still growing.

    Data Contract:
    - Inputs:
        - tree (Tree): Owner of the canvas and the active branch list.
        - spec (BranchSpec): Geometry, radius, length and child specs.
    - Invariants:
        - progress strictly increases and radius strictly decreases per tick.
        - A completed branch never draws again.
    """
    def __init__(self, tree, spec: BranchSpec, color=constants.BRANCH_COLOR):
        self.tree = tree
        self.start = spec.start
        self.control = spec.control
        self.end = spec.end
        self.radius = spec.radius
        self.length = spec.length
        self.children = spec.children
        self.color = color
        self.progress = 0
        self.done = False
        # A one-disc branch has no span to interpolate over.
        self.step = 1 / (self.length - 1) if self.length > 1 else 0.0

    def point_at(self, progress: int) -> Vector:
        return bezier((self.start, self.control, self.end), progress * self.step)

    def grow(self):
        """Draws the next disc; completes the branch once all discs are down."""
        if self.done:
            return
        if self.progress < self.length:
            self.draw(self.point_at(self.progress))
            self.progress += 1
            self.radius *= constants.BRANCH_RADIUS_DECAY
        if self.progress >= self.length:
            if self.length <= 1:
                logger.debug(f"Degenerate branch (length={self.length}) completed immediately.")
            self.complete()

    def complete(self):
        self.done = True
        self.tree.remove_branch(self)
        self.tree.add_branches(self.children)

    def draw(self, point: Vector):
        self.tree.canvas.fill_circle(point, self.radius, self.color)
