# seed.py

import logging

from geometry import Vector, star
import constants

logger = logging.getLogger("heart_tree")


class Seed:
    """
    The clickable glyph the show starts from, plus the small marker circle that
    falls to the ground before the trunk grows.

    Data Contract:
    - Inputs:
        - tree (Tree): Provides the canvas and the bottom edge for the rise.
        - position (Vector): Centre of the glyph and starting marker position.
        - scale (float): Starting glyph scale; also the marker's fixed scale.
        - color (tuple): RGB fill for glyph and marker.
        - text (str): Two-line caption drawn under the glyph.
    - Invariants:
        - scale only ever decreases (shrink).
        - marker_position.y only ever increases (rise).
    """
    def __init__(self, tree, position: Vector, scale: float = 1.0, color=constants.SEED_COLOR, text: str = ""):
        self.tree = tree
        self.position = position
        self.scale = scale
        self.color = color
        self.figure = star(constants.STAR_OUTER_RADIUS, constants.STAR_INNER_RADIUS, constants.STAR_POINTS)
        self.text = text

        self.marker_position = position
        self.marker_scale = scale
        self.marker_radius = constants.SEED_MARKER_RADIUS

    def can_scale(self) -> bool:
        return self.scale > constants.SEED_SCALE_FLOOR

    def can_move(self) -> bool:
        return self.marker_position.y < self.tree.height + constants.SEED_RISE_OVERSHOOT

    def draw(self):
        self.draw_figure()
        self.draw_text()

    def shrink(self, factor: float):
        """One shrink tick: clear, redraw the marker, rescale, redraw glyph and caption."""
        self.clear()
        self.draw_marker()
        self.scale *= factor
        self.draw()

    def move(self, dx: float, dy: float):
        """One rise tick: clear, redraw the marker, then step it."""
        self.clear()
        self.draw_marker()
        self.marker_position = self.marker_position + Vector(dx, dy)

    def draw_figure(self):
        self.tree.canvas.fill_polygon(self.figure.points, self.color, origin=self.position, scale=self.scale)

    def draw_marker(self):
        self.tree.canvas.fill_circle(self.marker_position, self.marker_radius * self.marker_scale, self.color)

    def draw_text(self):
        if not self.text:
            return
        text_scale = self.scale * constants.SEED_TEXT_SCALE
        size = constants.SEED_FONT_SIZE * text_scale
        for line, offset in zip(self.text.split('\n'), constants.SEED_TEXT_OFFSETS):
            baseline = Vector(self.position.x, self.position.y + offset * text_scale)
            self.tree.canvas.draw_text(line, baseline, size, constants.TEXT_COLOR, align='center')

    def clear(self):
        # Footprint starts one box up-left of the marker and spans four boxes,
        # so the glyph and its caption below go with it.
        half = constants.SEED_FOOTPRINT * self.marker_scale
        self.tree.canvas.clear_rect(
            self.marker_position.x - half,
            self.marker_position.y - half,
            4 * half,
            4 * half,
        )

    def hover(self, x, y) -> bool:
        """True iff (x, y) lands on fully opaque drawn content."""
        pixel = self.tree.canvas.get_pixel(x, y)
        return pixel is not None and pixel[3] == 255
