# footer.py

from geometry import Vector
import constants


class Footer:
    """
    The ground line under the seed. Grows outward from its anchor by `speed`
    pixels per draw until it reaches `width`; it never shrinks.
    """
    def __init__(self, tree, width: float, height: float, speed: float = 2, color=constants.FOOTER_COLOR):
        self.tree = tree
        self.point = Vector(tree.seed.position.x, tree.height - height / 2)
        self.width = width
        self.height = height
        self.speed = speed
        self.color = color
        self.length = 0

    def can_grow(self) -> bool:
        return self.length < self.width

    def draw(self):
        half = self.length / 2
        self.tree.canvas.stroke_line(
            (self.point.x - half, self.point.y),
            (self.point.x + half, self.point.y),
            self.height,
            self.color,
        )
        if self.can_grow():
            self.length = min(self.length + self.speed, self.width)
