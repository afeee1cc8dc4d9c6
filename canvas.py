# canvas.py

import logging

import pygame

from geometry import transform_points

logger = logging.getLogger("heart_tree")


class Canvas:
    """
    The drawing surface every scene element paints onto.

    Drawn pixels live on a transparent SRCALPHA layer so that the layer's alpha
    channel tells drawn content apart from empty space (the seed's hit-test
    relies on this). The canvas's painted background and an optional backdrop
    image are only applied when the canvas is composed onto a target surface.

    Data Contract:
    - Inputs:
        - width, height (int): Size of the drawing layer in pixels.
        - background (tuple | None): RGB color painted beneath the layer.
    - Side Effects: Initializes pygame.font on first use.
    - Invariants: The layer's size never changes.
    """
    def __init__(self, width: int, height: int, background=None):
        self.width = width
        self.height = height
        self.background = background
        self.backdrop = None
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)
        self._fonts = {}

    # --- Shapes ---

    def fill_polygon(self, points, color, alpha=1.0, origin=(0, 0), scale=1.0, angle=0.0):
        """
        Fills a closed polygon given in local coordinates, transformed by
        translate(origin) -> scale -> rotate(angle). Alpha below 1 is blended
        over what is already on the layer.
        """
        if len(points) < 3 or scale <= 0:
            return
        screen_points = transform_points(points, origin, scale, angle)
        if alpha >= 1.0:
            pygame.draw.polygon(self.surface, color, screen_points)
            return

        # pygame.draw writes RGBA straight through, so blend via a scratch layer.
        xs = [p[0] for p in screen_points]
        ys = [p[1] for p in screen_points]
        left, top = int(min(xs)) - 1, int(min(ys)) - 1
        w, h = int(max(xs)) - left + 2, int(max(ys)) - top + 2
        scratch = pygame.Surface((w, h), pygame.SRCALPHA)
        local = [(x - left, y - top) for x, y in screen_points]
        pygame.draw.polygon(scratch, (*color[:3], int(round(alpha * 255))), local)
        self.surface.blit(scratch, (left, top))

    def fill_circle(self, center, radius, color):
        # pygame skips circles under one pixel; keep thin twigs visible.
        pygame.draw.circle(self.surface, color, (center[0], center[1]), max(1, radius))

    def stroke_line(self, start, end, width, color):
        """Draws a line of the given thickness with round caps."""
        thickness = max(1, int(round(width)))
        pygame.draw.line(self.surface, color, start, end, thickness)
        cap = thickness / 2
        pygame.draw.circle(self.surface, color, start, cap)
        pygame.draw.circle(self.surface, color, end, cap)

    # --- Text ---

    def _font(self, size: int) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def draw_text(self, text, position, size, color, align='center'):
        """Renders one line of text with its baseline at position[1]."""
        font = self._font(max(1, int(round(size))))
        rendered = font.render(text, True, color)
        x, y = position
        if align == 'center':
            x -= rendered.get_width() / 2
        elif align == 'right':
            x -= rendered.get_width()
        self.surface.blit(rendered, (int(x), int(y - font.get_ascent())))

    # --- Raster access ---

    def clear_rect(self, x, y, width, height):
        rect = pygame.Rect(int(x), int(y), int(round(width)), int(round(height)))
        self.surface.fill((0, 0, 0, 0), rect)

    def clear(self):
        self.surface.fill((0, 0, 0, 0))

    def get_pixel(self, x, y):
        """
        Returns the (r, g, b, a) channels at (x, y), or None when the point is
        outside the layer.
        """
        x, y = int(x), int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return tuple(self.surface.get_at((x, y)))

    def get_region(self, x, y, width, height) -> pygame.Surface:
        """
        Copies a rectangular region of the layer. Parts of the rectangle outside
        the layer come back transparent.
        """
        region = pygame.Surface((int(width), int(height)), pygame.SRCALPHA)
        region.blit(self.surface, (0, 0), pygame.Rect(int(x), int(y), int(width), int(height)))
        return region

    def put_region(self, region: pygame.Surface, x, y):
        """Writes a region's pixels verbatim at (x, y), replacing what was there."""
        dest = pygame.Rect(int(x), int(y), region.get_width(), region.get_height())
        self.surface.fill((0, 0, 0, 0), dest)
        self.surface.blit(region, dest.topleft, special_flags=pygame.BLEND_RGBA_ADD)

    def export_image(self) -> pygame.Surface:
        """The current raster, painted background included, as a standalone image."""
        image = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        if self.background is not None:
            image.fill(self.background)
        image.blit(self.surface, (0, 0))
        logger.debug(f"Canvas exported ({self.width}x{self.height}).")
        return image

    def compose(self, target: pygame.Surface, position=(0, 0)):
        """Paints backdrop, background and the drawn layer onto target."""
        if self.backdrop is not None:
            target.blit(self.backdrop, position)
        if self.background is not None:
            target.fill(self.background, pygame.Rect(position, (self.width, self.height)))
        target.blit(self.surface, position)
