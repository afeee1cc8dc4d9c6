# geometry.py

"""
Geometry primitives shared by every drawable in the scene.

The heart-region test sits on the hot path of bloom placement (hundreds of
blooms, each drawn by rejection sampling), so it and the candidate scan are
compiled with Numba and operate only on scalars and NumPy arrays.
"""

import math
from collections import namedtuple

import numba
import numpy as np


class Vector(namedtuple('Vector', ['x', 'y'])):
    """
    A 2D point. Every arithmetic operation returns a new Vector.
    """
    __slots__ = ()

    def __add__(self, other):
        return Vector(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Vector(self.x - other[0], self.y - other[1])

    def __mul__(self, factor):
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        return Vector(self.x / divisor, self.y / divisor)


def bezier(control_points, t):
    """
    Quadratic Bezier point for control points (p0, p1, p2) at parameter t.
    No bounds checking; callers keep t in [0, 1].
    """
    p0, p1, p2 = control_points
    return p0 * ((1 - t) ** 2) + p1 * (2 * t * (1 - t)) + p2 * (t ** 2)


@numba.jit(nopython=True)
def in_heart_region(x, y, r):
    """True iff (x, y) lies inside the heart silhouette of size r centred on the origin."""
    nx = x / r
    ny = y / r
    return (nx * nx + ny * ny - 1.0) ** 3 - nx * nx * ny * ny * ny < 0.0


@numba.jit(nopython=True)
def first_in_heart(xs, ys, width, height, radius):
    """
    Scans a batch of candidate positions and returns the index of the first one
    inside the heart region, or -1 if none is.

    Candidates are in box coordinates; the heart is centred horizontally and
    sits on the box's vertical midline (y axis pointing up).
    """
    for i in range(xs.shape[0]):
        if in_heart_region(xs[i] - width / 2.0, height - (height - 40.0) / 2.0 - ys[i], radius):
            return i
    return -1


class Figure:
    """
    A closed polygon stored as an ordered list of vertices. Insertion order is
    draw order.
    """
    def __init__(self, points):
        self.points = [Vector(*p) for p in points]

    def __len__(self):
        return len(self.points)

    def get(self, i, scale=1.0):
        return self.points[i] * scale


def star(outer_radius, inner_radius, point_count=10):
    """
    Builds a star Figure alternating between the outer and inner radius at
    equal angular steps. Vertex 0 is an outer tip at angle 0.
    """
    step = 2 * math.pi / point_count
    points = []
    for i in range(point_count):
        radius = outer_radius if i % 2 == 0 else inner_radius
        angle = i * step
        points.append((radius * math.cos(angle), radius * math.sin(angle)))
    return Figure(points)


def transform_points(points, origin=(0.0, 0.0), scale=1.0, angle=0.0):
    """
    Applies a scoped translate -> scale -> rotate transform to a list of points
    and returns plain (x, y) tuples ready for pygame.draw.

    - Inputs:
        - points (sequence): Local-space vertices.
        - origin (sequence): Translation applied last.
        - scale (float): Uniform scale.
        - angle (float): Rotation in radians, applied first.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rotation = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
    out = pts @ rotation.T * scale + np.asarray(origin, dtype=np.float64)
    return [(float(x), float(y)) for x, y in out]
