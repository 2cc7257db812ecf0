"""Plane and isometric geometry used by the terrain editor."""

from __future__ import annotations

import math
from collections.abc import Sequence

Point = tuple[float, float]

_ANGLE_X = math.radians(35)
_ANGLE_Y = math.radians(25)


def project_iso_point(x: float, y: float, z: float, factors: Point) -> Point:
    """Project a 3D map point onto the screen plane, scaled by ``factors``."""
    fx, fy = factors
    screen_x = (math.cos(_ANGLE_X) * x - math.cos(_ANGLE_X) * y) * fx
    screen_y = (math.sin(_ANGLE_Y) * y + math.sin(_ANGLE_Y) * x - z) * fy
    return screen_x, screen_y


def distance(p1: Point, p2: Point) -> float:
    """Return the Euclidean distance between two points."""
    return math.dist(p1, p2)


def point_in_quad(points: Sequence[Point], pos: Point) -> bool:
    """Tell whether ``pos`` lies inside the polygon ``points`` (even-odd rule)."""
    px, py = pos
    inside = False
    previous = points[-1]
    for current in points:
        xi, yi = current
        xj, yj = previous
        if ((yi <= py < yj) or (yj <= py < yi)) and px < (xj - xi) * (py - yi) / (
            yj - yi
        ) + xi:
            inside = not inside
        previous = current
    return inside


def parse_float(text: str) -> float:
    """Read a decimal number such as ``-12.5``.

    An optional leading ``-`` is accepted; every other character counts
    as a digit by its offset from ``'0'``, and the first ``.`` starts the
    fractional part.
    """
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    value = 0.0
    scale = 1.0
    after_dot = False
    for char in text:
        digit = ord(char) - ord("0")
        if after_dot:
            scale /= 10
            value += digit * scale
        elif char == ".":
            after_dot = True
        else:
            value = value * 10.0 + digit
    return -value if negative else value


def rotate_point(x: float, y: float, cx: float, cy: float, degrees: float) -> Point:
    """Rotate ``(x, y)`` around ``(cx, cy)`` by ``degrees``."""
    angle = math.radians(degrees)
    dx, dy = x - cx, y - cy
    return (
        math.cos(angle) * dx - math.sin(angle) * dy + cx,
        math.cos(angle) * dy + math.sin(angle) * dx + cy,
    )