"""Plain 2-D vector math on (x, y) tuples."""

from __future__ import annotations

import math
from typing import NamedTuple


class Vec(NamedTuple):
    """An immutable 2-D vector."""

    x: float
    y: float


ZERO = Vec(0.0, 0.0)


def add(a: Vec, b: Vec) -> Vec:
    return Vec(a.x + b.x, a.y + b.y)


def subtract(a: Vec, b: Vec) -> Vec:
    return Vec(a.x - b.x, a.y - b.y)


def scale(v: Vec, s: float) -> Vec:
    return Vec(v.x * s, v.y * s)


def magnitude(v: Vec) -> float:
    return math.hypot(v.x, v.y)


def distance(a: Vec, b: Vec) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def rotate(v: Vec, radians: float) -> Vec:
    """Rotate ``v`` counter-clockwise about the origin."""
    cos = math.cos(radians)
    sin = math.sin(radians)
    return Vec(v.x * cos - v.y * sin, v.x * sin + v.y * cos)


def _ccw(p1: Vec, p2: Vec, p3: Vec) -> bool:
    return (p3.y - p1.y) * (p2.x - p1.x) > (p2.y - p1.y) * (p3.x - p1.x)


def intersects(a1: Vec, a2: Vec, b1: Vec, b2: Vec) -> bool:
    """Return True if segment a1-a2 crosses segment b1-b2 (orientation test).

    Collinear overlaps are not reported. Callers that must ignore segments
    sharing an endpoint filter those out first.
    """
    return _ccw(a1, b1, b2) != _ccw(a2, b1, b2) and _ccw(a1, a2, b1) != _ccw(a1, a2, b2)
