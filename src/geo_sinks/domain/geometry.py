import math
from collections.abc import Iterable
from dataclasses import replace
from itertools import accumulate

import numpy as np

from geo_sinks.domain.entities.geography import Point

# Planar arithmetic on raw coordinate pairs. Nothing here knows about the SRID
# beyond carrying it along, so lat/lon input is treated as if it were flat.

DEFAULT_TOLERANCE = 0.1  # in input coordinate units

Pt = Point | tuple[float, float]


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def interpolate(a: Point, b: Point, d: float) -> Point:
    """
    Point at distance `d` from `a` toward `b`, carrying `a`'s SRID.
    Exact at both ends: d == 0 gives `a`, d >= |ab| gives `b`.
    """
    if d < 0:
        raise ValueError(f"interpolation distance must be >= 0, got {d}")
    L = distance(a, b)
    if d == 0 or L == 0:
        return a
    if d >= L:
        return b if b.srid == a.srid else replace(b, srid=a.srid)
    f = d / L
    return Point(a.x + f * (b.x - a.x), a.y + f * (b.y - a.y), a.srid)


def cross(o: Point, a: Point, b: Point) -> float:
    """z-component of (a - o) x (b - o)."""
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def on_segment(a: Point, b: Point, p: Point, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    # collinear within tolerance
    if abs(cross(a, p, b)) > tolerance:
        return False
    # then inside the extent along the dominant axis (no division, so flat
    # or steep segments are both fine)
    dx, dy = b.x - a.x, b.y - a.y
    if abs(dx) > abs(dy):
        return a.x <= p.x <= b.x if dx > 0 else b.x <= p.x <= a.x
    return a.y <= p.y <= b.y if dy > 0 else b.y <= p.y <= a.y


def as_point(p: Pt, srid: int = 0) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]), srid)


def as_coords(vertices: Iterable[Pt] | np.ndarray) -> np.ndarray:
    """(N, 2) float array from Points, pairs or an array."""
    if isinstance(vertices, np.ndarray):
        arr = vertices.astype(float, copy=False)
    else:
        arr = np.array([p.xy if isinstance(p, Point) else p for p in vertices], dtype=float)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"expected an (N, 2) coordinate array, got shape {arr.shape}")
    return arr[:, :2]


def segment_lengths(vertices: Iterable[Pt] | np.ndarray) -> list[float]:
    # same arithmetic as distance(), so totals match what a sink measures
    xy = as_coords(vertices).tolist()
    return [math.hypot(x1 - x0, y1 - y0) for (x0, y0), (x1, y1) in zip(xy, xy[1:])]


def cumulative_lengths(vertices: Iterable[Pt] | np.ndarray) -> np.ndarray:
    """Arc length at each vertex, summed left to right like the sinks do."""
    xy = as_coords(vertices)
    if len(xy) == 0:
        return np.zeros(0)
    return np.array(list(accumulate(segment_lengths(xy), initial=0.0)))


def path_length(vertices: Iterable[Pt] | np.ndarray) -> float:
    cum = cumulative_lengths(vertices)
    return float(cum[-1]) if len(cum) else 0.0
