# io/driver.py
from collections.abc import Iterable

import numpy as np

from geo_sinks.app.protocols import GeometrySink
from geo_sinks.domain.entities.geography import Point, ShapeKind
from geo_sinks.domain.geometry import Pt, as_coords


def replay(
    vertices: Iterable[Pt] | np.ndarray,
    sink: GeometrySink,
    *,
    srid: int = 0,
    kind: ShapeKind | str = ShapeKind.LINESTRING,
):
    """
    Walk an in-memory vertex sequence into `sink` and return what its
    end_geometry() returns. z/m are forwarded for Point vertices.
    """
    pts = list(vertices) if not isinstance(vertices, np.ndarray) else None
    sink.set_srid(srid)
    sink.begin_geometry(kind)
    if pts is not None and all(isinstance(p, Point) for p in pts):
        if pts:
            first, *rest = pts
            sink.begin_figure(first.x, first.y, first.z, first.m)
            for p in rest:
                sink.add_line(p.x, p.y, p.z, p.m)
            sink.end_figure()
        return sink.end_geometry()

    xy = as_coords(vertices if pts is None else pts)
    if len(xy):
        sink.begin_figure(float(xy[0, 0]), float(xy[0, 1]))
        for x, y in xy[1:]:
            sink.add_line(float(x), float(y))
        sink.end_figure()
    return sink.end_geometry()
