# sinks/locate_along.py
import math

from geo_sinks.app.protocols import GeometryBuilder
from geo_sinks.domain.entities.geography import Point, ShapeKind
from geo_sinks.domain.geometry import distance, interpolate
from geo_sinks.errors import DistanceExceedsLength
from geo_sinks.io.builder import PointBuilder
from geo_sinks.sinks.hooks import SinkHooks
from geo_sinks.sinks.walker import PathWalker


class LocateAlongSink(PathWalker):
    """
    Finds the point `distance` along a LineString and pipes it to `target`.

    Each segment either swallows part of the remaining distance or contains the
    answer. A distance that lands exactly on a vertex resolves to that vertex.
    Running off the end raises DistanceExceedsLength at end_geometry().
    """

    def __init__(
        self,
        distance: float,
        target: GeometryBuilder | None = None,
        *,
        hooks: SinkHooks | None = None,
    ):
        if not math.isfinite(distance) or distance < 0:
            raise ValueError(f"distance must be finite and >= 0, got {distance}")
        super().__init__(hooks=hooks)
        self.distance = float(distance)
        self.travelled = 0.0
        self.target = target if target is not None else PointBuilder()
        self.result: Point | None = None

    @property
    def remaining(self) -> float:
        return max(self.distance - self.travelled, 0.0)

    def _segment(self, a: Point, b: Point) -> bool:
        # compare against the running sum, not a decremented remainder, so a
        # distance summed in path order lands exactly on the vertex
        L = distance(a, b)
        reach = self.travelled + L
        if reach < self.distance:
            self.travelled = reach
            return False
        if reach == self.distance:
            self.result = interpolate(a, b, L)
        else:
            self.result = interpolate(a, b, self.distance - self.travelled)
        return True

    def _figure_end(self) -> bool:
        # lone vertex with nothing left to travel
        if self.distance == 0 and self.last is not None:
            self.result = self.last
            return True
        return False

    def _finish(self) -> Point:
        if self.result is None:
            raise DistanceExceedsLength(self.distance, self.travelled)
        # by targeting another builder the sink can sit in a pipeline
        p = self.result
        self.target.set_srid(self.srid)
        self.target.begin_geometry(ShapeKind.POINT)
        self.target.begin_figure(p.x, p.y)
        self.target.end_figure()
        self.target.end_geometry()
        return p
