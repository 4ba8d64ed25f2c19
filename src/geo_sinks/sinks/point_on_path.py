# sinks/point_on_path.py
import math

from geo_sinks.domain.entities.geography import Point
from geo_sinks.domain.geometry import DEFAULT_TOLERANCE, as_point, distance, on_segment
from geo_sinks.domain.state import ResultSlot
from geo_sinks.errors import SinkStateError
from geo_sinks.sinks.hooks import SinkHooks
from geo_sinks.sinks.walker import PathWalker


class PointOnSegmentSink(PathWalker):
    """
    Measures how far along a LineString a reference point sits.

    The slot holds -1 from construction on and is written once, with the
    arc length from the first vertex, when a segment contains the point.
    "Not on the path" is not an error: the slot just keeps its sentinel.

    The test is planar: |(p - a) x (b - a)| <= tolerance, then an inclusive
    extent check on the segment's dominant axis. `tolerance` is in raw
    coordinate units, so for lat/lon input it is in degrees squared, not meters.

    A zero-length segment (repeated vertex) has no dominant axis and falls to
    the y check, so any point with the same y as that vertex matches whatever
    its x. Kept as is so results stay reproducible against existing data.
    """

    def __init__(
        self,
        point: Point | tuple[float, float],
        slot: ResultSlot | None = None,
        *,
        tolerance: float = DEFAULT_TOLERANCE,
        hooks: SinkHooks | None = None,
    ):
        if not math.isfinite(tolerance) or tolerance < 0:
            raise ValueError(f"tolerance must be finite and >= 0, got {tolerance}")
        if slot is not None and slot.is_set:
            raise SinkStateError(f"result slot already written ({slot.value})")
        super().__init__(hooks=hooks)
        self.point = as_point(point)
        self.tolerance = float(tolerance)
        self.slot = slot if slot is not None else ResultSlot()
        self.accumulated = 0.0

    @property
    def result(self) -> float:
        return self.slot.value

    def _segment(self, a: Point, b: Point) -> bool:
        if on_segment(a, b, self.point, self.tolerance):
            self.slot.set(self.accumulated + distance(a, self.point))
            return True
        self.accumulated += distance(a, b)
        return False

    def _finish(self) -> float:
        return self.slot.value
