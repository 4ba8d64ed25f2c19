# io/builder.py
from geo_sinks.domain.entities.geography import Point, ShapeKind
from geo_sinks.errors import SinkStateError


class PointBuilder:
    """Collects a single-point geometry from the builder event protocol."""

    def __init__(self):
        self.srid: int | None = None
        self.kind: ShapeKind | None = None
        self.point: Point | None = None
        self.events: list[str] = []
        self._done = False

    def set_srid(self, srid: int) -> None:
        self.events.append("set_srid")
        self.srid = srid

    def begin_geometry(self, kind) -> None:
        self.events.append("begin_geometry")
        self.kind = ShapeKind(kind)
        if self.kind is not ShapeKind.POINT:
            raise SinkStateError(f"PointBuilder only builds points, got {self.kind.value}")

    def begin_figure(self, x, y, z=None, m=None) -> None:
        self.events.append("begin_figure")
        if self.point is not None:
            raise SinkStateError("a point geometry has exactly one figure")
        self.point = Point(float(x), float(y), self.srid if self.srid is not None else 0, z, m)

    def add_line(self, x, y, z=None, m=None) -> None:
        raise SinkStateError("a point geometry has no line segments")

    def end_figure(self) -> None:
        self.events.append("end_figure")

    def end_geometry(self) -> Point | None:
        self.events.append("end_geometry")
        self._done = True
        return self.point

    @property
    def done(self) -> bool:
        return self._done
