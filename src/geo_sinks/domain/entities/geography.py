from dataclasses import dataclass
from enum import Enum


class ShapeKind(str, Enum):
    """OGC geometry types as reported by a path reader."""

    POINT = "Point"
    LINESTRING = "LineString"
    POLYGON = "Polygon"
    MULTIPOINT = "MultiPoint"
    MULTILINESTRING = "MultiLineString"
    MULTIPOLYGON = "MultiPolygon"
    COLLECTION = "GeometryCollection"


# Core geometry type consumed and produced by the sinks
@dataclass(frozen=True)
class Point:
    x: float
    y: float
    srid: int = 0  # opaque, passed through
    z: float | None = None  # accepted, unused
    m: float | None = None

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)
