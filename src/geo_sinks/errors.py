# geo_sinks/errors.py


class GeoSinkError(Exception):
    """Base class for everything the sinks raise on purpose."""


class UnsupportedShapeKind(GeoSinkError, ValueError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"This operation may only be executed on LineString instances, got {kind!r}")


class DistanceExceedsLength(GeoSinkError, ValueError):
    def __init__(self, distance: float, length: float):
        self.distance, self.length = distance, length
        super().__init__(
            f"Distance provided ({distance}) is greater than the length of the LineString ({length})"
        )


class SinkStateError(GeoSinkError, RuntimeError):
    """Event arrived in a state that cannot accept it (out of order, reuse, double write)."""
