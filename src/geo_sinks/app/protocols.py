from typing import Protocol, runtime_checkable

from geo_sinks.domain.entities.geography import ShapeKind


# ------------- Event protocol --------------------
@runtime_checkable
class GeometrySink(Protocol):
    """
    Consumer of a geometry event stream. A path reader calls, in order:
      set_srid → begin_geometry → begin_figure → add_line* → end_figure → end_geometry
    z/m values are optional and may be ignored.
    """

    def set_srid(self, srid: int) -> None: ...
    def begin_geometry(self, kind: ShapeKind | str) -> None: ...
    def begin_figure(
        self, x: float, y: float, z: float | None = None, m: float | None = None
    ) -> None: ...
    def add_line(self, x: float, y: float, z: float | None = None, m: float | None = None) -> None: ...
    def end_figure(self) -> None: ...
    def end_geometry(self):
        """Terminal event; may return the consumer's result."""


@runtime_checkable
class GeometryBuilder(GeometrySink, Protocol):
    """Downstream consumer of a sink's output geometry (same shape as the input protocol)."""
