# sinks/walker.py
from geo_sinks.domain.entities.geography import Point, ShapeKind
from geo_sinks.domain.state import SinkState
from geo_sinks.errors import SinkStateError, UnsupportedShapeKind
from geo_sinks.sinks.hooks import NoopHooks, SinkHooks


def _shape_kind(kind) -> ShapeKind | None:
    if isinstance(kind, ShapeKind):
        return kind
    try:
        return ShapeKind(kind)
    except ValueError:
        return None


class PathWalker:
    """
    Event-dispatch skeleton shared by the sinks.

    Owns the state machine and the last consumed vertex; subclasses decide what
    a segment means through `_segment(a, b) -> bool` (True once the answer is
    known) and what the terminal event hands back through `_finish()`.

    A walker serves exactly one query. Only single-figure LineStrings are
    accepted. Once FOUND, further vertices are accepted and ignored since the
    reader driving the events cannot be stopped mid-stream.
    """

    def __init__(self, *, hooks: SinkHooks | None = None):
        self.hooks = hooks or NoopHooks()
        self.state = SinkState.UNINITIALIZED
        self.srid: int | None = None
        self.last: Point | None = None
        self.vertices = 0  # consumed before the answer was known
        self._figure_done = False
        self._hit = False

    # --------------- Subclass seams ----------------------

    def _segment(self, a: Point, b: Point) -> bool:
        raise NotImplementedError

    def _figure_end(self) -> bool:
        """Last chance to resolve when the figure closes; True if found."""
        return False

    def _finish(self):
        raise NotImplementedError

    # --------------- Helpers -----------------------------

    @property
    def found(self) -> bool:
        return self._hit

    def _refuse(self, event: str, why: str) -> None:
        exc = SinkStateError(f"{type(self).__name__}.{event}(): {why}")
        self.hooks.error(self, exc=exc, event=event, state=self.state.name)
        raise exc

    def _expect(self, event: str, *states: SinkState) -> None:
        if self.state not in states:
            self._refuse(event, f"not allowed in state {self.state.name}")

    def _point(self, x, y, z, m) -> Point:
        return Point(float(x), float(y), self.srid, z, m)

    # --------------- Events ------------------------------

    def set_srid(self, srid: int) -> None:
        self._expect("set_srid", SinkState.UNINITIALIZED)
        if self.srid is not None:
            self._refuse("set_srid", f"SRID already set to {self.srid}")
        self.srid = int(srid)

    def begin_geometry(self, kind: ShapeKind | str) -> None:
        self._expect("begin_geometry", SinkState.UNINITIALIZED)
        if self.srid is None:
            self._refuse("begin_geometry", "set_srid() must come first")
        if _shape_kind(kind) is not ShapeKind.LINESTRING:
            exc = UnsupportedShapeKind(kind)
            self.hooks.error(self, exc=exc, event="begin_geometry")
            raise exc
        self.state = SinkState.STARTED
        self.hooks.begin(self, srid=self.srid, kind=ShapeKind.LINESTRING.value)

    def begin_figure(self, x, y, z=None, m=None) -> None:
        # a second figure lands in SCANNING/FOUND/EXHAUSTED and is refused here
        self._expect("begin_figure", SinkState.STARTED)
        self.last = self._point(x, y, z, m)
        self.vertices = 1
        self.state = SinkState.SCANNING

    def add_line(self, x, y, z=None, m=None) -> None:
        if self._figure_done:
            self._refuse("add_line", "figure already ended")
        self._expect("add_line", SinkState.SCANNING, SinkState.FOUND)
        if self.state is SinkState.FOUND:
            return
        self.vertices += 1
        p = self._point(x, y, z, m)
        hit = self._segment(self.last, p)
        self.last = p
        self.hooks.vertex(self, index=self.vertices - 1, state=self.state.name)
        if hit:
            self.state = SinkState.FOUND
            self._hit = True
            self.hooks.found(self, index=self.vertices - 1)

    def end_figure(self) -> None:
        self._expect("end_figure", SinkState.SCANNING, SinkState.FOUND)
        if self._figure_done:
            self._refuse("end_figure", "figure already ended")
        self._figure_done = True
        if self.state is SinkState.SCANNING:
            if self._figure_end():
                self.state = SinkState.FOUND
                self._hit = True
                self.hooks.found(self, index=self.vertices - 1)
            else:
                self.state = SinkState.EXHAUSTED

    def end_geometry(self):
        # STARTED here means an empty LineString: no figure at all
        self._expect("end_geometry", SinkState.STARTED, SinkState.FOUND, SinkState.EXHAUSTED)
        if self.state is SinkState.FOUND and not self._figure_done:
            self._refuse("end_geometry", "figure still open")
        prior = self.state
        self.state = SinkState.CLOSED
        try:
            result = self._finish()
        except Exception as exc:
            self.hooks.error(self, exc=exc, event="end_geometry", state=prior.name)
            raise
        self.hooks.finish(self, state=prior.name, result=result, vertices=self.vertices)
        return result
