# sinks/hooks.py
from typing import Protocol


class SinkHooks(Protocol):
    def begin(self, sink, *, srid, kind): ...
    def vertex(self, sink, *, index, state): ...
    def found(self, sink, **kw): ...
    def finish(self, sink, *, state, result, vertices): ...
    def error(self, sink, *, exc: BaseException, **kw): ...


class NoopHooks:
    def begin(self, *_, **__):
        pass

    def vertex(self, *_, **__):
        pass

    def found(self, *_, **__):
        pass

    def finish(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
