# io/sink_logging.py
import json
import logging
import sys

from geo_sinks.sinks.hooks import NoopHooks


class SinkJsonFormatter(logging.Formatter):
    """One JSON object per record: who (query, sink), what (msg), then the event fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "query_id": getattr(record, "query_id", None),
            "sink": getattr(record, "sink", None),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update(fields)
        return json.dumps(payload, default=str)


def _sink_logger(level="INFO") -> logging.Logger:
    logger = logging.getLogger("geo_sinks")
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(SinkJsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SinkLogging(NoopHooks):
    """
    Structured JSON logs for a sink's lifecycle: begin, found, finish, error.
    Per-vertex records only in debug mode, one every `sample_every` vertices.
    """

    def __init__(
        self,
        query_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.query_id, self.debug, self.sample_every = query_id, debug, max(1, sample_every)
        self.log = logger or _sink_logger(level)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, sink, **extra):
        self.log.log(
            getattr(logging, level),
            msg,
            extra={"query_id": self.query_id, "sink": type(sink).__name__, "fields": extra},
        )

    @staticmethod
    def _shape_result(result):
        # Points go out as [x, y, srid]; floats as-is
        if hasattr(result, "xy"):
            return [result.x, result.y, result.srid]
        return result

    # --------------------------------------------------------

    def begin(self, sink, *, srid, kind):
        self._emit("DEBUG", "begin", sink, srid=srid, kind=kind)

    def vertex(self, sink, *, index, state):
        if self.debug and (index % self.sample_every) == 0:
            self._emit("DEBUG", "vertex", sink, index=index, state=state)

    def found(self, sink, **kw):
        self._emit("DEBUG", "found", sink, **kw)

    def finish(self, sink, *, state, result, vertices):
        self._emit(
            "INFO", "finish", sink, state=state, result=self._shape_result(result), vertices=vertices
        )

    def error(self, sink, *, exc: BaseException, **extra):
        self._emit("ERROR", "sink_error", sink, error=str(exc), error_type=type(exc).__name__, **extra)
