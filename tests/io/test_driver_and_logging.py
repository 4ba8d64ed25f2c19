import io
import json
import logging

import numpy as np
import pytest

from geo_sinks.domain.entities.geography import Point, ShapeKind
from geo_sinks.errors import DistanceExceedsLength, SinkStateError, UnsupportedShapeKind
from geo_sinks.io.builder import PointBuilder
from geo_sinks.io.driver import replay
from geo_sinks.io.sink_logging import SinkJsonFormatter, SinkLogging
from geo_sinks.sinks.locate_along import LocateAlongSink
from geo_sinks.sinks.point_on_path import PointOnSegmentSink


class RecordingSink:
    """Test double that records the event stream the driver produces."""

    def __init__(self):
        self.calls = []

    def set_srid(self, srid):
        self.calls.append(("set_srid", srid))

    def begin_geometry(self, kind):
        self.calls.append(("begin_geometry", kind))

    def begin_figure(self, x, y, z=None, m=None):
        self.calls.append(("begin_figure", x, y, z, m))

    def add_line(self, x, y, z=None, m=None):
        self.calls.append(("add_line", x, y, z, m))

    def end_figure(self):
        self.calls.append(("end_figure",))

    def end_geometry(self):
        self.calls.append(("end_geometry",))
        return "done"


def test_replay_event_order_with_points_forwards_zm():
    sink = RecordingSink()
    out = replay([Point(0, 0, z=1.0), Point(1, 0, m=7.0)], sink, srid=27700)
    assert out == "done"
    assert sink.calls == [
        ("set_srid", 27700),
        ("begin_geometry", ShapeKind.LINESTRING),
        ("begin_figure", 0, 0, 1.0, None),
        ("add_line", 1, 0, None, 7.0),
        ("end_figure",),
        ("end_geometry",),
    ]


def test_replay_accepts_numpy_and_pairs():
    sink = RecordingSink()
    replay(np.array([[0.0, 1.0], [2.0, 3.0]]), sink)
    assert sink.calls[2] == ("begin_figure", 0.0, 1.0, None, None)
    assert sink.calls[3] == ("add_line", 2.0, 3.0, None, None)

    sink = RecordingSink()
    replay([(0, 1), Point(2, 3)], sink)
    assert [c[0] for c in sink.calls].count("add_line") == 1


def test_replay_empty_path_has_no_figure():
    sink = RecordingSink()
    replay([], sink)
    assert [c[0] for c in sink.calls] == ["set_srid", "begin_geometry", "end_geometry"]


def test_replay_shape_kind_passthrough():
    with pytest.raises(UnsupportedShapeKind):
        replay([(0, 0), (1, 1)], LocateAlongSink(0.5), kind="Polygon")


def test_point_builder_refuses_non_points():
    b = PointBuilder()
    b.set_srid(4326)
    with pytest.raises(SinkStateError):
        b.begin_geometry(ShapeKind.LINESTRING)

    b = PointBuilder()
    b.set_srid(4326)
    b.begin_geometry("Point")
    b.begin_figure(1.0, 2.0)
    with pytest.raises(SinkStateError):
        b.add_line(3.0, 4.0)
    b.end_figure()
    assert b.end_geometry() == Point(1.0, 2.0, 4326)
    assert b.done


# ---------- Logging


@pytest.fixture
def json_logger():
    buf = io.StringIO()
    logger = logging.getLogger("geo_sinks.test")
    logger.handlers.clear()
    logger.propagate = False
    h = logging.StreamHandler(buf)
    h.setFormatter(SinkJsonFormatter())
    logger.addHandler(h)
    logger.setLevel(logging.DEBUG)
    yield logger, buf
    logger.handlers.clear()


def _records(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines()]


def test_logging_finish_record(json_logger):
    logger, buf = json_logger
    hooks = SinkLogging(query_id="q1", logger=logger)
    replay([(0, 0), (0, 10), (10, 10)], LocateAlongSink(15.0, hooks=hooks), srid=4326)
    recs = _records(buf)
    assert [r["msg"] for r in recs] == ["begin", "found", "finish"]
    fin = recs[-1]
    assert fin["level"] == "INFO" and fin["query_id"] == "q1"
    assert fin["sink"] == "LocateAlongSink"
    assert fin["result"] == [5.0, 10.0, 4326] and fin["state"] == "FOUND"


def test_logging_error_record(json_logger):
    logger, buf = json_logger
    hooks = SinkLogging(logger=logger)
    with pytest.raises(DistanceExceedsLength):
        replay([(0, 0), (3, 4)], LocateAlongSink(6.0, hooks=hooks))
    err = _records(buf)[-1]
    assert err["level"] == "ERROR" and err["error_type"] == "DistanceExceedsLength"
    assert err["state"] == "EXHAUSTED"


def test_logging_samples_vertices_in_debug(json_logger):
    logger, buf = json_logger
    hooks = SinkLogging(logger=logger, debug=True, sample_every=2)
    path = [(float(i), 0.0) for i in range(7)]
    assert replay(path, PointOnSegmentSink((99.0, 99.0), hooks=hooks)) == -1
    idx = [r["index"] for r in _records(buf) if r["msg"] == "vertex"]
    assert idx == [2, 4, 6]
