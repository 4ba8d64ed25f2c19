import numpy as np
import pytest
from pydantic import ValidationError

from geo_sinks.app.functions import locate_along, locate_point, run_query
from geo_sinks.config.models import LocateAlongModel, PointOnPathModel, QueryModel
from geo_sinks.domain.entities.geography import Point
from geo_sinks.domain.geometry import path_length
from geo_sinks.domain.state import ResultSlot
from geo_sinks.errors import DistanceExceedsLength
from geo_sinks.io.builder import PointBuilder
from geo_sinks.runtime.registries import make_sink, register_sink
from geo_sinks.sinks.locate_along import LocateAlongSink
from geo_sinks.sinks.point_on_path import PointOnSegmentSink

ELBOW = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0)]


def test_locate_along_scenarios():
    assert locate_along(ELBOW, 5.0, srid=4326) == Point(0.0, 5.0, 4326)
    assert locate_along(ELBOW, 15.0).xy == (5.0, 10.0)
    with pytest.raises(DistanceExceedsLength):
        locate_along(ELBOW, 25.0)


def test_locate_along_full_length_is_last_vertex():
    rng = np.random.default_rng(31)
    for _ in range(50):
        pts = [(float(x), float(y)) for x, y in rng.uniform(-100, 100, size=(15, 2))]
        assert locate_along(pts, path_length(pts), srid=4326) == Point(*pts[-1], 4326)


def test_locate_point_scenarios():
    assert locate_point(ELBOW, (0.0, 5.0)) == 5.0
    assert locate_point(ELBOW, (5.0, 5.0)) == -1
    assert locate_point(ELBOW, Point(5.0, 5.0), tolerance=60.0) == pytest.approx(50**0.5)


def test_query_model_discriminates_on_kind():
    q = QueryModel.model_validate({"sink": {"kind": "locate_along", "distance": 3.0}})
    assert isinstance(q.sink, LocateAlongModel)
    q = QueryModel.model_validate({"sink": {"kind": "point_on_path", "x": 1, "y": 2}})
    assert isinstance(q.sink, PointOnPathModel)
    assert q.sink.tolerance == 0.1 and q.log.level == "INFO"


@pytest.mark.parametrize(
    "sink",
    [
        {"kind": "locate_along", "distance": -1.0},
        {"kind": "locate_along", "distance": float("inf")},
        {"kind": "point_on_path", "x": 0, "y": 0, "tolerance": -0.5},
        {"kind": "point_on_path", "x": 0, "y": 0, "bogus": 1},
        {"kind": "buffer", "distance": 1.0},
    ],
)
def test_query_model_rejects_bad_input(sink):
    with pytest.raises(ValidationError):
        QueryModel.model_validate({"sink": sink})


def test_run_query_both_kinds():
    cfg = {"query_id": "a", "sink": {"kind": "locate_along", "distance": 15.0}}
    assert run_query(cfg, ELBOW, srid=3857, use_logging=False) == Point(5.0, 10.0, 3857)
    cfg = {"sink": {"kind": "point_on_path", "x": 10.0, "y": 10.0}}
    assert run_query(QueryModel.model_validate(cfg), ELBOW, use_logging=False) == 20.0


def test_make_sink_passes_dependencies():
    target, slot = PointBuilder(), ResultSlot()
    s = make_sink(LocateAlongModel(distance=1.0), target=target)
    assert isinstance(s, LocateAlongSink) and s.target is target
    s = make_sink(PointOnPathModel(x=0.0, y=0.0, srid=4326), slot=slot)
    assert isinstance(s, PointOnSegmentSink) and s.slot is slot
    assert s.point.srid == 4326


def test_make_sink_unknown_kind():
    class Fake:
        kind = "nope"

    with pytest.raises(ValueError):
        make_sink(Fake())


def test_register_sink_adds_factory():
    calls = []

    @register_sink("test_only")
    def _make(cfg, deps):
        calls.append(deps)
        return LocateAlongSink(cfg.distance)

    class Cfg:
        kind = "test_only"
        distance = 2.0

    s = make_sink(Cfg(), hooks=None)
    assert isinstance(s, LocateAlongSink) and s.distance == 2.0
    assert calls == [{"hooks": None}]
