# app/functions.py
from collections.abc import Iterable, Mapping

import numpy as np

from geo_sinks.config.models import QueryModel
from geo_sinks.domain.entities.geography import Point
from geo_sinks.domain.geometry import DEFAULT_TOLERANCE, Pt, as_point
from geo_sinks.io.driver import replay
from geo_sinks.io.sink_logging import SinkLogging
from geo_sinks.runtime.registries import make_sink
from geo_sinks.sinks.hooks import NoopHooks, SinkHooks
from geo_sinks.sinks.locate_along import LocateAlongSink
from geo_sinks.sinks.point_on_path import PointOnSegmentSink

Vertices = Iterable[Pt] | np.ndarray


def locate_along(
    vertices: Vertices, distance: float, *, srid: int = 0, hooks: SinkHooks | None = None
) -> Point:
    """Point `distance` along the path; DistanceExceedsLength if the path is shorter."""
    return replay(vertices, LocateAlongSink(distance, hooks=hooks), srid=srid)


def locate_point(
    vertices: Vertices,
    point: Pt,
    *,
    srid: int = 0,
    tolerance: float = DEFAULT_TOLERANCE,
    hooks: SinkHooks | None = None,
) -> float:
    """Arc length from the start to `point`, or -1 if it is not on the path."""
    sink = PointOnSegmentSink(as_point(point, srid), tolerance=tolerance, hooks=hooks)
    return replay(vertices, sink, srid=srid)


def run_query(
    cfg: QueryModel | Mapping, vertices: Vertices, *, srid: int = 0, use_logging: bool = True
):
    model = cfg if isinstance(cfg, QueryModel) else QueryModel.model_validate(cfg)
    hooks = (
        SinkLogging(
            query_id=model.query_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    return replay(vertices, make_sink(model.sink, hooks=hooks), srid=srid)
