# runtime/registries.py
from collections.abc import Callable

from geo_sinks.app.protocols import GeometrySink
from geo_sinks.config.models import LocateAlongModel, PointOnPathModel, SinkUnion
from geo_sinks.domain.entities.geography import Point
from geo_sinks.sinks.locate_along import LocateAlongSink
from geo_sinks.sinks.point_on_path import PointOnSegmentSink

SinkFactory = Callable[[SinkUnion, dict], GeometrySink]

_sink_registry: dict[str, SinkFactory] = {}


def register_sink(kind: str):
    def deco(fn: SinkFactory):
        _sink_registry[kind] = fn
        return fn

    return deco


def make_sink(cfg: SinkUnion, **deps) -> GeometrySink:
    try:
        factory = _sink_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown sink kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_sink("locate_along")
def _make_locate_along(cfg: LocateAlongModel, deps):
    return LocateAlongSink(cfg.distance, deps.get("target"), hooks=deps.get("hooks"))


@register_sink("point_on_path")
def _make_point_on_path(cfg: PointOnPathModel, deps):
    return PointOnSegmentSink(
        Point(cfg.x, cfg.y, cfg.srid),
        deps.get("slot"),
        tolerance=cfg.tolerance,
        hooks=deps.get("hooks"),
    )
