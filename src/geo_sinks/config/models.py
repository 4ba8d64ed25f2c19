from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from geo_sinks.domain.geometry import DEFAULT_TOLERANCE


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1000


# ----------------- SINKS ---------------------


class LocateAlongModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["locate_along"] = "locate_along"
    distance: float

    @field_validator("distance")
    @classmethod
    def _finite_nonneg(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError(f"{info.field_name} must be finite and >= 0")
        return v


class PointOnPathModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["point_on_path"] = "point_on_path"
    x: float
    y: float
    srid: int = 0
    # raw coordinate units; planar, see PointOnSegmentSink
    tolerance: float = DEFAULT_TOLERANCE

    @field_validator("tolerance")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError(f"{info.field_name} must be finite and >= 0")
        return v


SinkUnion = Annotated[LocateAlongModel | PointOnPathModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    query_id: str = "local"
    sink: SinkUnion
    log: LogModel = LogModel()
