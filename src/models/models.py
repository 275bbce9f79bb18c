from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# E7 bounds of valid degrees
MAX_LATITUDE_E7 = 900_000_000
MAX_LONGITUDE_E7 = 1_800_000_000


class Point(BaseModel):
    """Coordinate in E7 fixed-point degrees. Equality is exact on both fields."""

    model_config = ConfigDict(frozen=True)
    latitude: int = Field(default=0, ge=-MAX_LATITUDE_E7, le=MAX_LATITUDE_E7)
    longitude: int = Field(default=0, ge=-MAX_LONGITUDE_E7, le=MAX_LONGITUDE_E7)


class Feature(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: str = ""
    location: Optional[Point] = None

    @property
    def exists(self) -> bool:
        return self.name != ""


class Rectangle(BaseModel):
    lo: Point
    hi: Point


class RouteSummary(BaseModel):
    point_count: int = 0
    feature_count: int = 0


class FieldMask(BaseModel):
    paths: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.paths) == 0


class GetFeatureRequest(BaseModel):
    point: Point
    field_mask: Optional[FieldMask] = None


class UpdateFeatureRequest(BaseModel):
    feature: Optional[Feature] = None
    update_mask: Optional[FieldMask] = None


class UpdateFeatureResponse(BaseModel):
    feature: Feature
