import uuid
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field

from models.models import Feature, Point
from utils.constants import FULL_GEOHASH_PRECISION, GEOHASH_PRECISION, EntityKeys
from utils.geohash_utils import encode_e7


class FeatureEntity(BaseModel):
    """
    Persisted form of a feature in the RouteGuideFeatures table.

    `geo_hash` (partition key) is always derived from latitude/longitude and is
    never set on its own; `feature_id` (sort key) is a UUID assigned at load.
    """

    model_config = ConfigDict(populate_by_name=True)
    geo_hash: str = Field(alias=EntityKeys.PARTITION_KEY.value)
    feature_id: str = Field(alias=EntityKeys.SORT_KEY.value)
    name: str = ""
    latitude: int
    longitude: int
    full_geo_hash: str = Field(default="", alias=EntityKeys.FULL_GEOHASH.value)

    @classmethod
    def from_feature(
        cls,
        feature: Feature,
        geohash_precision: int = GEOHASH_PRECISION,
        full_geohash_precision: int = FULL_GEOHASH_PRECISION,
        feature_id: str | None = None,
    ) -> "FeatureEntity":
        if feature.location is None:
            raise ValueError(f"Feature '{feature.name}' has no location")
        lat = feature.location.latitude
        lon = feature.location.longitude
        return cls(
            geo_hash=encode_e7(lat, lon, geohash_precision),
            feature_id=feature_id or str(uuid.uuid4()),
            name=feature.name,
            latitude=lat,
            longitude=lon,
            full_geo_hash=encode_e7(lat, lon, full_geohash_precision),
        )

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "FeatureEntity":
        # DynamoDB hands numbers back as Decimal
        return cls(
            geo_hash=item[EntityKeys.PARTITION_KEY.value],
            feature_id=item[EntityKeys.SORT_KEY.value],
            name=item.get(EntityKeys.NAME.value, ""),
            latitude=int(item[EntityKeys.LATITUDE.value]),
            longitude=int(item[EntityKeys.LONGITUDE.value]),
            full_geo_hash=item.get(EntityKeys.FULL_GEOHASH.value, ""),
        )

    def to_item(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def matches(self, point: Point) -> bool:
        return self.latitude == point.latitude and self.longitude == point.longitude

    def to_feature(self) -> Feature:
        return Feature(
            name=self.name,
            location=Point(latitude=self.latitude, longitude=self.longitude),
        )
