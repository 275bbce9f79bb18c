import logging
from typing import Iterable, Iterator, Optional

from clients.dynamodb_client import DynamoDbClient
from db.feature_entity import FeatureEntity
from exceptions.custom_exceptions import FeatureNotFoundError, InvalidArgumentError
from models.models import Feature, FieldMask, Point
from utils.constants import (
    DYNAMODB_BATCH_LIMIT,
    FULL_GEOHASH_PRECISION,
    GEOHASH_PRECISION,
)
from utils.field_mask_utils import apply_mask
from utils.geohash_utils import e7_to_degrees, encode_e7

logger = logging.getLogger(__name__)


class FeatureRepository:
    """
    Features stored in DynamoDB, partitioned by a coarse geohash.

    A lookup reads only the partition of the queried point and then matches
    coordinates exactly, so a feature just across a partition edge is never
    found for a neighbouring point.
    """

    def __init__(
        self,
        client: DynamoDbClient,
        geohash_precision: int = GEOHASH_PRECISION,
        full_geohash_precision: int = FULL_GEOHASH_PRECISION,
    ):
        self.client = client
        self.geohash_precision = geohash_precision
        self.full_geohash_precision = full_geohash_precision

    def partition_key(self, point: Point) -> str:
        try:
            return encode_e7(point.latitude, point.longitude, self.geohash_precision)
        except ValueError as exc:
            raise InvalidArgumentError(
                str(exc),
                {"latitude": point.latitude, "longitude": point.longitude},
            ) from exc

    def _find_entity(self, point: Point) -> Optional[FeatureEntity]:
        geo_hash = self.partition_key(point)
        logger.info(
            f"Looking up feature at ({e7_to_degrees(point.latitude)}, "
            f"{e7_to_degrees(point.longitude)}) with geohash: {geo_hash}"
        )
        for item in self.client.query_partition(geo_hash):
            entity = FeatureEntity.from_item(item)
            if entity.matches(point):
                return entity
        return None

    def get_feature(self, point: Point) -> Feature:
        entity = self._find_entity(point)
        if entity is None:
            logger.info("No feature found at this location")
            return Feature(name="", location=point)
        logger.info(f"Found feature: {entity.name}")
        return entity.to_feature()

    def has_feature(self, point: Point) -> bool:
        return self.get_feature(point).exists

    def update_feature(self, feature: Feature, mask: FieldMask) -> Feature:
        if feature.location is None:
            raise ValueError("Cannot update feature without location")
        logger.info(f"FieldMask paths: {mask.paths}")

        entity = self._find_entity(feature.location)
        if entity is None:
            logger.warning("Feature not found at this location - cannot update")
            raise FeatureNotFoundError(
                "Feature not found at specified location",
                {
                    "latitude": feature.location.latitude,
                    "longitude": feature.location.longitude,
                },
            )
        logger.info(f"Found existing feature: {entity.name}")

        apply_mask(entity, feature, mask)

        logger.info(f"Saving updated entity: {entity}")
        self.client.put_item(entity.to_item())
        return entity.to_feature()

    def list_features(self) -> Iterator[Feature]:
        for item in self.client.scan_items():
            yield FeatureEntity.from_item(item).to_feature()

    def put_features(
        self, features: Iterable[Feature], batch_size: int = DYNAMODB_BATCH_LIMIT
    ) -> int:
        entities = []
        skipped = 0
        for feature in features:
            # Unnamed features are plain coordinates with nothing to look up
            if not feature.exists or feature.location is None:
                skipped += 1
                continue
            entities.append(
                FeatureEntity.from_feature(
                    feature, self.geohash_precision, self.full_geohash_precision
                )
            )
        logger.info(
            f"Converting {len(entities)} named features to entities "
            f"(skipped {skipped} unnamed locations)"
        )
        return self.client.batch_put_items(
            [entity.to_item() for entity in entities], batch_size=batch_size
        )
