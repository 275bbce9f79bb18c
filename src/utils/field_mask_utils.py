import logging
from typing import Optional

from db.feature_entity import FeatureEntity
from models.models import Feature, FieldMask, Point
from utils.constants import LOCATION_PATHS, FieldPath

logger = logging.getLogger(__name__)


def _project_location(feature: Feature, path: str, current: Optional[Point]):
    source = feature.location
    if source is None:
        return current
    if path == FieldPath.LOCATION.value:
        return source
    base = current or Point()
    if path == FieldPath.LOCATION_LATITUDE.value:
        return base.model_copy(update={"latitude": source.latitude})
    return base.model_copy(update={"longitude": source.longitude})


def project(feature: Feature, mask: Optional[FieldMask]) -> Feature:
    """Read-side projection: keep only the fields named by the mask."""
    if mask is None or mask.is_empty:
        return feature
    name = ""
    location: Optional[Point] = None
    for path in mask.paths:
        if path == FieldPath.NAME.value:
            name = feature.name
        elif path in LOCATION_PATHS:
            location = _project_location(feature, path, location)
    return Feature(name=name, location=location)


def apply_mask(target: FeatureEntity, source: Feature, mask: FieldMask) -> None:
    """
    Write-side merge of `source` into the stored entity, in mask order.

    Fields not named by the mask are left untouched. Location paths are
    accepted but not applied since they would move the entity to another
    partition.
    """
    if mask is None or mask.is_empty:
        raise ValueError("apply_mask requires a non-empty field mask")
    for path in mask.paths:
        logger.info(f"Processing field mask path: {path}")
        if path == FieldPath.NAME.value:
            logger.info(f"Updating name from '{target.name}' to '{source.name}'")
            target.name = source.name
        elif path in LOCATION_PATHS:
            logger.warning(
                f"Location updates not supported (would change partition key): {path}"
            )
        else:
            logger.warning(f"Unknown field in mask: {path}")
