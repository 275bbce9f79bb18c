import logging
from typing import Iterable, Iterator, Optional

from db.feature_repository import FeatureRepository
from exceptions.custom_exceptions import (
    FeatureNotFoundError,
    InvalidArgumentError,
    StreamCancelledError,
)
from models.models import (
    Feature,
    GetFeatureRequest,
    Point,
    Rectangle,
    RouteSummary,
    UpdateFeatureRequest,
    UpdateFeatureResponse,
)
from server.call_context import CallContext
from services.route_recorder import RouteRecorder
from utils.field_mask_utils import project

logger = logging.getLogger(__name__)


def in_rectangle(feature: Feature, rectangle: Rectangle) -> bool:
    if feature.location is None:
        return False
    lo, hi = rectangle.lo, rectangle.hi
    lat = feature.location.latitude
    lon = feature.location.longitude
    return (
        min(lo.latitude, hi.latitude) <= lat <= max(lo.latitude, hi.latitude)
        and min(lo.longitude, hi.longitude) <= lon <= max(lo.longitude, hi.longitude)
    )


class RouteGuideService:
    """Handlers for the RouteGuide methods, backed by a FeatureRepository."""

    def __init__(self, repository: FeatureRepository):
        self.repository = repository

    def get_feature(self, request: GetFeatureRequest) -> Feature:
        feature = self.repository.get_feature(request.point)
        mask = request.field_mask
        if mask is not None and not mask.is_empty:
            logger.info(f"Field mask provided with paths: {mask.paths}")
            masked_feature = project(feature, mask)
            logger.info(f"Returning masked feature: {masked_feature}")
            return masked_feature
        logger.info(f"No field mask provided, returning full feature: {feature}")
        return feature

    def list_features(self, rectangle: Rectangle) -> Iterator[Feature]:
        for feature in self.repository.list_features():
            if in_rectangle(feature, rectangle):
                yield feature

    def record_route(
        self, points: Iterable[Point], context: Optional[CallContext] = None
    ) -> Optional[RouteSummary]:
        """
        Count points and the features found at them, in arrival order.

        Returns None when the sender cancels or the stream fails part way;
        the partial counts are dropped.
        """
        recorder = RouteRecorder(self.repository)
        try:
            for point in points:
                if context is not None and not context.is_active():
                    raise StreamCancelledError("recordRoute call cancelled by client")
                recorder.on_next(point)
            if context is not None and not context.is_active():
                raise StreamCancelledError("recordRoute call cancelled by client")
        except StreamCancelledError as exc:
            recorder.on_error(exc)
            return None
        summary = recorder.on_completed()
        logger.info(f"recordRoute completed: {summary}")
        return summary

    def update_feature(self, request: UpdateFeatureRequest) -> UpdateFeatureResponse:
        logger.info("UpdateFeature called")
        if request.feature is None:
            logger.warning("UpdateFeature request missing feature")
            raise InvalidArgumentError("Feature is required")
        if request.feature.location is None:
            logger.warning("UpdateFeature request feature has no location")
            raise InvalidArgumentError("Feature location is required")
        if request.update_mask is None or request.update_mask.is_empty:
            logger.warning("UpdateFeature request missing or empty update_mask")
            raise InvalidArgumentError("update_mask is required and must not be empty")

        feature = request.feature
        logger.info(
            f"Updating feature at location ({feature.location.latitude}, "
            f"{feature.location.longitude})"
        )
        logger.info(f"Update mask paths: {request.update_mask.paths}")
        try:
            updated_feature = self.repository.update_feature(
                feature, request.update_mask
            )
        except FeatureNotFoundError as exc:
            # Not distinguished from validation failures for caller compatibility
            logger.warning("Feature not found or update failed")
            raise InvalidArgumentError(
                "Feature not found at specified location", exc.context
            ) from exc

        logger.info(f"Successfully updated feature: {updated_feature.name}")
        return UpdateFeatureResponse(feature=updated_feature)
