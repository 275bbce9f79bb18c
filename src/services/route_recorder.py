import logging
from enum import Enum
from typing import Optional

from db.feature_repository import FeatureRepository
from models.models import Point, RouteSummary

logger = logging.getLogger(__name__)


class RecorderState(Enum):
    OPEN = "open"
    RECEIVING = "receiving"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATES = (RecorderState.COMPLETED, RecorderState.CANCELLED)


class RouteRecorder:
    """
    Per-call accumulator for a RecordRoute stream.

    OPEN -> RECEIVING -> COMPLETED | CANCELLED. Points arriving after a
    terminal state are dropped, and a cancelled call never yields a summary.
    """

    def __init__(self, repository: FeatureRepository):
        self.repository = repository
        self.state = RecorderState.OPEN
        self.point_count = 0
        self.feature_count = 0

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def on_next(self, point: Point) -> None:
        if self.done:
            logger.debug(f"Ignoring point after recordRoute {self.state.value}")
            return
        self.state = RecorderState.RECEIVING
        self.point_count += 1
        if self.repository.has_feature(point):
            self.feature_count += 1

    def on_error(self, error: BaseException) -> None:
        if self.done:
            return
        logger.warning(f"recordRoute cancelled: {error}")
        self.state = RecorderState.CANCELLED
        self.point_count = 0
        self.feature_count = 0

    def on_completed(self) -> Optional[RouteSummary]:
        if self.done:
            return None
        self.state = RecorderState.COMPLETED
        return RouteSummary(
            point_count=self.point_count, feature_count=self.feature_count
        )
