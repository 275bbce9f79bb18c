from unittest.mock import MagicMock

from models.models import Point, RouteSummary
from services.route_recorder import RecorderState, RouteRecorder


def _recorder(has_feature=True):
    repository = MagicMock()
    repository.has_feature.return_value = has_feature
    return RouteRecorder(repository), repository


def test_transitions_to_receiving_then_completed():
    recorder, _ = _recorder()
    assert recorder.state == RecorderState.OPEN
    recorder.on_next(Point(latitude=1, longitude=1))
    assert recorder.state == RecorderState.RECEIVING
    assert recorder.on_completed() == RouteSummary(point_count=1, feature_count=1)
    assert recorder.state == RecorderState.COMPLETED


def test_completed_emits_only_once():
    recorder, _ = _recorder()
    assert recorder.on_completed() is not None
    assert recorder.on_completed() is None


def test_points_after_completion_are_ignored():
    recorder, repository = _recorder()
    recorder.on_completed()
    recorder.on_next(Point())
    assert recorder.point_count == 0
    repository.has_feature.assert_not_called()


def test_cancel_discards_counts_and_summary():
    recorder, repository = _recorder(has_feature=False)
    recorder.on_next(Point())
    recorder.on_next(Point())
    recorder.on_error(RuntimeError("cancelled"))
    assert recorder.state == RecorderState.CANCELLED
    assert recorder.point_count == 0
    recorder.on_next(Point())
    assert repository.has_feature.call_count == 2
    assert recorder.on_completed() is None
