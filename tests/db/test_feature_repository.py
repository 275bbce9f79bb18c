import pytest
from pydantic import ValidationError

from conftest import BERKSHIRE, EMPTY_SPOT, PATRIOTS_PATH, FakeDynamoDbClient
from db.feature_repository import FeatureRepository
from exceptions.custom_exceptions import (
    FeatureNotFoundError,
    InvalidArgumentError,
    StoreClosedError,
)
from models.models import Feature, FieldMask, Point


def test_get_feature_on_empty_store_returns_unnamed_feature():
    repository = FeatureRepository(FakeDynamoDbClient())
    for point in (BERKSHIRE, EMPTY_SPOT, Point()):
        feature = repository.get_feature(point)
        assert feature.name == ""
        assert feature.location == point


def test_get_feature_exact_match(repository):
    feature = repository.get_feature(BERKSHIRE)
    assert feature.name == "Berkshire Valley Management Area Trail"
    assert feature.location == BERKSHIRE


def test_get_feature_same_partition_different_coordinates(repository):
    neighbour = Point(latitude=BERKSHIRE.latitude + 1, longitude=BERKSHIRE.longitude)
    assert repository.partition_key(neighbour) == repository.partition_key(BERKSHIRE)
    feature = repository.get_feature(neighbour)
    assert feature.name == ""
    assert feature.location == neighbour


def test_get_feature_only_reads_the_point_partition():
    item = {
        "geoHash": "zzzzzz",
        "featureId": "misfiled",
        "name": "Misfiled",
        "latitude": BERKSHIRE.latitude,
        "longitude": BERKSHIRE.longitude,
        "fullGeoHash": "",
    }
    repository = FeatureRepository(FakeDynamoDbClient([item]))
    assert repository.get_feature(BERKSHIRE).name == ""


def test_has_feature(repository):
    assert repository.has_feature(BERKSHIRE)
    assert repository.has_feature(PATRIOTS_PATH)
    assert not repository.has_feature(EMPTY_SPOT)


def test_update_feature_name(repository, fake_client):
    updated = repository.update_feature(
        Feature(name="Renamed Trail", location=BERKSHIRE), FieldMask(paths=["name"])
    )
    assert updated == Feature(name="Renamed Trail", location=BERKSHIRE)
    assert repository.get_feature(BERKSHIRE).name == "Renamed Trail"
    assert len(fake_client.put_calls) == 1
    assert fake_client.put_calls[0]["featureId"] == "f-1"


def test_update_feature_ignores_location_paths(repository, fake_client):
    updated = repository.update_feature(
        Feature(name="Should Not Apply", location=BERKSHIRE),
        FieldMask(paths=["location.latitude"]),
    )
    assert updated.name == "Berkshire Valley Management Area Trail"
    assert updated.location == BERKSHIRE
    stored = fake_client.put_calls[0]
    assert stored["latitude"] == BERKSHIRE.latitude
    assert stored["geoHash"] == repository.partition_key(BERKSHIRE)


def test_update_feature_not_found(repository, fake_client):
    with pytest.raises(FeatureNotFoundError):
        repository.update_feature(
            Feature(name="Ghost", location=EMPTY_SPOT), FieldMask(paths=["name"])
        )
    assert fake_client.put_calls == []


def test_update_feature_requires_location(repository):
    with pytest.raises(ValueError):
        repository.update_feature(Feature(name="X"), FieldMask(paths=["name"]))


def test_list_features_in_store_order(repository):
    names = [feature.name for feature in repository.list_features()]
    assert names == [
        "Berkshire Valley Management Area Trail",
        "Patriots Path, Mendham, NJ 07945, USA",
    ]


def test_put_features_skips_unnamed_and_makes_them_queryable():
    client = FakeDynamoDbClient()
    repository = FeatureRepository(client)
    written = repository.put_features(
        [
            Feature(name="Trail", location=BERKSHIRE),
            Feature(name="", location=EMPTY_SPOT),
            Feature(name="Path", location=PATRIOTS_PATH),
        ],
        batch_size=10,
    )
    assert written == 2
    assert client.batch_sizes == [10]
    assert repository.get_feature(BERKSHIRE).name == "Trail"
    assert repository.get_feature(PATRIOTS_PATH).name == "Path"
    assert not repository.has_feature(EMPTY_SPOT)


def test_operations_fail_after_close(repository, fake_client):
    fake_client.close()
    with pytest.raises(StoreClosedError):
        repository.get_feature(BERKSHIRE)


@pytest.mark.parametrize(
    "latitude, longitude",
    [(900000001, 0), (-900000001, 0), (0, 1800000001), (0, -1800000001)],
)
def test_point_rejects_coordinates_outside_degree_range(latitude, longitude):
    with pytest.raises(ValidationError):
        Point(latitude=latitude, longitude=longitude)


def test_partition_key_rejects_unvalidated_out_of_range_point(repository):
    with pytest.raises(InvalidArgumentError) as exc_info:
        repository.partition_key(Point.model_construct(latitude=950000000, longitude=0))
    assert exc_info.value.context == {"latitude": 950000000, "longitude": 0}
