import pytest
from typing import Any, Dict, List

from db.feature_entity import FeatureEntity
from db.feature_repository import FeatureRepository
from exceptions.custom_exceptions import StoreClosedError
from models.models import Feature, Point
from services.route_guide_service import RouteGuideService

# Well-known route guide features
BERKSHIRE = Point(latitude=409146138, longitude=-746188906)
PATRIOTS_PATH = Point(latitude=407838351, longitude=-746143763)
EMPTY_SPOT = Point(latitude=400000000, longitude=-750000000)


class FakeDynamoDbClient:
    """In-memory stand-in for DynamoDbClient keyed by (geoHash, featureId)."""

    def __init__(self, items: List[Dict[str, Any]] | None = None):
        self.items: List[Dict[str, Any]] = [dict(item) for item in items or []]
        self.put_calls: List[Dict[str, Any]] = []
        self.batch_sizes: List[int] = []
        self.closed = False

    def _ensure_open(self):
        if self.closed:
            raise StoreClosedError("closed")

    def _upsert(self, item: Dict[str, Any]):
        for idx, existing in enumerate(self.items):
            if (existing["geoHash"], existing["featureId"]) == (
                item["geoHash"],
                item["featureId"],
            ):
                self.items[idx] = dict(item)
                return
        self.items.append(dict(item))

    def query_partition(self, partition_key: str):
        self._ensure_open()
        return iter(
            [dict(item) for item in self.items if item["geoHash"] == partition_key]
        )

    def scan_items(self):
        self._ensure_open()
        return iter([dict(item) for item in self.items])

    def put_item(self, item: Dict[str, Any]) -> None:
        self._ensure_open()
        self.put_calls.append(dict(item))
        self._upsert(item)

    def batch_put_items(self, items: List[Dict[str, Any]], batch_size: int = 25):
        self._ensure_open()
        self.batch_sizes.append(batch_size)
        for item in items:
            self._upsert(item)
        return len(items)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def make_item(name: str, point: Point, feature_id: str | None = None) -> Dict:
    feature = Feature(name=name, location=point)
    return FeatureEntity.from_feature(feature, feature_id=feature_id).to_item()


@pytest.fixture
def fake_client():
    return FakeDynamoDbClient(
        [
            make_item("Berkshire Valley Management Area Trail", BERKSHIRE, "f-1"),
            make_item("Patriots Path, Mendham, NJ 07945, USA", PATRIOTS_PATH, "f-2"),
        ]
    )


@pytest.fixture
def repository(fake_client):
    return FeatureRepository(fake_client)


@pytest.fixture
def service(repository):
    return RouteGuideService(repository)
