from enum import Enum

E7_SCALE = 10_000_000
GEOHASH_PRECISION = 6
FULL_GEOHASH_PRECISION = 8
DYNAMODB_BATCH_LIMIT = 25
DEFAULT_TABLE_NAME = "RouteGuideFeatures"
DEFAULT_REGION = "us-east-1"
DEFAULT_LOCAL_ENDPOINT = "http://localhost:8000"
DEFAULT_SERVER_PORT = 8980


class FieldPath(Enum):
    NAME = "name"
    LOCATION = "location"
    LOCATION_LATITUDE = "location.latitude"
    LOCATION_LONGITUDE = "location.longitude"


LOCATION_PATHS = {
    FieldPath.LOCATION.value,
    FieldPath.LOCATION_LATITUDE.value,
    FieldPath.LOCATION_LONGITUDE.value,
}


class EntityKeys(Enum):
    PARTITION_KEY = "geoHash"
    SORT_KEY = "featureId"
    NAME = "name"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    FULL_GEOHASH = "fullGeoHash"


class AppEnv(Enum):
    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class RpcMethod(Enum):
    GET_FEATURE = "GetFeature"
    LIST_FEATURES = "ListFeatures"
    RECORD_ROUTE = "RecordRoute"
    UPDATE_FEATURE = "UpdateFeature"


class Headers(Enum):
    CUSTOM_SERVER_HEADER_KEY = "custom_server_header_key"
    CUSTOM_SERVER_HEADER_VALUE = "customRespondValue"


# (percentile upper bound, delay in ms)
LATENCY_TIERS = [
    (1, 10_000),
    (5, 5_000),
    (10, 2_000),
]
