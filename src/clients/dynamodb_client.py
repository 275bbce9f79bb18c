import logging
import time
from typing import Any, Dict, Iterator, List

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from clients.aws_client_factory import AwsClientFactory
from exceptions.custom_exceptions import StoreClosedError, UnavailableError
from utils.constants import DEFAULT_TABLE_NAME, DYNAMODB_BATCH_LIMIT, EntityKeys

logger = logging.getLogger(__name__)

MAX_UNPROCESSED_ATTEMPTS = 5


class DynamoDbClient:
    """
    Owned handle on the features table.

    Built once from a factory and closed once; every operation after close
    raises StoreClosedError instead of reconnecting.
    """

    def __init__(
        self, factory: AwsClientFactory, table_name: str = DEFAULT_TABLE_NAME
    ):
        self.table_name = table_name
        self._resource = factory.create_dynamodb_resource()
        self._table = self._resource.Table(table_name)
        self._closed = False
        logger.info(f"DynamoDB client ready for table: {table_name}")

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self):
        if self._closed:
            raise StoreClosedError(
                "DynamoDB client has been closed", {"table": self.table_name}
            )

    def _call(self, target: Any, operation: str, **kwargs) -> Dict[str, Any]:
        self._ensure_open()
        try:
            return getattr(target, operation)(**kwargs)
        except (BotoCoreError, ClientError) as exc:
            logger.error(f"DynamoDB {operation} failed on {self.table_name}: {exc}")
            raise UnavailableError(
                f"Backing store unavailable during {operation}",
                {"table": self.table_name},
            ) from exc

    def _paginate(self, operation: str, **kwargs) -> Iterator[Dict[str, Any]]:
        while True:
            response = self._call(self._table, operation, **kwargs)
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def query_partition(self, partition_key: str) -> Iterator[Dict[str, Any]]:
        return self._paginate(
            "query",
            KeyConditionExpression=Key(EntityKeys.PARTITION_KEY.value).eq(
                partition_key
            ),
        )

    def scan_items(self) -> Iterator[Dict[str, Any]]:
        return self._paginate("scan")

    def put_item(self, item: Dict[str, Any]) -> None:
        self._call(self._table, "put_item", Item=item)

    def batch_put_items(
        self, items: List[Dict[str, Any]], batch_size: int = DYNAMODB_BATCH_LIMIT
    ) -> int:
        batch_size = min(batch_size, DYNAMODB_BATCH_LIMIT)
        total_batches = (len(items) + batch_size - 1) // batch_size
        for batch_number, i in enumerate(range(0, len(items), batch_size), start=1):
            batch = items[i : i + batch_size]
            logger.info(
                f"Writing batch {batch_number}/{total_batches} ({len(batch)} items)"
            )
            self._write_batch(batch)
        logger.info(f"Wrote {len(items)} items in {total_batches} batches")
        return len(items)

    def _write_batch(self, batch: List[Dict[str, Any]]) -> None:
        request_items = {
            self.table_name: [{"PutRequest": {"Item": item}} for item in batch]
        }
        for attempt in range(1, MAX_UNPROCESSED_ATTEMPTS + 1):
            response = self._call(
                self._resource, "batch_write_item", RequestItems=request_items
            )
            request_items = response.get("UnprocessedItems") or {}
            if not request_items:
                return
            pending = len(request_items.get(self.table_name, []))
            logger.warning(
                f"{pending} unprocessed items, resubmitting (attempt {attempt})"
            )
            time.sleep(0.1 * 2**attempt)  # Avoid throughput throttling
        raise UnavailableError(
            "Batch write left unprocessed items",
            {"table": self.table_name, "attempts": MAX_UNPROCESSED_ATTEMPTS},
        )

    def close(self) -> None:
        if self._closed:
            return
        logger.info(f"Closing DynamoDB client for table: {self.table_name}")
        self._resource.meta.client.close()
        self._closed = True

    def __enter__(self) -> "DynamoDbClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def init_dynamodb_client(
    factory: AwsClientFactory, table_name: str = DEFAULT_TABLE_NAME
) -> Iterator[DynamoDbClient]:
    client = DynamoDbClient(factory, table_name)
    try:
        yield client
    finally:
        client.close()
