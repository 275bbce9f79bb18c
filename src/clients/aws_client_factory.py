import logging
from abc import ABC, abstractmethod

import boto3
from botocore.client import Config

from utils.constants import DEFAULT_LOCAL_ENDPOINT, DEFAULT_REGION

logger = logging.getLogger(__name__)

_CLIENT_CONFIG = Config(connect_timeout=5, read_timeout=10)


class AwsClientFactory(ABC):
    """Produces configured AWS service handles for one environment."""

    @abstractmethod
    def create_dynamodb_resource(self):
        pass


class ProductionAwsClientFactory(AwsClientFactory):
    """Default credentials chain against the real regional endpoint."""

    def __init__(self, region: str = DEFAULT_REGION):
        self.region = region or DEFAULT_REGION

    def create_dynamodb_resource(self):
        logger.info(f"Creating production DynamoDB resource for region: {self.region}")
        session = boto3.session.Session(region_name=self.region)
        return session.resource("dynamodb", config=_CLIENT_CONFIG)


class LocalDevelopmentAwsClientFactory(AwsClientFactory):
    """DynamoDB Local or LocalStack, with static dummy credentials."""

    def __init__(
        self, endpoint: str = DEFAULT_LOCAL_ENDPOINT, region: str = DEFAULT_REGION
    ):
        self.endpoint = endpoint or DEFAULT_LOCAL_ENDPOINT
        self.region = region or DEFAULT_REGION

    def create_dynamodb_resource(self):
        logger.info(f"Creating local DynamoDB resource at endpoint: {self.endpoint}")
        return boto3.resource(
            "dynamodb",
            region_name=self.region,
            endpoint_url=self.endpoint,
            aws_access_key_id="dummy-key",
            aws_secret_access_key="dummy-secret",
            config=_CLIENT_CONFIG,
        )
