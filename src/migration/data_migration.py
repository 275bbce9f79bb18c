"""
One-time load of a route guide JSON database into the features table.

    route-guide-load load-features --source route_guide_db.json

Accepts either a bare list of features or an object with a "feature" list,
each entry shaped like {"name": ..., "location": {"latitude": ..., "longitude": ...}}.
Unnamed entries are skipped.
"""

import json
import logging
from pathlib import Path
from typing import Any, List

import typer

from clients.dynamodb_client import DynamoDbClient
from config.config import SETTINGS, validate_settings
from db.feature_repository import FeatureRepository
from di.container import Container
from exceptions.custom_exceptions import RouteGuideError
from models.models import Feature
from utils.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(pretty_exceptions_enable=False)


def load_features(source: Path) -> List[Feature]:
    payload: Any = json.loads(source.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("feature", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of features in {source}")
    return [Feature.model_validate(entry) for entry in payload]


def migrate(features: List[Feature], client: DynamoDbClient) -> int:
    repository = FeatureRepository(
        client,
        geohash_precision=SETTINGS.geohash_precision,
        full_geohash_precision=SETTINGS.full_geohash_precision,
    )
    return repository.put_features(features, batch_size=SETTINGS.batch_write_size)


@app.callback()
def main():
    """
    Route guide data tools.
    """


@app.command("load-features")
def load_features_command(
    source: Path = typer.Option(
        ..., "--source", "-s", exists=True, dir_okay=False, help="Feature JSON file."
    ),
):
    """
    Load named features from a JSON file into DynamoDB.
    """
    setup_logging(SETTINGS.log_level)
    validate_settings(SETTINGS)
    logger.info(f"Starting data migration from {source} to DynamoDB")
    try:
        features = load_features(source)
        logger.info(f"Loaded {len(features)} features from JSON")
        factory = Container().aws_client_factory()
        with DynamoDbClient(factory, SETTINGS.dynamodb_table_name) as client:
            written = migrate(features, client)
    except (OSError, ValueError, RouteGuideError) as exc:
        logger.error(f"Migration failed: {exc}")
        raise typer.Exit(code=1)
    logger.info(f"Migration completed successfully! ({written} features written)")
    typer.echo(f"Loaded {written} features into {SETTINGS.dynamodb_table_name}")


if __name__ == "__main__":
    app()
