"""Inventory loading from local JSON files or S3 objects."""

import logging
from pathlib import Path

from impact_scanner.aws.s3 import S3Client, parse_s3_uri
from impact_scanner.config import AWSConfig
from impact_scanner.models.inventory import Inventory

logger = logging.getLogger(__name__)


def load_inventory(
    source: str | Path,
    aws_config: AWSConfig | None = None,
    s3_client: S3Client | None = None,
) -> Inventory:
    """Load and validate an inventory document.

    Args:
        source: Local path, or an s3://bucket/key URI
        aws_config: AWS settings used to build an S3 client when needed
        s3_client: Pre-built S3 client (takes precedence over aws_config)

    Returns:
        Validated Inventory

    Raises:
        FileNotFoundError: If a local path does not exist
        ClientError, BotoCoreError: If the S3 download fails
        pydantic.ValidationError: If the document is not a valid inventory
    """
    source_str = str(source)

    if source_str.startswith("s3://"):
        bucket, key = parse_s3_uri(source_str)
        if s3_client is None:
            aws_config = aws_config or AWSConfig()
            s3_client = S3Client(region=aws_config.region, endpoint_url=aws_config.endpoint_url)
        content = s3_client.read_object(bucket, key)
    else:
        path = Path(source_str)
        if not path.exists():
            msg = f"Inventory file not found: {path}"
            raise FileNotFoundError(msg)
        content = path.read_bytes()

    inventory = Inventory.model_validate_json(content)
    logger.info(f"Loaded inventory of {len(inventory.resources)} resources from {source_str}")
    return inventory
