"""S3 operations for inventory download."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split an s3://bucket/key URI into bucket and key.

    Raises:
        ValueError: If the URI is not of the form s3://bucket/key
    """
    if not uri.startswith("s3://"):
        msg = f"Not an S3 URI: {uri}"
        raise ValueError(msg)

    bucket, _, key = uri[len("s3://") :].partition("/")
    if not bucket or not key:
        msg = f"S3 URI must include a bucket and a key: {uri}"
        raise ValueError(msg)
    return bucket, key


class S3Client:
    """Reads inventory documents from S3."""

    def __init__(self, region: str, endpoint_url: str | None = None):
        self.region = region
        client_kwargs: dict = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self.s3 = boto3.client("s3", **client_kwargs)

    def read_object(self, bucket: str, key: str) -> bytes:
        """Download an object's body.

        Raises:
            ClientError: If S3 rejects the request
            BotoCoreError: If no request could be made (e.g. missing credentials)
        """
        logger.info(f"Downloading inventory from s3://{bucket}/{key}")
        try:
            response = self.s3.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to download from S3: {e}")
            raise
        return response["Body"].read()
