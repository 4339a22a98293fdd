# bulkbridge/infra/s3_client.py
import boto3
from botocore.config import Config

from bulkbridge.core.logging_config import logger
from bulkbridge.core.settings import Settings


def build_s3_client(settings: Settings):
    """S3 client voor één app; create_app bewaart hem op app.state."""
    # Geen SDK-retries: een mislukte store-call is terminal voor de request.
    cfg = Config(
        region_name=settings.AWS_REGION,
        signature_version="s3v4",
        retries={"total_max_attempts": 1, "mode": "standard"},
        connect_timeout=3,
        read_timeout=10,
    )
    client = boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
        config=cfg,
    )
    logger.bind(
        region=settings.AWS_REGION,
        bucket=settings.AWS_S3_BUCKET_NAME,
        endpoint=settings.AWS_S3_ENDPOINT_URL,
    ).info("s3_client_initialized")
    return client
