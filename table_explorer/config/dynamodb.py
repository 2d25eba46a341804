"""
DynamoDB Connection Module

Builds the boto3 session and DynamoDB resource used by the table store
gateway. Credentials resolve in this order: explicit keys from settings, a
named shared-credentials profile, then the default boto3 credential chain.
"""

import logging
import boto3
from botocore.config import Config
from table_explorer.config.settings import settings

logger = logging.getLogger("table_explorer")

# Silence per-request botocore debug chatter unless explicitly enabled
logging.getLogger('botocore').setLevel(logging.WARNING)
logging.getLogger('boto3').setLevel(logging.WARNING)
logging.getLogger('urllib3').setLevel(logging.WARNING)

# Failures surface to the caller; botocore's own retry loop stays off
BOTO_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


def create_session() -> boto3.Session:
    """Create a boto3 session from settings."""
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        logger.info(f"DynamoDB: using explicit credentials (region={settings.AWS_REGION})")
        return boto3.Session(
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            aws_session_token=settings.AWS_SESSION_TOKEN,
            region_name=settings.AWS_REGION,
        )
    if settings.AWS_PROFILE:
        logger.info(f"DynamoDB: using profile '{settings.AWS_PROFILE}' (region={settings.AWS_REGION})")
        return boto3.Session(profile_name=settings.AWS_PROFILE, region_name=settings.AWS_REGION)

    logger.info(f"DynamoDB: using default credential chain (region={settings.AWS_REGION})")
    return boto3.Session(region_name=settings.AWS_REGION)


def create_dynamodb_resource(session: boto3.Session = None):
    """Create the DynamoDB service resource (high-level, native Python types)."""
    session = session or create_session()
    kwargs = {"config": BOTO_CONFIG}
    if settings.DYNAMODB_ENDPOINT_URL:
        kwargs["endpoint_url"] = settings.DYNAMODB_ENDPOINT_URL
        logger.info(f"DynamoDB: endpoint override {settings.DYNAMODB_ENDPOINT_URL}")
    return session.resource("dynamodb", **kwargs)
