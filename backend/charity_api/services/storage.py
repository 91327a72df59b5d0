"""Media library object storage on S3 (or MinIO in development).

Objects live under ``media/<project id>/`` or ``media/library/`` and their keys
are minted here, never taken from the client. Browsers talk to the bucket
directly through short-lived signed URLs; this service only signs them.
"""

import logging
import uuid
from functools import lru_cache
from urllib.parse import quote, urlsplit, urlunsplit

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from charity_api.core.config import settings

logger = logging.getLogger(__name__)

URL_TTL_SECONDS = 15 * 60
MAX_UPLOAD_SIZE = 10 * 1024 * 1024

ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/webp", "image/gif", "video/mp4"}
)

LIBRARY_FOLDER = "library"


@lru_cache(maxsize=1)
def _bucket_client():
    # MinIO only understands path-style addressing
    path_style = {"s3": {"addressing_style": "path"}} if settings.S3_ENDPOINT_URL else {}
    credentials = {}
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        credentials = {
            "aws_access_key_id": settings.AWS_ACCESS_KEY_ID,
            "aws_secret_access_key": settings.AWS_SECRET_ACCESS_KEY,
        }
    return boto3.client(
        "s3",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.S3_ENDPOINT_URL,
        config=Config(signature_version="s3v4", **path_style),
        **credentials,
    )


def _signed(operation: str, key: str, **params) -> str:
    url = _bucket_client().generate_presigned_url(
        operation,
        Params={"Bucket": settings.S3_BUCKET, "Key": key, **params},
        ExpiresIn=URL_TTL_SECONDS,
    )
    if not settings.S3_PUBLIC_ENDPOINT:
        return url
    # Signed against the internal endpoint; hand browsers the public host instead
    public = urlsplit(settings.S3_PUBLIC_ENDPOINT)
    return urlunsplit(urlsplit(url)._replace(scheme=public.scheme, netloc=public.netloc))


def media_key(project_id: uuid.UUID | None, file_name: str) -> str:
    """``media/<project id | library>/<uuid>-<file name with spaces as _>``."""
    folder = str(project_id) if project_id else LIBRARY_FOLDER
    name = quote(file_name.strip().replace(" ", "_"), safe="._-")
    return f"media/{folder}/{uuid.uuid4()}-{name}"


def upload_url(key: str, content_type: str) -> str:
    """Signed PUT; the browser must send the same Content-Type."""
    return _signed("put_object", key, ContentType=content_type)


def download_url(key: str) -> str:
    return _signed("get_object", key)


def discard(key: str) -> None:
    """Remove an object once its row is gone. A storage failure leaves an orphan and is logged."""
    try:
        _bucket_client().delete_object(Bucket=settings.S3_BUCKET, Key=key)
    except (BotoCoreError, ClientError):
        logger.warning("Could not remove %s from %s", key, settings.S3_BUCKET, exc_info=True)
