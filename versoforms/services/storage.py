import logging
from io import BytesIO
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from ..config import AWS_ACCESS_KEY, AWS_SECRET_KEY, S3_REGION, S3_BUCKET_NAME, S3_URL

logger = logging.getLogger(__name__)

class StorageError(Exception):
    pass

def detect_image_format(file_content: bytes) -> Optional[str]:
    """Return Pillow's format name ("JPEG", "PNG", ...) or None if the bytes are not an image."""
    try:
        with Image.open(BytesIO(file_content)) as image:
            image.verify()
            return image.format
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return None

class S3Storage:
    """Object storage for submission photos, backed by a single S3 bucket."""

    def __init__(self, client=None, bucket: str = S3_BUCKET_NAME, base_url: str = S3_URL):
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=AWS_ACCESS_KEY,
            aws_secret_access_key=AWS_SECRET_KEY,
            region_name=S3_REGION
        )
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")

    def upload(self, key: str, file_content: bytes, content_type: str) -> None:
        try:
            self.client.upload_fileobj(
                BytesIO(file_content),
                self.bucket,
                key,
                ExtraArgs={'ContentType': content_type}
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload {key}: {e}") from e
        logger.info("Uploaded %s to bucket %s", key, self.bucket)

    def get_public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"
