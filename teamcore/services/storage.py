"""
S3 object storage.

Copies remote files into the upload bucket and builds their public URLs.
Works with AWS S3 and S3-compatible services (MinIO, fake-s3, LocalStack).

Configuration via environment variables:
- AWS_S3_UPLOAD_BUCKET_URL=https://s3.amazonaws.com
- AWS_S3_UPLOAD_BUCKET_NAME=my-bucket
- AWS_REGION=us-east-1
- AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (optional, uses IAM roles if empty)
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

import boto3
import httpx
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from teamcore.core.exceptions import StorageError
from teamcore.core.settings import settings

logger = logging.getLogger("Teamcore.Storage")


class S3Storage:
    """
    Upload bucket wrapper. The boto3 client and the httpx client can be injected,
    otherwise they are built from settings on first use.
    """

    def __init__(
        self,
        bucket_url: Optional[str] = None,
        bucket_name: Optional[str] = None,
        client: Any = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        self.bucket_url = bucket_url or settings.AWS_S3_UPLOAD_BUCKET_URL
        self.bucket_name = bucket_name or settings.AWS_S3_UPLOAD_BUCKET_NAME
        self.timeout = timeout if timeout is not None else settings.AVATAR_FETCH_TIMEOUT
        self._client = client
        self._http_client = http_client

    def _get_client(self):
        if self._client is not None:
            return self._client

        client_kwargs: Dict[str, Any] = {
            "service_name": "s3",
            "region_name": settings.AWS_REGION,
            "endpoint_url": self.bucket_url,
            "config": Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        }
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            client_kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            client_kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY

        self._client = boto3.client(**client_kwargs)
        logger.info(f"S3 client initialized for bucket: {self.bucket_name}")
        return self._client

    def public_endpoint(self) -> str:
        """Base URL every public object in the bucket lives under."""
        # fake-s3 advertises itself as s3: in docker setups
        host = self.bucket_url.replace("s3:", "localhost:").rstrip("/")
        return f"{host}/{self.bucket_name}"

    def fetch(self, source_url: str) -> httpx.Response:
        try:
            if self._http_client is not None:
                response = self._http_client.get(source_url, timeout=self.timeout, follow_redirects=True)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = client.get(source_url)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to fetch {source_url}: {e}") from e

    def upload_from_url(self, source_url: str, key: str, acl: str = "private") -> Optional[str]:
        """
        Download `source_url` and store it under `key`.

        Returns:
            Public URL of the stored object.

        Raises:
            StorageError: if the fetch or the upload fails
        """
        response = self.fetch(source_url)
        content_type = response.headers.get("content-type", "application/octet-stream")
        try:
            self._get_client().put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=response.content,
                ContentType=content_type,
                ContentLength=len(response.content),
                ACL=acl,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload {key}: {e}") from e

        logger.info(f"Uploaded {source_url} to s3://{self.bucket_name}/{key}")
        return f"{self.public_endpoint()}/{key}"


@lru_cache()
def get_storage() -> S3Storage:
    return S3Storage()
