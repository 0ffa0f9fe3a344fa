"""
Amazon S3 Document Store

Stores each document as an object in a bucket. Object storage cannot expire
individual keys, so a configured expiration is accepted but not applied.
"""

import logging
from typing import Any, Optional

import anyio
from botocore.exceptions import BotoCoreError, ClientError

from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


class S3DocumentStore(DocumentStore):
    """
    Amazon S3 Document Store

    boto3 is blocking, so every call runs in a worker thread. Writing an
    existing key overwrites the object.
    """

    def __init__(self, client: Any, bucket: str, expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            client: boto3 S3 client
            bucket: Target bucket name
            expire: Time to live in seconds (not enforced)
        """
        super().__init__(expire)
        self.client = client
        self.bucket = bucket

    def _warn_expiration(self, skip_expire: bool) -> None:
        if self.expire and not skip_expire:
            logger.warning("Amazon S3 store cannot set expirations on keys")

    async def connect(self) -> None:
        """Verify the bucket exists and is reachable"""
        await anyio.to_thread.run_sync(lambda: self.client.head_bucket(Bucket=self.bucket))
        logger.info(f"S3 bucket reachable: {self.bucket}")

    async def close(self) -> None:
        self.client.close()

    def _get_object(self, key: str) -> Optional[str]:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in MISSING_OBJECT_CODES:
                return None
            raise
        return response["Body"].read().decode("utf-8")

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        try:
            data = await anyio.to_thread.run_sync(self._get_object, key)
        except (BotoCoreError, ClientError, UnicodeDecodeError):
            logger.error(f"Error retrieving from Amazon S3: {key}", exc_info=True)
            return None

        if data is not None:
            self._warn_expiration(skip_expire)
        return data

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        def put() -> None:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data.encode("utf-8"),
                ContentType="text/plain",
            )

        try:
            await anyio.to_thread.run_sync(put)
        except (BotoCoreError, ClientError):
            logger.error(f"Error saving to Amazon S3: {key}", exc_info=True)
            return False

        self._warn_expiration(skip_expire)
        return True
