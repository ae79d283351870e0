"""S3 storage adapter."""

from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import NotFoundError, RemoteStoreError
from ..core.models import PutStatus

if TYPE_CHECKING:
    from ..core.config import RemoteProfile

CONTENT_TYPE = "application/octet-stream"
_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


def _is_missing(error: ClientError) -> bool:
    return str(error.response.get("Error", {}).get("Code", "")) in _MISSING_CODES


class S3StorageAdapter:
    """S3 implementation of StoragePort.

    Keys are fingerprints used verbatim. The boto3 client is shared by all
    sync workers; boto3 clients are safe to use across threads.
    """

    def __init__(self, bucket: str, client: Any | None = None):
        self.bucket = bucket
        self.client = client if client is not None else boto3.client("s3")

    @classmethod
    def from_profile(cls, profile: "RemoteProfile") -> "S3StorageAdapter":
        """Build an adapter with credentials from a config profile."""
        client = boto3.client(
            "s3",
            aws_access_key_id=profile.access_key,
            aws_secret_access_key=profile.secret_key,
            region_name=profile.region,
            endpoint_url=profile.endpoint_url,
        )
        return cls(profile.bucket, client)

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_missing(e):
                return False
            raise RemoteStoreError(f"Failed to check s3://{self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise RemoteStoreError(f"Failed to check s3://{self.bucket}/{key}: {e}") from e
        return True

    def put_if_absent(self, key: str, data: bytes) -> PutStatus:
        """Upload unless present.

        The existence check and the write are not atomic. A concurrent writer
        can slip in between, which only costs a duplicate upload of the same
        bytes under the same key.
        """
        if self.exists(key):
            return PutStatus.EXISTS
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=CONTENT_TYPE,
                ACL="private",
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteStoreError(f"Failed to upload s3://{self.bucket}/{key}: {e}") from e
        return PutStatus.UPLOADED

    def get(self, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                return bytes(body.read())
            finally:
                body.close()
        except ClientError as e:
            if _is_missing(e):
                raise NotFoundError(f"Object not found: s3://{self.bucket}/{key}") from e
            raise RemoteStoreError(f"Failed to download s3://{self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise RemoteStoreError(f"Failed to download s3://{self.bucket}/{key}: {e}") from e
