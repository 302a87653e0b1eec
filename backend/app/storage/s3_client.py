"""
S3-compatible storage client.

Uses boto3 with the S3 API. Works with any S3-compatible service:
Supabase Storage (S3 gateway), Cloudflare R2, MinIO or AWS S3.

The credentials used here are privileged (they can create buckets and
sign URLs), so this client only ever runs server-side. Browsers get
signed or public URLs, never keys.
"""
import json
import logging
from typing import List, Optional
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.errors import BucketAlreadyExistsError, RemoteError, StorageNotConfiguredError
from app.models.bucket import Bucket, BucketVisibility
from app.models.media import StorageObject
from app.storage.base import StorageClient

logger = logging.getLogger(__name__)

# S3 error codes meaning "this bucket name is taken"
BUCKET_EXISTS_CODES = {"BucketAlreadyExists", "BucketAlreadyOwnedByYou"}

# Tags used to remember console policies on a bucket
VISIBILITY_TAG = "visibility"
SIZE_LIMIT_TAG = "file-size-limit"


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        err = error.response.get("Error", {})
        return err.get("Message") or err.get("Code") or str(error)
    return str(error)


def _error_code(error: Exception) -> Optional[str]:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


class S3StorageClient(StorageClient):
    """
    StorageClient backed by boto3.

    Fails gracefully if not configured: construction succeeds, every
    operation raises StorageNotConfiguredError.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        access_key: Optional[str],
        secret_key: Optional[str],
        region: str = "auto",
        public_url: Optional[str] = None,
    ):
        self._client = None
        self._endpoint = endpoint.rstrip("/") if endpoint else None
        self._public_url = public_url.rstrip("/") if public_url else None
        self._region = region

        if not all([endpoint, access_key, secret_key]):
            logger.warning(
                "Storage not configured. "
                "Set STORAGE_ENDPOINT, STORAGE_ACCESS_KEY, and STORAGE_SECRET_KEY."
            )
            return

        # signature_version='s3v4' and path-style addressing work across providers
        self._client = boto3.client(
            's3',
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'}
            )
        )
        logger.info(f"Storage client initialized for endpoint: {self._endpoint}")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def _require_client(self):
        if not self.is_configured:
            raise StorageNotConfiguredError("Storage service not configured")
        return self._client

    def list_buckets(self) -> List[Bucket]:
        client = self._require_client()
        try:
            response = client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list buckets: {e}")
            raise RemoteError(_error_message(e), {"operation": "list_buckets"}) from e

        return [
            Bucket(name=entry["Name"], visibility=self._bucket_visibility(entry["Name"]))
            for entry in response.get("Buckets", [])
        ]

    def _bucket_visibility(self, name: str) -> BucketVisibility:
        """Read the visibility tag; untagged or untaggable buckets count as private."""
        try:
            response = self._client.get_bucket_tagging(Bucket=name)
        except (ClientError, BotoCoreError):
            return BucketVisibility.PRIVATE

        for tag in response.get("TagSet", []):
            if tag.get("Key") == VISIBILITY_TAG and tag.get("Value") == BucketVisibility.PUBLIC.value:
                return BucketVisibility.PUBLIC
        return BucketVisibility.PRIVATE

    def create_bucket(self, name: str, public: bool = False, file_size_limit: str = "50MB") -> Bucket:
        client = self._require_client()
        params = {"Bucket": name}
        # AWS rejects an explicit LocationConstraint for us-east-1
        if self._region not in ("auto", "us-east-1"):
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        try:
            client.create_bucket(**params)
        except ClientError as e:
            if _error_code(e) in BUCKET_EXISTS_CODES:
                raise BucketAlreadyExistsError(
                    f"The resource already exists: {name}", {"bucket": name}
                ) from e
            logger.error(f"Failed to create bucket {name}: {e}")
            raise RemoteError(_error_message(e), {"operation": "create_bucket", "bucket": name}) from e
        except BotoCoreError as e:
            logger.error(f"Failed to create bucket {name}: {e}")
            raise RemoteError(str(e), {"operation": "create_bucket", "bucket": name}) from e

        visibility = BucketVisibility.PUBLIC if public else BucketVisibility.PRIVATE
        self._apply_bucket_policies(name, visibility, file_size_limit)
        logger.info(f"Created bucket {name} ({visibility.value}, limit {file_size_limit})")
        return Bucket(name=name, visibility=visibility)

    def _apply_bucket_policies(self, name: str, visibility: BucketVisibility, file_size_limit: str) -> None:
        """
        Record visibility and size limit as tags, and open reads for public buckets.

        Not every S3-compatible provider supports tagging or bucket policies;
        the bucket exists either way, so failures here are logged only.
        """
        try:
            self._client.put_bucket_tagging(
                Bucket=name,
                Tagging={
                    "TagSet": [
                        {"Key": VISIBILITY_TAG, "Value": visibility.value},
                        {"Key": SIZE_LIMIT_TAG, "Value": file_size_limit},
                    ]
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not tag bucket {name}: {e}")

        if visibility != BucketVisibility.PUBLIC:
            return

        policy = {
            "Version": "2012-10-17",
            "Statement": [{
                "Effect": "Allow",
                "Principal": "*",
                "Action": "s3:GetObject",
                "Resource": f"arn:aws:s3:::{name}/*",
            }],
        }
        try:
            self._client.put_bucket_policy(Bucket=name, Policy=json.dumps(policy))
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not apply public-read policy to {name}: {e}")

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        limit: int = 1000,
        sort_by: str = "name",
    ) -> List[StorageObject]:
        client = self._require_client()
        try:
            response = client.list_objects_v2(
                Bucket=bucket,
                Prefix=prefix,
                Delimiter="/",
                MaxKeys=limit,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list objects in {bucket}: {e}")
            raise RemoteError(_error_message(e), {"operation": "list_objects", "bucket": bucket}) from e

        objects = []
        for entry in response.get("Contents", []):
            key = entry["Key"][len(prefix):]
            if not key:
                continue  # The prefix placeholder itself
            objects.append(StorageObject(
                key=key,
                size=entry.get("Size"),
                last_modified=entry.get("LastModified"),
            ))
        for entry in response.get("CommonPrefixes", []):
            objects.append(StorageObject(key=entry["Prefix"][len(prefix):]))

        if sort_by == "last_modified":
            objects.sort(key=lambda o: (o.last_modified is None, o.last_modified, o.key))
        else:
            objects.sort(key=lambda o: o.key)
        return objects[:limit]

    def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        client = self._require_client()
        try:
            url = client.generate_presigned_url(
                ClientMethod='get_object',
                Params={
                    'Bucket': bucket,
                    'Key': path,
                },
                ExpiresIn=expires_in
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteError(_error_message(e), {"operation": "create_signed_url", "path": path}) from e

        logger.debug(f"Generated signed read URL for {bucket}/{path} (expires in {expires_in}s)")
        return url

    def get_public_url(self, bucket: str, path: str) -> str:
        base = self._public_url or self._endpoint
        if not base:
            return ""
        return f"{base}/{quote(bucket)}/{quote(path)}"

    def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: str = "max-age=3600",
        overwrite: bool = False,
    ) -> str:
        client = self._require_client()
        params = {
            "Bucket": bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
            "CacheControl": cache_control,
        }
        if not overwrite:
            # Conditional write: the service rejects the PUT if the key exists
            params["IfNoneMatch"] = "*"

        try:
            client.put_object(**params)
        except ClientError as e:
            if _error_code(e) == "PreconditionFailed":
                raise RemoteError(
                    f"The resource already exists: {key}", {"bucket": bucket, "key": key}
                ) from e
            raise RemoteError(_error_message(e), {"operation": "upload", "bucket": bucket, "key": key}) from e
        except BotoCoreError as e:
            raise RemoteError(str(e), {"operation": "upload", "bucket": bucket, "key": key}) from e

        logger.debug(f"Uploaded {key} to {bucket} ({len(data)} bytes)")
        return key
